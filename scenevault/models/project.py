"""
Project Model - Top-level scene container
"""

from sqlalchemy import Column, String, Text, Boolean, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from scenevault.database import Base, utcnow


class Project(Base):
    """
    Project model - one editable 3D scene

    Attributes:
        id: Unique project identifier (UUID)
        user_id: Owner, the only user allowed to mutate the project
        name: Project name
        description: Optional description
        scene_data: Serialized JSON scene configuration (camera, lighting,
            environment preset, grid). Stored verbatim, never parsed here.
        thumbnail: Optional asset reference for the preview image
        is_public: Readable by any authenticated caller when true
        last_modified: Refreshed on every mutation, drives list ordering
        created_at: Project creation timestamp

    Cascade Delete:
        - Models and materials are removed by ProjectService.delete_project
          in the same transaction; no ORM relationship links them
    """

    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    scene_data = Column(Text, nullable=False)
    thumbnail = Column(String(255))
    is_public = Column(Boolean, default=False, index=True)

    last_modified = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, user_id={self.user_id})>"
