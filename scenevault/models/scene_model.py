"""
SceneModel Model - A placed 3D asset inside a project
"""

from sqlalchemy import Column, String, Text, Boolean, BigInteger, ForeignKey, JSON, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from scenevault.database import Base, utcnow


class SceneModel(Base):
    """
    Model placement - one uploaded asset positioned in a project's scene

    Attributes:
        id: Unique placement identifier (UUID)
        project_id: Owning project (checked for existence at creation only)
        user_id: Creator, the only user allowed to mutate the placement

        name: Display name
        file_id: Asset reference resolved through the storage backend
        file_type: Caller-reported format (gltf, glb, obj, fbx, ...)
        file_size: Caller-reported size in bytes

        position, rotation, scale: Numeric lists, normally [x, y, z]
        visible: Whether the front-end renders the placement
        materials: Optional serialized JSON of PBR overrides

        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "models"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Asset
    name = Column(String(255), nullable=False)
    file_id = Column(String(255), nullable=False)
    file_type = Column(String(50), nullable=False)
    file_size = Column(BigInteger, nullable=False)

    # Transform
    position = Column(JSON, nullable=False)
    rotation = Column(JSON, nullable=False)
    scale = Column(JSON, nullable=False)

    visible = Column(Boolean, nullable=False, default=True)
    materials = Column(Text)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    def __repr__(self):
        return f"<SceneModel(id={self.id}, name={self.name}, project_id={self.project_id})>"
