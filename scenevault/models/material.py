"""
Material Model - Reusable PBR material definitions
"""

from sqlalchemy import Column, String, Text, ForeignKey, JSON, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.mutable import MutableDict
import uuid

from scenevault.database import Base, utcnow


class Material(Base):
    """
    Material model - named PBR definition catalogued per project

    Attributes:
        id: Unique material identifier (UUID)
        project_id: Owning project
        user_id: Creator
        name: Material name
        material_data: Serialized JSON of PBR properties
        texture_ids: Optional mapping of texture slot (e.g. "map",
            "normalMap") to asset reference
        created_at: Creation timestamp
        updated_at: Last modification timestamp

    Models carry their own inline overrides and never point at a Material.
    """

    __tablename__ = "materials"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    project_id = Column(UUID(as_uuid=True), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    material_data = Column(Text, nullable=False)
    texture_ids = Column(MutableDict.as_mutable(JSON))  # MutableDict tracks in-place changes

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    def __repr__(self):
        return f"<Material(id={self.id}, name={self.name}, project_id={self.project_id})>"
