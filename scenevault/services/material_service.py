"""
Material Store

Named PBR materials catalogued per project. Models never reference them;
they carry their own inline overrides.
"""

from typing import Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from scenevault.config import settings
from scenevault.core.access import is_authenticated, require_authenticated, require_owner
from scenevault.core.exceptions import AccessDeniedError
from scenevault.models.material import Material
from scenevault.models.project import Project
from scenevault.schemas.material import MaterialCreate, MaterialUpdate, MaterialResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class MaterialService:
    """Material CRUD with the same ownership discipline as ModelService"""

    def __init__(self, db: Session, storage: StorageBackend, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.storage = storage
        self.feed = feed

    def _texture_urls(self, texture_ids: Optional[Dict[str, str]]) -> Dict[str, Optional[str]]:
        return {
            slot: self.storage.get_url(storage_id, expires_in=settings.ASSET_URL_EXPIRY)
            for slot, storage_id in (texture_ids or {}).items()
        }

    def _to_response(self, material: Material) -> MaterialResponse:
        response = MaterialResponse.model_validate(material)
        response.texture_urls = self._texture_urls(material.texture_ids)
        return response

    def _publish(self, event_type: str, project_id: UUID, material_id: UUID, caller_id: UUID):
        if self.feed is not None:
            self.feed.publish(event_type, project_id, material_id, caller_id)

    def list_materials(self, caller_id: Optional[UUID], project_id: UUID) -> List[MaterialResponse]:
        """List a project's materials; empty when unauthenticated"""
        if not is_authenticated(caller_id):
            return []

        materials = self.db.query(Material).filter(
            Material.project_id == project_id
        ).order_by(Material.created_at).all()

        return [self._to_response(material) for material in materials]

    def add_material(self, caller_id: Optional[UUID], project_id: UUID, data: MaterialCreate) -> MaterialResponse:
        """
        Add a material to a project's catalog

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project does not exist
        """
        owner_id = require_authenticated(caller_id)

        exists = self.db.query(Project.id).filter(Project.id == project_id).first()
        if exists is None:
            raise AccessDeniedError("Project")

        material = Material(
            project_id=project_id,
            user_id=owner_id,
            name=data.name,
            material_data=data.material_data,
            texture_ids=data.texture_ids
        )

        self.db.add(material)
        self.db.commit()
        self.db.refresh(material)

        logger.info(f"Added material {material.id} to project {project_id}")
        self._publish("material.added", project_id, material.id, owner_id)
        return self._to_response(material)

    def update_material(
        self,
        caller_id: Optional[UUID],
        material_id: UUID,
        update: MaterialUpdate
    ) -> MaterialResponse:
        """
        Apply the provided fields to a material

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: material missing or not created by the caller
        """
        require_authenticated(caller_id)
        material = self.db.query(Material).filter(Material.id == material_id).first()
        require_owner(material, caller_id, "Material")

        for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(material, field, value)

        self.db.commit()
        self.db.refresh(material)

        self._publish("material.updated", material.project_id, material.id, caller_id)
        return self._to_response(material)

    def remove_material(self, caller_id: Optional[UUID], material_id: UUID) -> None:
        """Hard-delete a material; same ownership check as update"""
        require_authenticated(caller_id)
        material = self.db.query(Material).filter(Material.id == material_id).first()
        require_owner(material, caller_id, "Material")

        project_id = material.project_id
        self.db.delete(material)
        self.db.commit()

        logger.info(f"Removed material {material_id}")
        self._publish("material.removed", project_id, material_id, caller_id)
