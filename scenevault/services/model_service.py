"""
Model Store

Per-project model placements: an uploaded asset plus its transform,
visibility and inline material overrides.
"""

from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from scenevault.config import settings, DEFAULT_POSITION, DEFAULT_ROTATION, DEFAULT_SCALE
from scenevault.core.access import is_authenticated, require_authenticated, require_owner
from scenevault.core.exceptions import AccessDeniedError
from scenevault.models.project import Project
from scenevault.models.scene_model import SceneModel
from scenevault.schemas.scene_model import ModelCreate, ModelUpdate, ModelResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class ModelService:
    """Model placement CRUD with creator-only writes"""

    def __init__(self, db: Session, storage: StorageBackend, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.storage = storage
        self.feed = feed

    def _to_response(self, model: SceneModel) -> ModelResponse:
        response = ModelResponse.model_validate(model)
        response.file_url = self.storage.get_url(model.file_id, expires_in=settings.ASSET_URL_EXPIRY)
        return response

    def _publish(self, event_type: str, project_id: UUID, model_id: UUID, caller_id: UUID):
        if self.feed is not None:
            self.feed.publish(event_type, project_id, model_id, caller_id)

    def list_models(self, caller_id: Optional[UUID], project_id: UUID) -> List[ModelResponse]:
        """
        List every placement in a project with resolved asset URLs

        Any authenticated caller may list; read access to the parent
        project is not checked here.

        Returns:
            List[ModelResponse]: Empty when the caller is unauthenticated
        """
        if not is_authenticated(caller_id):
            return []

        models = self.db.query(SceneModel).filter(
            SceneModel.project_id == project_id
        ).order_by(SceneModel.created_at).all()

        return [self._to_response(model) for model in models]

    def add_model(self, caller_id: Optional[UUID], project_id: UUID, data: ModelCreate) -> ModelResponse:
        """
        Place an uploaded asset into a project

        Omitted transform components default to identity placement. The
        parent project must exist, but the caller does not need access
        to it.

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project does not exist
        """
        owner_id = require_authenticated(caller_id)

        exists = self.db.query(Project.id).filter(Project.id == project_id).first()
        if exists is None:
            raise AccessDeniedError("Project")

        model = SceneModel(
            project_id=project_id,
            user_id=owner_id,
            name=data.name,
            file_id=data.file_id,
            file_type=data.file_type,
            file_size=data.file_size,
            position=data.position if data.position is not None else list(DEFAULT_POSITION),
            rotation=data.rotation if data.rotation is not None else list(DEFAULT_ROTATION),
            scale=data.scale if data.scale is not None else list(DEFAULT_SCALE),
            visible=True
        )

        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)

        logger.info(f"Added model {model.id} ({model.file_type}) to project {project_id}")
        self._publish("model.added", project_id, model.id, owner_id)
        return self._to_response(model)

    def update_model(self, caller_id: Optional[UUID], model_id: UUID, update: ModelUpdate) -> ModelResponse:
        """
        Apply the provided fields to a placement

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: model missing or not created by the caller
        """
        require_authenticated(caller_id)
        model = self.db.query(SceneModel).filter(SceneModel.id == model_id).first()
        require_owner(model, caller_id, "Model")

        for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(model, field, value)

        self.db.commit()
        self.db.refresh(model)

        self._publish("model.updated", model.project_id, model.id, caller_id)
        return self._to_response(model)

    def remove_model(self, caller_id: Optional[UUID], model_id: UUID) -> None:
        """
        Hard-delete a placement (the asset stays in the blob store)

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: model missing or not created by the caller
        """
        require_authenticated(caller_id)
        model = self.db.query(SceneModel).filter(SceneModel.id == model_id).first()
        require_owner(model, caller_id, "Model")

        project_id = model.project_id
        self.db.delete(model)
        self.db.commit()

        logger.info(f"Removed model {model_id}")
        self._publish("model.removed", project_id, model_id, caller_id)
