"""
Project Store

Owns project records and the cascade that removes a project's models and
materials. Every operation takes the resolved caller id (None when the
request carried no usable identity).
"""

from typing import List, Optional
from uuid import UUID
import json
import logging

from sqlalchemy.orm import Session

from scenevault.config import settings, DEFAULT_SCENE
from scenevault.core.access import can_read, require_authenticated, require_owner, is_authenticated
from scenevault.core.exceptions import AccessDeniedError
from scenevault.database import utcnow
from scenevault.models.project import Project
from scenevault.models.scene_model import SceneModel
from scenevault.models.material import Material
from scenevault.models.collaborator import Collaborator
from scenevault.schemas.project import ProjectUpdate, ProjectResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.storage.base import StorageBackend, UploadTarget

logger = logging.getLogger(__name__)


class ProjectService:
    """Project CRUD, cascade delete and upload capabilities"""

    def __init__(self, db: Session, storage: StorageBackend, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.storage = storage
        self.feed = feed

    def _to_response(self, project: Project) -> ProjectResponse:
        response = ProjectResponse.model_validate(project)
        if project.thumbnail:
            response.thumbnail_url = self.storage.get_url(project.thumbnail, expires_in=settings.ASSET_URL_EXPIRY)
        return response

    def _publish(self, event_type: str, project_id: UUID, caller_id: UUID):
        if self.feed is not None:
            self.feed.publish(event_type, project_id, project_id, caller_id)

    def list_projects(self, caller_id: Optional[UUID]) -> List[ProjectResponse]:
        """
        List the caller's own projects, most recently modified first

        Args:
            caller_id: Resolved caller, or None

        Returns:
            List[ProjectResponse]: Empty when the caller is unauthenticated
        """
        if not is_authenticated(caller_id):
            return []

        projects = self.db.query(Project).filter(
            Project.user_id == caller_id
        ).order_by(Project.last_modified.desc()).all()

        return [self._to_response(project) for project in projects]

    def get_project(self, caller_id: Optional[UUID], project_id: UUID) -> ProjectResponse:
        """
        Get a project the caller may read

        Readable by the owner, any collaborator, or anyone when public.

        Raises:
            AccessDeniedError: project missing or not readable (same outcome)
        """
        project = self.db.query(Project).filter(Project.id == project_id).first()

        if project is None or not can_read(self.db, project, caller_id):
            raise AccessDeniedError("Project")

        return self._to_response(project)

    def create_project(
        self,
        caller_id: Optional[UUID],
        name: str,
        description: Optional[str] = None
    ) -> ProjectResponse:
        """
        Create a project with the default scene configuration

        Raises:
            UnauthenticatedError: no caller
        """
        owner_id = require_authenticated(caller_id)

        project = Project(
            user_id=owner_id,
            name=name,
            description=description,
            scene_data=json.dumps(DEFAULT_SCENE),
            is_public=False,
            last_modified=utcnow()
        )

        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)

        logger.info(f"Created project {project.id} for user {owner_id}")
        self._publish("project.created", project.id, owner_id)
        return self._to_response(project)

    def update_project(
        self,
        caller_id: Optional[UUID],
        project_id: UUID,
        update: ProjectUpdate
    ) -> ProjectResponse:
        """
        Apply the provided fields and refresh last_modified

        Only the owner may update; collaborators of any role are refused.

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project missing or not owned by the caller
        """
        require_authenticated(caller_id)
        project = self.db.query(Project).filter(Project.id == project_id).first()
        require_owner(project, caller_id, "Project")

        for field, value in update.model_dump(exclude_unset=True, exclude_none=True).items():
            setattr(project, field, value)
        project.last_modified = utcnow()

        self.db.commit()
        self.db.refresh(project)

        logger.info(f"Updated project {project.id}")
        self._publish("project.updated", project.id, caller_id)
        return self._to_response(project)

    def delete_project(self, caller_id: Optional[UUID], project_id: UUID) -> None:
        """
        Delete a project with all its models, materials and collaborator rows

        The cascade runs in one transaction: either everything is gone or
        nothing changed. Stored assets are left in the blob store.

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project missing or not owned by the caller
        """
        require_authenticated(caller_id)
        project = self.db.query(Project).filter(Project.id == project_id).first()
        require_owner(project, caller_id, "Project")

        try:
            model_count = self.db.query(SceneModel).filter(
                SceneModel.project_id == project_id
            ).delete(synchronize_session=False)

            material_count = self.db.query(Material).filter(
                Material.project_id == project_id
            ).delete(synchronize_session=False)

            self.db.query(Collaborator).filter(
                Collaborator.project_id == project_id
            ).delete(synchronize_session=False)

            self.db.delete(project)
            self.db.commit()
        except Exception:
            self.db.rollback()
            logger.error(f"Cascade delete of project {project_id} failed, rolled back")
            raise

        logger.info(
            f"Deleted project {project_id} with {model_count} models and {material_count} materials"
        )
        self._publish("project.deleted", project_id, caller_id)

    def generate_upload_target(self, caller_id: Optional[UUID]) -> UploadTarget:
        """
        Issue a single-use upload capability from the blob store

        Raises:
            UnauthenticatedError: no caller
        """
        owner_id = require_authenticated(caller_id)
        return self.storage.generate_upload_target(owner_id, expires_in=settings.UPLOAD_URL_EXPIRY)
