"""
Collaborator management

Collaborator rows grant read access to a private project. The role is
stored for the front-end's benefit; no write path looks at it.
"""

from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from scenevault.core.access import can_read, require_authenticated, require_owner
from scenevault.core.exceptions import AccessDeniedError, DuplicateError, NotFoundError
from scenevault.database import utcnow
from scenevault.models.collaborator import Collaborator
from scenevault.models.project import Project
from scenevault.models.user import User
from scenevault.services.change_feed import ChangeFeed

logger = logging.getLogger(__name__)


class CollaboratorService:
    """Invite, list and remove project collaborators"""

    def __init__(self, db: Session, feed: Optional[ChangeFeed] = None):
        self.db = db
        self.feed = feed

    def _get_project(self, project_id: UUID) -> Optional[Project]:
        return self.db.query(Project).filter(Project.id == project_id).first()

    def list_collaborators(self, caller_id: Optional[UUID], project_id: UUID) -> List[Collaborator]:
        """
        List a project's collaborators

        Raises:
            AccessDeniedError: project missing or not readable by the caller
        """
        project = self._get_project(project_id)
        if project is None or not can_read(self.db, project, caller_id):
            raise AccessDeniedError("Project")

        return self.db.query(Collaborator).filter(
            Collaborator.project_id == project_id
        ).order_by(Collaborator.joined_at).all()

    def add_collaborator(
        self,
        caller_id: Optional[UUID],
        project_id: UUID,
        user_id: UUID,
        role: str = "viewer"
    ) -> Collaborator:
        """
        Grant a user read access to a project

        Args:
            caller_id: Must own the project
            project_id: Project to share
            user_id: Invited user
            role: owner, editor or viewer (recorded only)

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project missing or not owned by the caller
            NotFoundError: invited user does not exist
            DuplicateError: user already owns or collaborates on the project
        """
        require_authenticated(caller_id)
        project = require_owner(self._get_project(project_id), caller_id, "Project")

        if self.db.query(User.id).filter(User.id == user_id).first() is None:
            raise NotFoundError("User not found")

        if user_id == project.user_id:
            raise DuplicateError("User already owns this project")

        existing = self.db.query(Collaborator).filter(
            Collaborator.project_id == project_id,
            Collaborator.user_id == user_id
        ).first()
        if existing:
            raise DuplicateError("User is already a collaborator on this project")

        collaborator = Collaborator(
            project_id=project_id,
            user_id=user_id,
            role=role,
            invited_by=caller_id,
            joined_at=utcnow()
        )

        self.db.add(collaborator)
        self.db.commit()
        self.db.refresh(collaborator)

        logger.info(f"Added {role} {user_id} to project {project_id}")
        if self.feed is not None:
            self.feed.publish("collaborator.added", project_id, collaborator.id, caller_id)
        return collaborator

    def remove_collaborator(self, caller_id: Optional[UUID], project_id: UUID, user_id: UUID) -> None:
        """
        Revoke a user's collaborator row

        Raises:
            UnauthenticatedError: no caller
            AccessDeniedError: project missing, not owned by the caller,
                or the user is not a collaborator
        """
        require_authenticated(caller_id)
        require_owner(self._get_project(project_id), caller_id, "Project")

        collaborator = self.db.query(Collaborator).filter(
            Collaborator.project_id == project_id,
            Collaborator.user_id == user_id
        ).first()
        if collaborator is None:
            raise AccessDeniedError("Collaborator")

        collaborator_id = collaborator.id
        self.db.delete(collaborator)
        self.db.commit()

        logger.info(f"Removed collaborator {user_id} from project {project_id}")
        if self.feed is not None:
            self.feed.publish("collaborator.removed", project_id, collaborator_id, caller_id)
