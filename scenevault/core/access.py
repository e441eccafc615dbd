"""
Access control gate

Every store decides who may see or change a record through these
predicates. Writes require literal ownership; collaborator roles are
recorded but never consulted here.
"""

from typing import Any, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from scenevault.core.exceptions import AccessDeniedError, UnauthenticatedError
from scenevault.models.collaborator import Collaborator
from scenevault.models.project import Project


def is_authenticated(caller_id: Optional[UUID]) -> bool:
    """True iff an identity was resolved for the request"""
    return caller_id is not None


def is_owner(record: Any, caller_id: Optional[UUID]) -> bool:
    """True iff the caller created the record"""
    return caller_id is not None and record.user_id == caller_id


def is_collaborator(db: Session, project_id: UUID, caller_id: Optional[UUID]) -> bool:
    """True iff the caller has a collaborator row on the project, whatever its role"""
    if caller_id is None:
        return False

    row = db.query(Collaborator.id).filter(
        Collaborator.project_id == project_id,
        Collaborator.user_id == caller_id
    ).first()
    return row is not None


def can_read(db: Session, project: Project, caller_id: Optional[UUID]) -> bool:
    """
    Project read rule

    Args:
        db: Database session
        project: Project being read
        caller_id: Resolved caller, or None

    Returns:
        bool: True for the owner, any collaborator, or any authenticated
        caller when the project is public
    """
    if not is_authenticated(caller_id):
        return False

    return (
        is_owner(project, caller_id)
        or bool(project.is_public)
        or is_collaborator(db, project.id, caller_id)
    )


def can_write(record: Any, caller_id: Optional[UUID]) -> bool:
    """Write rule for projects, models and materials: ownership only"""
    return is_owner(record, caller_id)


def require_authenticated(caller_id: Optional[UUID]) -> UUID:
    """Return the caller id or raise UnauthenticatedError"""
    if not is_authenticated(caller_id):
        raise UnauthenticatedError()
    return caller_id


def require_owner(record: Any, caller_id: Optional[UUID], resource: str):
    """
    Return the record if the caller may write it

    Raises:
        AccessDeniedError: if the record is None or owned by someone else
    """
    if record is None or not can_write(record, caller_id):
        raise AccessDeniedError(resource)
    return record
