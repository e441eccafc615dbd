"""
Collaborator API endpoints
Sharing a project grants read access only
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from scenevault.database import get_db
from scenevault.api.deps import get_caller_id, get_change_feed
from scenevault.schemas.collaborator import CollaboratorCreate, CollaboratorResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.services.collaborator_service import CollaboratorService

router = APIRouter(prefix="/projects/{project_id}/collaborators", tags=["collaborators"])


def get_collaborator_service(
    db: Session = Depends(get_db),
    feed: ChangeFeed = Depends(get_change_feed)
) -> CollaboratorService:
    return CollaboratorService(db, feed)


@router.get("", response_model=List[CollaboratorResponse])
async def list_collaborators(
    project_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: CollaboratorService = Depends(get_collaborator_service)
):
    """List collaborators of a project the caller can read"""
    return service.list_collaborators(caller_id, project_id)


@router.post("", response_model=CollaboratorResponse, status_code=status.HTTP_201_CREATED)
async def add_collaborator(
    project_id: UUID,
    collaborator: CollaboratorCreate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: CollaboratorService = Depends(get_collaborator_service)
):
    """
    Invite a user to a project (owner only)

    Raises:
        404 if the project is not the caller's or the user does not exist
        409 if the user already owns or collaborates on the project
    """
    return service.add_collaborator(caller_id, project_id, collaborator.user_id, collaborator.role)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_collaborator(
    project_id: UUID,
    user_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: CollaboratorService = Depends(get_collaborator_service)
):
    service.remove_collaborator(caller_id, project_id, user_id)
    return None
