"""
Project API endpoints
Thin HTTP layer over ProjectService
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import json
import logging

from scenevault.database import get_db
from scenevault.api.deps import get_caller_id, get_change_feed
from scenevault.core.exceptions import http_503_unavailable
from scenevault.middleware.rate_limiter import upload_rate_limit
from scenevault.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    UploadTargetResponse
)
from scenevault.services.change_feed import ChangeFeed
from scenevault.services.project_service import ProjectService
from scenevault.storage import StorageBackend, get_storage

router = APIRouter(prefix="/projects", tags=["projects"])
logger = logging.getLogger(__name__)


def get_project_service(
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    feed: ChangeFeed = Depends(get_change_feed)
) -> ProjectService:
    return ProjectService(db, storage, feed)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    List the caller's projects, most recently modified first

    Anonymous callers get an empty list rather than an error.
    """
    return service.list_projects(caller_id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    Create a project with the default scene configuration

    Raises:
        401 if no caller could be resolved
    """
    return service.create_project(caller_id, project.name, project.description)


@router.post("/upload-target", response_model=UploadTargetResponse)
@upload_rate_limit()
async def generate_upload_target(
    request: Request,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    Issue a single-use upload URL

    Upload the file to `upload_url`, then pass `storage_id` as `file_id`
    when adding the model.
    """
    target = service.generate_upload_target(caller_id)
    return UploadTargetResponse(
        upload_url=target.upload_url,
        storage_id=target.storage_id,
        method=target.method,
        expires_in=target.expires_in
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    Get a project owned by, shared with, or published to the caller

    Raises:
        404 if missing or not readable (indistinguishable)
    """
    return service.get_project(caller_id, project_id)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_update: ProjectUpdate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    Update project fields (owner only)

    Omitted fields are left untouched; last_modified is always refreshed.
    """
    return service.update_project(caller_id, project_id, project_update)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service)
):
    """
    Delete project with all its models and materials (owner only)

    Returns:
        None (204 No Content)
    """
    service.delete_project(caller_id, project_id)
    return None


@router.get("/{project_id}/events")
async def stream_project_events(
    project_id: UUID,
    request: Request,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ProjectService = Depends(get_project_service),
    feed: ChangeFeed = Depends(get_change_feed)
):
    """
    Server-Sent Events stream of changes to a readable project

    Each event is a JSON object with type, project_id, record_id,
    actor_id and at.

    Raises:
        404 if the project is missing or not readable
        503 if the change feed is unavailable
    """
    service.get_project(caller_id, project_id)

    if not feed.can_stream:
        raise http_503_unavailable("Change feed unavailable")

    async def event_stream():
        """Relay change events as SSE until the client disconnects"""
        async for event in feed.listen(project_id, is_disconnected=request.is_disconnected):
            yield f"data: {json.dumps(event)}\n\n"

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )
