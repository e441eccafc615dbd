"""
Model placement API endpoints
Thin HTTP layer over ModelService
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from scenevault.database import get_db
from scenevault.api.deps import get_caller_id, get_change_feed
from scenevault.schemas.scene_model import ModelCreate, ModelUpdate, ModelResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.services.model_service import ModelService
from scenevault.storage import StorageBackend, get_storage

router = APIRouter(tags=["models"])


def get_model_service(
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    feed: ChangeFeed = Depends(get_change_feed)
) -> ModelService:
    return ModelService(db, storage, feed)


@router.get("/projects/{project_id}/models", response_model=List[ModelResponse])
async def list_models(
    project_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ModelService = Depends(get_model_service)
):
    """
    List a project's model placements with resolved file URLs

    Anonymous callers get an empty list.
    """
    return service.list_models(caller_id, project_id)


@router.post(
    "/projects/{project_id}/models",
    response_model=ModelResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_model(
    project_id: UUID,
    model: ModelCreate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ModelService = Depends(get_model_service)
):
    """
    Place an uploaded asset in a project

    Transform defaults: position [0,0,0], rotation [0,0,0], scale [1,1,1].
    """
    return service.add_model(caller_id, project_id, model)


@router.patch("/models/{model_id}", response_model=ModelResponse)
async def update_model(
    model_id: UUID,
    model_update: ModelUpdate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ModelService = Depends(get_model_service)
):
    """Update a placement (creator only, 404 otherwise)"""
    return service.update_model(caller_id, model_id, model_update)


@router.delete("/models/{model_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_model(
    model_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: ModelService = Depends(get_model_service)
):
    service.remove_model(caller_id, model_id)
    return None
