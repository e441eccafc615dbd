"""
Material API endpoints
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from scenevault.database import get_db
from scenevault.api.deps import get_caller_id, get_change_feed
from scenevault.schemas.material import MaterialCreate, MaterialUpdate, MaterialResponse
from scenevault.services.change_feed import ChangeFeed
from scenevault.services.material_service import MaterialService
from scenevault.storage import StorageBackend, get_storage

router = APIRouter(tags=["materials"])


def get_material_service(
    db: Session = Depends(get_db),
    storage: StorageBackend = Depends(get_storage),
    feed: ChangeFeed = Depends(get_change_feed)
) -> MaterialService:
    return MaterialService(db, storage, feed)


@router.get("/projects/{project_id}/materials", response_model=List[MaterialResponse])
async def list_materials(
    project_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: MaterialService = Depends(get_material_service)
):
    return service.list_materials(caller_id, project_id)


@router.post(
    "/projects/{project_id}/materials",
    response_model=MaterialResponse,
    status_code=status.HTTP_201_CREATED
)
async def add_material(
    project_id: UUID,
    material: MaterialCreate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: MaterialService = Depends(get_material_service)
):
    return service.add_material(caller_id, project_id, material)


@router.patch("/materials/{material_id}", response_model=MaterialResponse)
async def update_material(
    material_id: UUID,
    material_update: MaterialUpdate,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: MaterialService = Depends(get_material_service)
):
    return service.update_material(caller_id, material_id, material_update)


@router.delete("/materials/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_material(
    material_id: UUID,
    caller_id: Optional[UUID] = Depends(get_caller_id),
    service: MaterialService = Depends(get_material_service)
):
    service.remove_material(caller_id, material_id)
    return None
