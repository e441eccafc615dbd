"""
Pydantic Schemas for Model endpoints
Request/Response validation
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class ModelCreate(BaseModel):
    """Schema for placing an uploaded asset into a project"""
    name: str = Field(..., min_length=1, max_length=255)
    file_id: str = Field(..., min_length=1, max_length=255, description="Asset reference from the upload")
    file_type: str = Field(..., min_length=1, max_length=50, description="gltf, glb, obj, fbx, ...")
    file_size: int = Field(..., ge=0, description="File size in bytes")
    position: Optional[List[float]] = None
    rotation: Optional[List[float]] = None
    scale: Optional[List[float]] = None


class ModelUpdate(BaseModel):
    """Schema for updating a placement (every field optional, vector lengths are not checked)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    position: Optional[List[float]] = None
    rotation: Optional[List[float]] = None
    scale: Optional[List[float]] = None
    visible: Optional[bool] = None
    materials: Optional[str] = Field(None, description="Serialized JSON of PBR overrides")


class ModelResponse(BaseModel):
    """Schema for model responses"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    user_id: UUID
    name: str
    file_id: str
    file_url: Optional[str] = Field(None, description="Resolved asset URL")
    file_type: str
    file_size: int
    position: List[float]
    rotation: List[float]
    scale: List[float]
    visible: bool
    materials: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
