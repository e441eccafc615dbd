"""
Pydantic Schemas for Project endpoints
Request/Response validation
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class ProjectCreate(BaseModel):
    """Schema for creating a new project"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, description="Optional description")


class ProjectUpdate(BaseModel):
    """Schema for updating a project (every field optional, omitted fields are left alone)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    scene_data: Optional[str] = Field(None, description="Serialized JSON scene configuration")
    thumbnail: Optional[str] = Field(None, max_length=255, description="Asset reference of the preview image")
    is_public: Optional[bool] = None


class ProjectResponse(BaseModel):
    """Schema for project responses"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    name: str
    description: Optional[str] = None
    scene_data: str
    thumbnail: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, description="Resolved preview URL, null without a thumbnail")
    is_public: bool = False
    last_modified: datetime
    created_at: Optional[datetime] = None


class UploadTargetResponse(BaseModel):
    """Capability for one direct upload to the blob store"""
    upload_url: str = Field(..., description="URL the client sends the file to")
    storage_id: str = Field(..., description="Asset reference to pass to add_model afterwards")
    method: str = Field("PUT", description="HTTP method for the upload")
    expires_in: int = Field(..., description="Seconds until the URL stops working")
