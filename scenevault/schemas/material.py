"""
Pydantic Schemas for Material endpoints
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Optional
from datetime import datetime
from uuid import UUID


class MaterialCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    material_data: str = Field(..., description="Serialized JSON of PBR properties")
    texture_ids: Optional[Dict[str, str]] = Field(None, description="Texture slot -> asset reference")


class MaterialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    material_data: Optional[str] = None
    texture_ids: Optional[Dict[str, str]] = None


class MaterialResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    project_id: UUID
    user_id: UUID
    name: str
    material_data: str
    texture_ids: Optional[Dict[str, str]] = None
    texture_urls: Dict[str, Optional[str]] = Field(default_factory=dict, description="Texture slot -> resolved URL")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
