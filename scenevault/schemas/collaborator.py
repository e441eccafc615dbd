"""
Pydantic Schemas for Collaborator endpoints
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal, Optional
from datetime import datetime
from uuid import UUID


class CollaboratorCreate(BaseModel):
    """Invite a user to a project"""
    user_id: UUID
    role: Literal["owner", "editor", "viewer"] = Field("viewer", description="Recorded role")


class CollaboratorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: UUID
    user_id: UUID
    role: str
    invited_by: UUID
    joined_at: Optional[datetime] = None
