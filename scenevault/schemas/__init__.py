"""
Pydantic Schemas for Request/Response Validation

Project Schemas:
    - ProjectCreate: POST /projects
    - ProjectUpdate: PATCH /projects/{id}
    - ProjectResponse: Single project with resolved thumbnail URL
    - UploadTargetResponse: POST /projects/upload-target

Model Schemas:
    - ModelCreate: POST /projects/{id}/models
    - ModelUpdate: PATCH /models/{id}
    - ModelResponse: Placement with resolved file URL

Material Schemas:
    - MaterialCreate, MaterialUpdate, MaterialResponse

Collaborator Schemas:
    - CollaboratorCreate, CollaboratorResponse
"""

from scenevault.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    UploadTargetResponse,
)

from scenevault.schemas.scene_model import (
    ModelCreate,
    ModelUpdate,
    ModelResponse,
)

from scenevault.schemas.material import (
    MaterialCreate,
    MaterialUpdate,
    MaterialResponse,
)

from scenevault.schemas.collaborator import (
    CollaboratorCreate,
    CollaboratorResponse,
)

__all__ = [
    # Project schemas
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "UploadTargetResponse",
    # Model schemas
    "ModelCreate",
    "ModelUpdate",
    "ModelResponse",
    # Material schemas
    "MaterialCreate",
    "MaterialUpdate",
    "MaterialResponse",
    # Collaborator schemas
    "CollaboratorCreate",
    "CollaboratorResponse",
]
