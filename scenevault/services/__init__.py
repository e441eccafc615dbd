"""
Service layer

Each store is constructed per request with a database session, the
storage backend and the change feed. Services raise SceneVault
exceptions; routers never check ownership themselves.
"""

from scenevault.services.change_feed import ChangeFeed
from scenevault.services.project_service import ProjectService
from scenevault.services.model_service import ModelService
from scenevault.services.material_service import MaterialService
from scenevault.services.collaborator_service import CollaboratorService

__all__ = ["ChangeFeed", "ProjectService", "ModelService", "MaterialService", "CollaboratorService"]
