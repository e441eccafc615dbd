"""
SQLAlchemy Database Models

All models use UUID as primary key.
All timestamps are timezone-aware UTC, set on the Python side.

Models:
    - User: Authentication and user management
    - APIKey: API authentication tokens
    - Project: Scene container with serialized scene configuration
    - SceneModel: Placed 3D asset with transform and visibility
    - Material: Reusable PBR material definition
    - Collaborator: Read grant for a non-owner user

Relationships:
    User 1:N APIKey
    User 1:N Project
    Project 1:N SceneModel
    Project 1:N Material
    Project 1:N Collaborator

Cascade Deletes:
    - Delete Project → Delete all SceneModels and Materials (ProjectService)
    - Delete User → Delete all APIKeys
"""

from scenevault.models.user import User
from scenevault.models.api_key import APIKey
from scenevault.models.project import Project
from scenevault.models.scene_model import SceneModel
from scenevault.models.material import Material
from scenevault.models.collaborator import Collaborator

__all__ = ["User", "APIKey", "Project", "SceneModel", "Material", "Collaborator"]
