"""
API Routes and Endpoints

Routers:
    - auth: Authentication (register, API keys)
    - projects: Project CRUD, upload targets, change events
    - models: Model placement CRUD
    - materials: Material CRUD
    - collaborators: Project sharing
    - storage: Direct uploads and asset downloads
"""

from scenevault.api import auth, projects, models, materials, collaborators, storage

__all__ = ["auth", "projects", "models", "materials", "collaborators", "storage"]
