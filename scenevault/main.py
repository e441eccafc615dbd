"""
SceneVault API - FastAPI application entry point
Persistence and sharing backend for a browser 3D scene editor
"""

import logging

from scenevault.config import settings

# Configure logging before anything else logs
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(levelname)s:%(name)s:%(message)s"
)

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from scenevault.database import create_tables
from scenevault.middleware.rate_limiter import setup_rate_limiting
from scenevault.utils.error_handlers import setup_error_handlers

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Scene persistence, asset storage and sharing for 3D model editing",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "authentication", "description": "User registration and API key management"},
        {"name": "projects", "description": "Projects, upload targets and change events"},
        {"name": "models", "description": "Model placements within a project"},
        {"name": "materials", "description": "Project material catalog"},
        {"name": "collaborators", "description": "Project sharing"},
        {"name": "storage", "description": "Direct uploads and asset downloads"}
    ]
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_rate_limiting(app)
setup_error_handlers(app)


@app.on_event("startup")
async def startup_event():
    """Initialize database tables on startup"""
    create_tables()
    logger.info(f"{settings.APP_NAME} v{settings.APP_VERSION} started ({settings.ENVIRONMENT})")
    logger.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    logger.info(f"API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs")


@app.get("/")
async def root():
    """Health check endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "healthy"
    }


@app.get("/health")
async def health_check():
    """Detailed health check"""
    from scenevault.api.deps import get_change_feed

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "storage": settings.STORAGE_BACKEND,
        "change_feed": "available" if get_change_feed().available else "disabled"
    }


# Import and register routers
from scenevault.api import auth, projects, models, materials, collaborators, storage

app.include_router(auth.router, prefix="/api/v1")
app.include_router(projects.router, prefix="/api/v1")
app.include_router(models.router, prefix="/api/v1")
app.include_router(materials.router, prefix="/api/v1")
app.include_router(collaborators.router, prefix="/api/v1")
app.include_router(storage.router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "scenevault.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD
    )
