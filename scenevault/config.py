"""
Configuration management for SceneVault API
Uses pydantic-settings for environment variable validation
"""

from pydantic_settings import BaseSettings
from pydantic import model_validator
from typing import List
import os


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Database (PostgreSQL in deployment, SQLite file for local development)
    DATABASE_URL: str = "sqlite:///./scenevault.db"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Security (set via environment in production)
    SECRET_KEY: str = "change-me"
    API_KEY_PREFIX: str = "sv_"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Application
    APP_NAME: str = "SceneVault"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"  # development or production
    PUBLIC_BASE_URL: str = "http://localhost:8000"  # Used to build local upload/download URLs

    # Storage
    STORAGE_BACKEND: str = "local"  # "local" or "s3"
    UPLOAD_DIR: str = "./uploads"
    MAX_UPLOAD_SIZE: int = 200 * 1024 * 1024  # 200MB, large GLB scenes are common
    UPLOAD_URL_EXPIRY: int = 3600  # Upload target lifetime in seconds
    ASSET_URL_EXPIRY: int = 3600  # Download URL lifetime in seconds (S3 only)

    # S3 Storage (if STORAGE_BACKEND="s3")
    S3_BUCKET_NAME: str = "scenevault-assets"
    S3_ACCESS_KEY_ID: str = ""  # Optional: uses AWS credentials if empty
    S3_SECRET_ACCESS_KEY: str = ""  # Optional: uses AWS credentials if empty
    S3_REGION: str = "us-east-1"
    S3_ENDPOINT_URL: str = ""  # Optional: for MinIO, DigitalOcean Spaces, etc.

    # Redis change feed
    REDIS_URL: str = "redis://localhost:6379/0"
    CHANGE_FEED_ENABLED: bool = True

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_UPLOAD: str = "60/hour"
    RATE_LIMIT_AUTH: str = "5/minute"

    @model_validator(mode='after')
    def detect_docker_environment(self):
        """
        Detect if running inside Docker container and adjust URLs accordingly

        Replacements:
        - Host: Use localhost (connects via exposed ports)
        - Docker container: Use service names (connects via Docker network)
          - localhost:5432 → postgres:5432 (PostgreSQL)
          - localhost:6379 → redis:6379 (Redis)

        Detection method: Check for /.dockerenv file (created by Docker)
        """
        if not os.path.exists('/.dockerenv'):
            return self

        if 'localhost' in self.DATABASE_URL:
            self.DATABASE_URL = self.DATABASE_URL.replace('localhost', 'postgres')
            print(f"[Docker detected] Database URL adjusted to use service name 'postgres'")

        if 'localhost' in self.REDIS_URL:
            self.REDIS_URL = self.REDIS_URL.replace('localhost', 'redis')
            print(f"[Docker detected] Redis URL adjusted to use service name 'redis'")

        return self

    class Config:
        env_file = ".env"
        case_sensitive = True


# Global settings instance
settings = Settings()


# Scene configuration written into every new project
DEFAULT_SCENE = {
    "camera": {"position": [5, 5, 5], "target": [0, 0, 0]},
    "lighting": {"intensity": 1, "color": "#ffffff"},
    "environment": "studio",
    "grid": {"visible": True, "size": 10},
}

# Identity placement for new models
DEFAULT_POSITION = [0.0, 0.0, 0.0]
DEFAULT_ROTATION = [0.0, 0.0, 0.0]
DEFAULT_SCALE = [1.0, 1.0, 1.0]
