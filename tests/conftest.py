"""
Pytest configuration and shared fixtures for SceneVault tests

Provides:
- In-memory SQLite database per test
- Test users and API keys
- Local storage in a temporary directory
- Mock Redis connection and change feed
- Seeded projects, models and materials
"""

import os
import tempfile

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("CHANGE_FEED_ENABLED", "false")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="scenevault-test-"))
os.environ.setdefault("PUBLIC_BASE_URL", "http://testserver")
os.environ.setdefault("SECRET_KEY", "test-secret")

import json
import pytest
from typing import Callable, Dict, Generator
from unittest.mock import MagicMock
from uuid import uuid4
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from scenevault.config import DEFAULT_SCENE
from scenevault.database import Base
from scenevault.core.security import generate_api_key
from scenevault.models import User, APIKey, Project, SceneModel, Material, Collaborator
from scenevault.services.change_feed import ChangeFeed
from scenevault.storage.local import LocalStorage


@pytest.fixture
def db_engine():
    """Fresh in-memory SQLite database for each test (fast, isolated)"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(db_session) -> Callable[..., User]:
    """Factory creating active users with a throwaway password hash"""
    def _make_user(email: str = None, is_active: bool = True) -> User:
        user = User(
            id=uuid4(),
            email=email or f"user-{uuid4().hex[:8]}@example.com",
            hashed_password="$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/LewY5GyWuL7l2JhSa",
            is_active=is_active
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def owner(make_user) -> User:
    """User who owns the seeded project"""
    return make_user("owner@example.com")


@pytest.fixture
def stranger(make_user) -> User:
    """User with no relationship to the seeded project"""
    return make_user("stranger@example.com")


@pytest.fixture
def editor(make_user) -> User:
    """User added to the seeded project with the editor role by tests that need it"""
    return make_user("editor@example.com")


@pytest.fixture
def project(db_session, owner) -> Project:
    """Private project owned by `owner`"""
    project = Project(
        id=uuid4(),
        user_id=owner.id,
        name="Living Room",
        description="Furniture layout",
        scene_data=json.dumps(DEFAULT_SCENE),
        is_public=False
    )
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def add_collaborator_row(db_session) -> Callable[..., Collaborator]:
    """Factory inserting a collaborator row directly"""
    def _add(project: Project, user: User, role: str = "viewer") -> Collaborator:
        row = Collaborator(
            project_id=project.id,
            user_id=user.id,
            role=role,
            invited_by=project.user_id
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _add


@pytest.fixture
def scene_model(db_session, project, owner) -> SceneModel:
    """Model placement created by the project owner"""
    model = SceneModel(
        id=uuid4(),
        project_id=project.id,
        user_id=owner.id,
        name="Sofa",
        file_id=uuid4().hex,
        file_type="glb",
        file_size=2048,
        position=[0.0, 0.0, 0.0],
        rotation=[0.0, 0.0, 0.0],
        scale=[1.0, 1.0, 1.0],
        visible=True
    )
    db_session.add(model)
    db_session.commit()
    db_session.refresh(model)
    return model


@pytest.fixture
def material(db_session, project, owner) -> Material:
    """Material in the project's catalog, created by the owner"""
    material = Material(
        id=uuid4(),
        project_id=project.id,
        user_id=owner.id,
        name="Oak",
        material_data=json.dumps({"color": "#8b5a2b", "roughness": 0.7, "metalness": 0.0}),
        texture_ids=None
    )
    db_session.add(material)
    db_session.commit()
    db_session.refresh(material)
    return material


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    """Local storage rooted in a per-test temporary directory"""
    return LocalStorage(base_path=str(tmp_path / "uploads"), public_base_url="http://testserver")


@pytest.fixture
def mock_redis():
    """Mock Redis connection for unit tests"""
    mock = MagicMock()
    mock.ping.return_value = True
    mock.publish.return_value = 1
    return mock


@pytest.fixture
def feed(mock_redis) -> ChangeFeed:
    """Enabled change feed publishing into mock Redis"""
    return ChangeFeed(redis_client=mock_redis, enabled=True)


@pytest.fixture
def api_key_for(db_session) -> Callable[..., str]:
    """Factory issuing a real API key for a user and returning the raw key"""
    def _issue(user: User, expires_at=None) -> str:
        api_key, key_hash = generate_api_key()
        db_session.add(APIKey(
            user_id=user.id,
            key_hash=key_hash,
            key_prefix=api_key[:15],
            name="Test Key",
            expires_at=expires_at
        ))
        db_session.commit()
        return api_key

    return _issue


@pytest.fixture
def auth_headers(api_key_for) -> Callable[[User], Dict[str, str]]:
    """Factory building Authorization headers for a user"""
    def _headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {api_key_for(user)}"}

    return _headers


@pytest.fixture
def client(db_session, storage, feed):
    """
    Test client wired to the per-test database, storage and change feed

    Identity is resolved from real API keys (see auth_headers).
    """
    from fastapi.testclient import TestClient
    from scenevault.main import app
    from scenevault.database import get_db
    from scenevault.api.deps import get_change_feed
    from scenevault.storage import get_storage

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_change_feed] = lambda: feed

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for API endpoints"
    )
