# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides components wired to temporary storage and databases
# - Provides a controllable clock for expiry and modified-time tests
# - Provides a TestClient with dependency overrides for API tests
# =============================================================================

import os
import tempfile
from datetime import datetime, timedelta, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

_TEST_ROOT = tempfile.mkdtemp(prefix="filenest-tests-")

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-filenest")
os.environ.setdefault("JWT_EXPIRES_HOURS", "24")
os.environ.setdefault("STORAGE_PATH", os.path.join(_TEST_ROOT, "storage"))
os.environ.setdefault("DATABASE_PATH", os.path.join(_TEST_ROOT, "filenest.db"))
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from core.services import (
    AuthService,
    CredentialCodec,
    DirectoryLister,
    FileService,
    PathMediator,
    TokenService,
)
from lib.user_store import UserStore

TEST_SECRET = b"test-secret-key-for-filenest"


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)

    def timestamp(self) -> float:
        """Seconds since the epoch, for components that take a float clock."""
        return self.now.timestamp()


# =============================================================================
# Component Fixtures
# =============================================================================

@pytest.fixture
def clock():
    """Controllable clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def codec():
    """Credential codec."""
    return CredentialCodec()


@pytest.fixture
def tokens(clock):
    """Token service with a 24 hour lifetime on the fake clock."""
    return TokenService(secret=TEST_SECRET, expires_hours=24, clock=clock)


@pytest.fixture
def storage_root(tmp_path):
    """Empty storage root."""
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture
def paths(storage_root):
    """Path mediator rooted at the temporary storage root."""
    return PathMediator(storage_root)


@pytest.fixture
def store(tmp_path):
    """User store on a fresh SQLite file."""
    user_store = UserStore(tmp_path / "users.db")
    user_store.create_tables()
    yield user_store
    user_store.close()


@pytest.fixture
def lister():
    """Directory lister on the real clock."""
    return DirectoryLister()


@pytest.fixture
def auth_service(store, codec, tokens, paths):
    """Auth service wired to temporary collaborators."""
    return AuthService(store=store, codec=codec, tokens=tokens, paths=paths)


@pytest.fixture
def file_service(paths, lister):
    """File service wired to the temporary storage root."""
    return FileService(paths=paths, lister=lister)


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def client(store, tokens, paths):
    """TestClient with components replaced by the temporary fixtures."""
    from app.dependencies import get_path_mediator, get_token_service, get_user_store
    from app.main import app

    app.dependency_overrides[get_user_store] = lambda: store
    app.dependency_overrides[get_token_service] = lambda: tokens
    app.dependency_overrides[get_path_mediator] = lambda: paths

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def registered(client):
    """Register alice123 and return (client, auth headers)."""
    response = client.post(
        "/api/v1/auth/register",
        json={"username": "Alice123", "password": "longpassword"},
    )
    assert response.status_code == 201
    token = response.json()["access_token"]
    return client, {"Authorization": f"Bearer {token}"}
