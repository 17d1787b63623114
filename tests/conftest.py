"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database and HTTP client fixtures are in tests/integration/conftest.py.
"""

import os
import tempfile

# Set environment before any app imports
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-that-is-at-least-32-characters")
os.environ.setdefault("IMAGE_STORAGE_BACKEND", "local")
os.environ.setdefault("LOCAL_IMAGE_DIR", os.path.join(tempfile.gettempdir(), "atogato-test-media"))

# ruff: noqa: E402 - Imports must be after env var setup
from unittest.mock import AsyncMock

import pytest

from src.atogato.core.config import get_settings
from src.atogato.schemas.auth import Principal
from src.atogato.services import ProjectService
from tests.fakes import FakeImageStore, InMemoryProjectRepository

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()

OWNER_ID = "alice"
OTHER_ID = "bob"


@pytest.fixture
def owner() -> Principal:
    """Principal that owns the projects created in a test."""
    return Principal(id=OWNER_ID)


@pytest.fixture
def stranger() -> Principal:
    """Authenticated principal that owns nothing."""
    return Principal(id=OTHER_ID)


@pytest.fixture
def image_store() -> FakeImageStore:
    """In-memory image store that records every upload."""
    return FakeImageStore()


@pytest.fixture
def project_repo() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def project_service(
    project_repo: InMemoryProjectRepository,
    image_store: FakeImageStore,
    mock_session: AsyncMock,
) -> ProjectService:
    """ProjectService wired to in-memory collaborators."""
    return ProjectService(project_repo, image_store, mock_session, max_image_bytes=1024)
