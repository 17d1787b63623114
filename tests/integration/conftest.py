"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database shared through a
StaticPool, with the schema created from the SQLModel metadata. Images go
to an in-memory store.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from src.atogato.api.dependencies import get_db_session
from src.atogato.core.db import get_session
from src.atogato.core.security import create_access_token
from src.atogato.core.storage import get_image_store
from src.atogato.main import create_app
from src.atogato.models import Project
from tests.factories import ProjectFactory
from tests.fakes import FakeImageStore


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create a fresh in-memory database with the projects table."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for seeding and inspecting rows.

    Tests must call ``await session.commit()`` to make seeded rows visible
    to the app.
    """
    async with get_session(engine) as session:
        yield session


@pytest.fixture
async def client(
    engine: AsyncEngine, image_store: FakeImageStore
) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app with database and image store overridden."""
    app = create_app()

    async def override_db_session() -> AsyncGenerator[AsyncSession]:
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_image_store] = lambda: image_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for the given principal id."""

    def _headers(principal_id: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(principal_id)}"}

    return _headers


@pytest.fixture
def seed_projects(db_session: AsyncSession) -> Callable:
    """Insert projects built by ProjectFactory and commit them."""

    async def _seed(*projects: Project) -> list[Project]:
        for project in projects:
            db_session.add(project)
        await db_session.commit()
        return list(projects)

    return _seed


@pytest.fixture
async def owned_project(seed_projects) -> Project:
    """A single project owned by ``alice``."""
    (project,) = await seed_projects(ProjectFactory.build(owner_id="alice"))
    return project
