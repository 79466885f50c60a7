"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from domain.entities.profile import Profile
from domain.services.directory_controller import DirectoryController
from domain.services.profile_gateway import ProfileGateway
from infrastructure.database.models import Base
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork

# Test database URL (SQLite in memory, one shared connection)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_profile(**overrides: Any) -> Profile:
    """Build a valid profile, overriding any field."""
    values: dict[str, Any] = {
        "name": "Ann",
        "email": "ann@example.com",
        "native": "English",
        "practice": "Spanish",
        "level": "B1",
        "availability": "Tue/Thu evenings",
        "interests": ["running", "cooking"],
        "bio": "Happy to help with English.",
        "updated_at": 1_700_000_000_000,
    }
    values.update(overrides)
    return Profile(**values)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
def gateway(session_factory: async_sessionmaker[AsyncSession]) -> ProfileGateway:
    """Gateway backed by the in-memory database."""
    return ProfileGateway(lambda: SQLAlchemyUnitOfWork(session_factory))


@pytest.fixture
def directory(gateway: ProfileGateway) -> DirectoryController:
    """Controller backed by the in-memory database."""
    return DirectoryController(gateway, page_size=6)


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client against the real app (no database)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def directory_client(
    directory: DirectoryController,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client whose directory is backed by the in-memory database.

    The transport does not run the lifespan, so the directory is loaded here.
    """
    from api.v1.dependencies import get_directory_controller
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_directory_controller] = lambda: directory
    await directory.load()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
