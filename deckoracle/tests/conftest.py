"""Pytest configuration and fixtures for DeckOracle tests."""

from collections.abc import AsyncGenerator
from pathlib import Path
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from deckoracle.core.database import Base, get_db
from deckoracle.core.dependencies import get_current_user_id
from deckoracle.core.security import create_access_token

# Import all models so Base.metadata knows every table
from deckoracle.modules.cards.models import Card  # noqa: F401
from deckoracle.modules.decks.models import Deck  # noqa: F401
from deckoracle.modules.folders.models import Folder
from deckoracle.shared.uuid7 import uuid7


def pytest_configure(config):
    config.addinivalue_line("markers", "integration: tests that use a real database")


# ==================== Database Fixtures ====================


@pytest.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create a SQLite database in a temporary file for one test.

    pysqlite's own transaction handling is disabled so that SAVEPOINT
    (``begin_nested``) works the same way as on PostgreSQL.
    """
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'deckoracle.db'}",
        poolclass=NullPool,
        echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a new database session for a test."""
    async with session_factory() as session:
        yield session


# ==================== User Fixtures ====================


@pytest.fixture
def user_id() -> UUID:
    """ID of the acting user; users live in the external auth service."""
    return uuid7()


@pytest.fixture
def other_user_id() -> UUID:
    return uuid7()


@pytest.fixture
def access_token(user_id: UUID) -> str:
    """Create an access token for the acting user."""
    return create_access_token(user_id)


@pytest.fixture
async def folder(db_session: AsyncSession, user_id: UUID) -> Folder:
    """Folder owned by the acting user, committed."""
    folder = Folder(owner_id=user_id, name="Languages")
    db_session.add(folder)
    await db_session.commit()
    return folder


# ==================== HTTP Client Fixtures ====================


@pytest.fixture
def app():
    """Get the FastAPI application instance."""
    from deckoracle.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
async def client(app, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated HTTP client; the database dependency uses the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def authenticated_client(
    app,
    db_session: AsyncSession,
    user_id: UUID,
    access_token: str,
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client acting as ``user_id``."""

    async def override_get_db():
        yield db_session

    async def override_get_current_user_id():
        return user_id

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = override_get_current_user_id

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {access_token}"},
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
