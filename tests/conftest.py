"""Pytest configuration and fixtures for leaguedesk.

SQL-backed tests run against a throwaway SQLite file per test (aiosqlite).
HTTP tests drive a freshly built app through httpx ASGITransport with the
application lifespan running, so app.state carries the activity log
pipeline exactly as in production.
"""

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

import app.infrastructure.persistence.database as database
from app.core.config import get_settings
from app.core.limiter import limiter
from app.infrastructure.persistence import models  # noqa: F401  (registers tables)
from app.infrastructure.persistence.database import Base
from app.infrastructure.security.jwt import create_access_token

TEST_SECRET_KEY = "test-secret-key-for-leaguedesk-tokens"


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch: pytest.MonkeyPatch):
    """Known settings for every test; cache cleared before and after."""
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("DATABASE_URL", "")
    monkeypatch.setenv("ACTIVITY_LOG_DISPATCH_MODE", "background")
    monkeypatch.setenv("TELEMETRY_ENABLED", "false")
    monkeypatch.delenv("ACTIVITY_LOG_RETENTION_DAYS", raising=False)
    get_settings.cache_clear()
    limiter.reset()
    yield
    get_settings.cache_clear()


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    """SQLite file database with the full schema."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'leaguedesk.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def sql_store(
    monkeypatch: pytest.MonkeyPatch,
    engine: AsyncEngine,
    session_factory: async_sessionmaker[AsyncSession],
) -> async_sessionmaker[AsyncSession]:
    """Install the test database as the process-wide SQL store."""
    monkeypatch.setattr(database, "engine", engine)
    monkeypatch.setattr(database, "AsyncSessionLocal", session_factory)
    return session_factory


async def _running_app() -> AsyncIterator[FastAPI]:
    from app.main import create_app

    application = create_app()
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def application() -> AsyncIterator[FastAPI]:
    """App without a SQL store (DATABASE_URL empty)."""
    async for application in _running_app():
        yield application


@pytest.fixture
async def store_application(sql_store) -> AsyncIterator[FastAPI]:
    """App whose SQL store is the per-test SQLite database."""
    async for application in _running_app():
        yield application


@pytest.fixture
async def client(application: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def store_client(store_application: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the app backed by the test database."""
    transport = ASGITransport(app=store_application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def _bearer_headers(
    user_id: str,
    *,
    role: str,
    name: str | None = None,
    email: str | None = None,
) -> dict[str, str]:
    token = create_access_token(user_id, name=name, email=email, role=role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _bearer_headers(
        "user-admin", role="admin", name="Ada Admin", email="ada@leaguedesk.test"
    )


@pytest.fixture
def member_headers() -> dict[str, str]:
    return _bearer_headers(
        "user-member", role="member", name="Mo Member", email="mo@leaguedesk.test"
    )


@pytest.fixture
def make_headers():
    """Factory: make_headers(user_id, role=..., name=..., email=...) -> auth headers."""
    return _bearer_headers
