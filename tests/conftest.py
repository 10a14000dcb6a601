"""Pytest configuration and shared fixtures.

Database tests run against in-memory SQLite through aiosqlite. API tests
drive the real application over httpx's ASGI transport; the session layer
that normally attaches ``request.state.user_id`` is stood in for by a
middleware reading the ``X-Test-User-ID`` header.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI, Request, Response
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import analytics_hub.models  # noqa: F401
from analytics_hub.core.database import Base, get_db
from analytics_hub.main import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_USER_HEADER = "X-Test-User-ID"


@pytest.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """Provide a session bound to a fresh in-memory database.

    Yields:
        Async session; changes are rolled back afterwards
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()

    await engine.dispose()


@pytest.fixture
def app(db: AsyncSession) -> FastAPI:
    """Create the application wired to the test session."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    @application.middleware("http")
    async def attach_test_user(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        user_id = request.headers.get(TEST_USER_HEADER)
        if user_id is not None:
            request.state.user_id = user_id
        return await call_next(request)

    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the test application."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def as_user() -> Callable[[object], dict[str, str]]:
    """Build request headers that authenticate as a given user ID."""

    def _headers(user_id: object) -> dict[str, str]:
        return {TEST_USER_HEADER: str(user_id)}

    return _headers
