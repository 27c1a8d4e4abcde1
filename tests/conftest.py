"""
Top-level pytest configuration.

Provides:
  - A fresh SQLite database (aiosqlite, in-memory) per test with all tables created.
  - A db_session fixture that rolls back each test in a transaction.
  - An async_client fixture wired to the FastAPI app using that session.
  - A seeded user with a complete profile plus matching auth headers.
"""

from __future__ import annotations

import os
import uuid
from typing import AsyncGenerator

# ---------------------------------------------------------------------------
# Environment must be set BEFORE any app module is imported so that
# pydantic-settings picks up the test values.
# ---------------------------------------------------------------------------
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "test")
os.environ.setdefault("POSTGRES_PASSWORD", "test")
os.environ.setdefault("POSTGRES_DB", "test")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-32c")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.getenv(
    "TEST_DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)


def _enable_sqlite_savepoints(sync_engine) -> None:
    """
    Let SQLAlchemy own BEGIN on pysqlite.

    The driver's implicit transaction handling breaks SAVEPOINT, which the
    connection request repository uses for its insert. This is the recipe
    from the SQLAlchemy SQLite dialect docs.
    """

    @event.listens_for(sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


# ---------------------------------------------------------------------------
# Per-test engine: a private in-memory database shared through StaticPool.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine():
    """Create the SQLite test engine and all tables for one test."""
    from app.core.database import Base
    import app.models  # noqa: F401  (registers tables on Base.metadata)

    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    if test_engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(test_engine.sync_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


# ---------------------------------------------------------------------------
# Per-test DB session inside one outer transaction that is rolled back.
# commit() only flushes, so handler writes stay visible to later requests in
# the same test but never outlive it.
# ---------------------------------------------------------------------------
class _NonCommittingSession(AsyncSession):
    """AsyncSession subclass where commit() becomes flush()."""

    async def commit(self) -> None:  # type: ignore[override]
        await self.flush()


@pytest_asyncio.fixture
async def db_session(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a per-test database session that is fully rolled back on teardown."""
    async with engine.connect() as conn:
        await conn.begin()

        session = _NonCommittingSession(
            bind=conn,
            expire_on_commit=False,
        )

        try:
            yield session
        finally:
            await session.close()
            await conn.rollback()


# ---------------------------------------------------------------------------
# Override FastAPI database dependency to use the test session.
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Provide an httpx AsyncClient backed by the FastAPI app.

    All requests in a test share the test session and so see data seeded
    in that test.
    """
    from app.core.database import get_db
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as client:
        yield client

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded fixtures
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession):
    """Persisted user with a complete profile."""
    from tests.factories import UserFactory

    return await UserFactory.create_async(
        db_session,
        email="me@example.com",
        full_name="Logged In",
        skills=["python", "fastapi"],
    )


@pytest.fixture
def auth_headers_for():
    """Build bearer headers for any user."""
    from app.core.security import create_access_token

    def _headers(user) -> dict[str, str]:
        token = create_access_token(data={"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def auth_headers(test_user, auth_headers_for) -> dict[str, str]:
    """Authorization headers for the seeded test user."""
    return auth_headers_for(test_user)


@pytest.fixture
def random_uuid() -> str:
    return str(uuid.uuid4())
