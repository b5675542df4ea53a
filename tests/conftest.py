import os
import asyncio
import pytest
import pytest_asyncio
from datetime import datetime, timedelta, timezone
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from typing import AsyncGenerator

# Configure database for tests via settings module rather than hardcoding directly.
# Allow overriding with TEST_DATABASE_URL; fall back to a local sqlite file.
test_db_url = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///./tests/test.db")
os.environ.setdefault("DATABASE_URL", test_db_url)
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_FORMAT", "text")

from notekeeper.core import config as _config  # noqa: E402
_config.get_settings.cache_clear()  # ensure new env vars are picked up # type: ignore[attr-defined]
_settings = _config.get_settings()

from notekeeper.api.main import app  # noqa: E402
from notekeeper.api import deps  # noqa: E402
from notekeeper.db.session import AsyncSessionLocal, engine, Base  # noqa: E402
from notekeeper.models.user import User  # noqa: E402
from notekeeper.models.note import Note  # noqa: E402
from sqlalchemy import delete  # noqa: E402

T0 = datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc)


async def _create_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


async def _drop_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True, scope="session")
def prepare_db():
    # engine uses NullPool on SQLite, so no connection outlives this loop
    asyncio.run(_create_schema())
    yield
    asyncio.run(_drop_schema())

@pytest.fixture(scope="session")
def settings():
    """Expose application settings to tests if needed."""
    return _settings

@pytest_asyncio.fixture()
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session

@pytest_asyncio.fixture()
async def client():
    # httpx >=0.28 removed the 'app=' shortcut; use ASGITransport explicitly
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

@pytest_asyncio.fixture(autouse=True)
async def _clear_tables():
    """Ensure isolated tests by clearing tables before each test (notes first: FK)."""
    async with AsyncSessionLocal() as session:  # type: ignore
        await session.execute(delete(Note))
        await session.execute(delete(User))
        await session.commit()
    yield


class Clock:
    """Stand-in for ``deps.get_now``; tests move it with ``advance``."""

    def __init__(self, now: datetime):
        self.now = now

    def advance(self, **delta) -> datetime:
        self.now = self.now + timedelta(**delta)
        return self.now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock():
    c = Clock(T0)
    app.dependency_overrides[deps.get_now] = c
    yield c
    app.dependency_overrides.pop(deps.get_now, None)


def _auth_headers(token: str) -> dict:
    return {"Cookie": f"token={token}"}


@pytest.fixture()
def auth():
    """Build request headers carrying the session cookie for a token."""
    return _auth_headers


async def _signin(client, username: str, password: str) -> str:
    r_in = await client.post("/signin", json={"username": username, "password": password})
    assert r_in.status_code == 200, r_in.text
    # keep the cookie jar empty; tests pass each user's token explicitly
    client.cookies.clear()
    return r_in.json()["token"]


@pytest.fixture()
def login(client):
    """Sign an existing user in; returns the session token."""
    async def _login(username: str, password: str = "secret1") -> str:
        return await _signin(client, username, password)
    return _login


@pytest.fixture()
def register(client):
    """Sign a user up and in; returns the session token."""
    async def _register(username: str, password: str = "secret1") -> str:
        r_up = await client.post("/signup", json={"username": username, "password": password})
        assert r_up.status_code == 200, r_up.text
        return await _signin(client, username, password)
    return _register
