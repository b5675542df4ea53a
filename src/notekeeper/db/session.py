from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy import MetaData
from notekeeper.core.config import get_settings
from typing import Any, AsyncGenerator

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

class Base(DeclarativeBase):
    metadata = metadata


def engine_options(url: str) -> dict[str, Any]:
    """Pool settings for the note store.

    SQLite (tests, local runs) gets no pool: aiosqlite connections are bound
    to the event loop that opened them. Server databases keep a pool with a
    liveness ping so a restarted Postgres does not surface as a 500.
    """
    if url.startswith("sqlite"):
        return {"poolclass": NullPool}
    return {"pool_pre_ping": True}


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, echo=False, future=True, **engine_options(url))


engine = build_engine(get_settings().database_url_async)
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:  # type: ignore
        yield session


async def dispose_engine() -> None:
    await engine.dispose()
