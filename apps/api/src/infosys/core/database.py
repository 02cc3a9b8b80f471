"""
Database Configuration

Async SQLAlchemy engine, session factory and declarative base.
SQLite (via aiosqlite) is the default backend; the busy timeout bounds how
long a writer waits on a locked database before the call fails.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from infosys.core.config import settings


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def _is_sqlite(database_url: str) -> bool:
    return make_url(database_url).get_backend_name() == "sqlite"


def create_engine_for_url(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """
    Build an async engine for the given URL.

    SQLite connections get a busy timeout of ``settings.store_timeout_seconds``
    and use NullPool so each session owns its own connection.
    """
    if _is_sqlite(database_url):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": settings.store_timeout_seconds},
            poolclass=NullPool,
        )

    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_timeout=settings.store_timeout_seconds,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


engine = create_engine_for_url(settings.database_url, echo=settings.database_echo)
async_session_maker = create_session_maker(engine)


def _ensure_sqlite_directory(database_url: str | URL) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session.

    Rolls back on any exception; services commit explicitly.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(target: AsyncEngine | None = None) -> None:
    """Create all tables. Call this on application startup."""
    # Import models so they register on Base.metadata
    from infosys.modules.accounts import models  # noqa: F401

    eng = target or engine
    _ensure_sqlite_directory(eng.url)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the engine's connections."""
    await engine.dispose()
