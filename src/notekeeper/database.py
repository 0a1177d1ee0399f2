"""Async engine, session factory and the per-request session dependency."""

from typing import AsyncIterator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from .config import get_settings
from .core.models.base import BaseModel

settings = get_settings()


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for ``url``.

    SQLite gets foreign keys switched on (cascades depend on it), and an
    in-memory database is pinned to one connection so every session sees
    the same tables.
    """
    if not url.startswith("sqlite"):
        return create_async_engine(url, echo=echo, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        kwargs["poolclass"] = StaticPool
    engine = create_async_engine(url, echo=echo, **kwargs)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        try:
            cursor.execute("PRAGMA foreign_keys=ON")
        finally:
            cursor.close()

    return engine


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # objects stay readable after commit; handlers serialise them afterwards
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = build_engine(settings.database_url, echo=settings.database_echo)
AsyncSessionLocal = build_session_factory(engine)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Yield one session per request; uncommitted work is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def create_tables(bind: Optional[AsyncEngine] = None) -> None:
    """Create any missing tables on ``bind`` (the app engine by default)."""
    # models must be imported so their tables are registered on the metadata
    from .core import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)
