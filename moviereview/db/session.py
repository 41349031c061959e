# moviereview/db/session.py
from __future__ import annotations

"""
MovieReview — Database Engine & Sessions

- One async engine per process, created from `settings.ASYNC_DATABASE_URL`
  and disposed by the FastAPI lifespan.
- `get_async_db` yields the `AsyncSession` injected into every route; services
  receive it explicitly.
- SQLite URLs (local dev, tests) get `PRAGMA foreign_keys=ON` on every
  connection and no pool sizing.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict
import logging

from sqlalchemy import event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from moviereview.core.config import settings

logger = logging.getLogger(__name__)


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def enable_sqlite_foreign_keys(sync_engine: Engine) -> None:
    @event.listens_for(sync_engine, "connect")
    def _fk_pragma(dbapi_connection, _record):  # pragma: no cover - driver callback
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_async_engine(url: str, **overrides: Any) -> AsyncEngine:
    """Async engine for `url`; pool sizing from settings unless the dialect is SQLite."""
    options: Dict[str, Any] = {"echo": settings.DB_ECHO}
    if not is_sqlite_url(url):
        options.update(
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )
    options.update(overrides)

    engine = create_async_engine(url, **options)
    if is_sqlite_url(url):
        enable_sqlite_foreign_keys(engine.sync_engine)
    return engine


async_engine: AsyncEngine = build_async_engine(settings.ASYNC_DATABASE_URL)

async_session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Per-request session; rolled back if the handler raises."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transactional_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session inside one transaction, committed on clean exit (scripts, maintenance)."""
    async with async_session_maker() as session, session.begin():
        yield session


async def db_healthcheck() -> bool:
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Database readiness check failed")
        return False
    return True


__all__ = [
    "async_engine",
    "async_session_maker",
    "build_async_engine",
    "enable_sqlite_foreign_keys",
    "get_async_db",
    "transactional_async_session",
    "db_healthcheck",
    "is_sqlite_url",
]
