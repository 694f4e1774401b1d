# seriesgate/db/session.py
from __future__ import annotations

"""
SeriesGate — Database Engine & Session Dependencies

- Async engine/session for FastAPI (asyncpg).
- `snapshot_read` pins a request's reads to one consistent snapshot.
"""

from typing import AsyncGenerator
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from seriesgate.core.config import settings

logger = logging.getLogger(__name__)

# Pool knobs
_POOL_PRE_PING = True
_POOL_RECYCLE = 1800
_POOL_TIMEOUT = 30
_POOL_SIZE = 10
_MAX_OVERFLOW = 20

# ─────────────────────────────────────────────────────────────
# ⚡ ASYNC ENGINE
# ─────────────────────────────────────────────────────────────

async_engine: AsyncEngine = create_async_engine(
    settings.ASYNC_DATABASE_URL,
    pool_pre_ping=_POOL_PRE_PING,
    pool_recycle=_POOL_RECYCLE,
    pool_size=_POOL_SIZE,
    max_overflow=_MAX_OVERFLOW,
    pool_timeout=_POOL_TIMEOUT,
    echo=False,
)

async_session_maker = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields an async SQLAlchemy session."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def snapshot_read(session: AsyncSession) -> None:
    """Open the session's transaction at `SERIES_READ_ISOLATION` (PostgreSQL only).

    Earlier reads on the same session (e.g. the viewer lookup) leave a
    transaction open whose isolation can no longer change; a clean one is
    committed first so the snapshot starts fresh. A session holding pending
    writes is left alone. On other dialects this is a no-op.
    """
    if session.bind is None or session.bind.dialect.name != "postgresql":
        return
    if session.in_transaction():
        if session.new or session.dirty or session.deleted:
            logger.warning("snapshot_read skipped: session has pending changes")
            return
        await session.commit()
    await session.connection(execution_options={"isolation_level": settings.SERIES_READ_ISOLATION})


async def db_healthcheck() -> bool:
    """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "async_engine",
    "async_session_maker",
    "get_async_db",
    "snapshot_read",
    "db_healthcheck",
]
