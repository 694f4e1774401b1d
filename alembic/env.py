"""Alembic environment for SeriesGate (async engine, asyncpg)."""

import asyncio
import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

from seriesgate.core.config import settings
from seriesgate.db.base import Base  # registers every model on Base.metadata

config = context.config

# Target database: `alembic -x db_url=...` > USE_TEST_DB=1 > application DB
_x_args = context.get_x_argument(as_dictionary=True)
DATABASE_URL = _x_args.get("db_url") or (
    settings.TEST_DATABASE_URL if os.getenv("USE_TEST_DB") == "1" else settings.ASYNC_DATABASE_URL
)
config.set_main_option("sqlalchemy.url", DATABASE_URL.replace("%", "%%"))

if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=DATABASE_URL.startswith("sqlite"),
        **kwargs,
    )


# ───────────────────────────────────────────────
# 📴 Offline: emit SQL only
# ───────────────────────────────────────────────
def run_migrations_offline() -> None:
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


# ───────────────────────────────────────────────
# 🌐 Online: run against a live database
# ───────────────────────────────────────────────
def _run_sync(connection: Connection) -> None:
    _configure(connection=connection)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_sync)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
