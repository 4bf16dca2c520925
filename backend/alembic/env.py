"""
Alembic Migration Environment
===============================

What:  Runs the storefront migrations against DATABASE_URL.
How:   The URL comes from storefront settings, never from alembic.ini. Online
       migrations use a throwaway async engine (NullPool) and run the sync
       migration context through connection.run_sync(). SQLite connections
       use batch mode so ALTER TABLE steps work there too.

Usage (from backend/):
    alembic upgrade head
    alembic upgrade head --sql     # offline: print SQL only
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

import storefront.models  # noqa: F401  (registers tables on Base.metadata)
from storefront.config import settings
from storefront.database import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure(**options) -> None:
    context.configure(
        target_metadata=Base.metadata,
        compare_type=True,
        **options,
    )


def run_migrations_offline() -> None:
    _configure(
        url=settings.database_url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=settings.database_url.startswith("sqlite"),
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_on_connection(connection: Connection) -> None:
    _configure(
        connection=connection,
        render_as_batch=connection.dialect.name == "sqlite",
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.database_url, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_run_on_connection)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
