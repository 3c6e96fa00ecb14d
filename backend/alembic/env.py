"""Alembic environment — migrations for the roles / users / order_invoices schema.

Invariants:
    - The database URL comes from orderdesk.config (DATABASE_URL), so migrations and
      the app agree on the postgresql:// -> postgresql+asyncpg:// rewrite
    - `alembic -x url=...` overrides it for one-off runs against another database
    - Base.metadata is complete because orderdesk.models imports every model

Design Decisions:
    - One NullPool async engine per run: migrations are short-lived
    - compare_type=True: autogenerate notices column type changes (e.g. status length)
"""

import asyncio
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine

import orderdesk.models  # noqa: F401
from orderdesk.config import get_settings
from orderdesk.db.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

MIGRATION_OPTIONS = {"target_metadata": Base.metadata, "compare_type": True}


def _database_url() -> str:
    override = context.get_x_argument(as_dictionary=True).get("url")
    return override or get_settings().database_url


def run_migrations_offline() -> None:
    """Emit SQL for the configured URL's dialect without connecting."""
    context.configure(
        url=_database_url(),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **MIGRATION_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def _apply(connection: Connection) -> None:
    context.configure(connection=connection, **MIGRATION_OPTIONS)
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(_database_url(), poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_apply)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
