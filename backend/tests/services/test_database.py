"""Database Session Manager — failure mapping, readiness probe, startup guard.

Design Decisions:
    - Runs against the in-memory SQLite engine from conftest (no PostgreSQL)
    - A file path under a missing directory stands in for an unreachable server
"""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.ext.asyncio import create_async_engine

import orderdesk.infrastructure.database as db_module
from orderdesk.config import Settings
from orderdesk.core.errors import DatabaseError, ServiceNotInitializedError
from orderdesk.infrastructure.database import DatabaseSessionManager, get_db


async def test_failed_statement_becomes_database_error(session_manager):
    with pytest.raises(DatabaseError) as exc:
        async with session_manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    assert exc.value.operation == "execute"
    assert exc.value.http_status == 503
    assert "missing_table" not in exc.value.message


async def test_orm_usage_error_keeps_cause(session_manager):
    with pytest.raises(DatabaseError) as exc:
        async with session_manager.session():
            raise InvalidRequestError("mapper not configured")
    assert exc.value.operation == "orm"
    assert isinstance(exc.value.__cause__, InvalidRequestError)


async def test_sessions_usable_after_a_failure(session_manager):
    with pytest.raises(DatabaseError):
        async with session_manager.session() as db:
            await db.execute(text("SELECT * FROM missing_table"))
    async with session_manager.session() as db:
        assert (await db.execute(text("SELECT 1"))).scalar() == 1


async def test_health_check_reachable(session_manager):
    assert await session_manager.health_check() is True


async def test_health_check_unreachable_reports_false(session_manager):
    session_manager.engine = create_async_engine(
        "sqlite+aiosqlite:////nonexistent-dir/orderdesk.db",
    )
    try:
        assert await session_manager.health_check() is False
    finally:
        await session_manager.engine.dispose()


async def test_get_db_before_startup_is_503(monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    with pytest.raises(ServiceNotInitializedError) as exc:
        await anext(get_db())
    assert exc.value.http_status == 503


def test_manager_built_from_settings():
    manager = DatabaseSessionManager.from_settings(Settings(
        database_url="postgresql://orders:secret@db:5432/orders",
        database_pool_size=5,
        database_max_overflow=2,
    ))
    assert manager.engine.url.drivername == "postgresql+asyncpg"
    assert manager.engine.pool.size() == 5
