"""Database Session Manager — pooled async sessions for the read-only list queries.

Invariants:
    - Sessions only read: nothing here commits; a failed session is rolled back
      so the pooled connection returns clean
    - SQLAlchemy exceptions leave a session as DatabaseError (core/errors.py) with the
      failing stage ("execute", "query" or "orm"); the driver message stays in the logs
    - db_manager is None until the lifespan calls init_db; get_db answers 503 until then

Design Decisions:
    - Manager built from Settings so pool sizing has one source (config.py)
    - expire_on_commit=False: loaded rows never trigger a lazy refresh during
      the async projection step
    - Readiness probe goes through the engine, not a session, so a probe failure
      is reported as False instead of a mapped DatabaseError
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from orderdesk.config import Settings
from orderdesk.core.errors import DatabaseError
from orderdesk.infrastructure.lifecycle import ensure_initialized

logger = logging.getLogger(__name__)

# Most specific first: OperationalError is a DBAPIError.
_FAILURE_STAGES: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (OperationalError, "execute", "Database unavailable or statement aborted"),
    (DBAPIError, "query", "Database rejected the query"),
    (SQLAlchemyError, "orm", "Query could not be built or executed"),
)


class DatabaseSessionManager:
    """Owns the async engine and hands out read sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        self.engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseSessionManager":
        return cls(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Read session; SQLAlchemy failures leave as DatabaseError."""
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                raise _to_database_error(e) from e

    async def health_check(self) -> bool:
        """True when a trivial statement round-trips (readiness probes)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"DB health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


def _to_database_error(error: SQLAlchemyError) -> DatabaseError:
    stage, message = next(
        (stage, message) for error_type, stage, message in _FAILURE_STAGES
        if isinstance(error, error_type)
    )
    logger.error(f"{message}: {error}", extra={"error_code": "DATABASE_ERROR"})
    return DatabaseError(message, stage)


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(settings: Settings) -> None:
    global db_manager
    db_manager = DatabaseSessionManager.from_settings(settings)


async def close_db() -> None:
    global db_manager
    if db_manager:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    manager = ensure_initialized(db_manager, "Database")
    async with manager.session() as session:
        yield session
