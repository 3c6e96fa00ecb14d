"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched for code that reads the module singleton (health probes)
    - Result cache disabled unless a test installs one
    - `login(role)` installs an authenticated RequestContext for the client

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Authentication layer is outside the service: tests override get_request_context
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from orderdesk.api.deps import get_request_context
from orderdesk.core.request_context import RequestContext, TokenPayload
from orderdesk.db.base import Base
from orderdesk.infrastructure.database import get_db, DatabaseSessionManager
from orderdesk.infrastructure.result_cache import get_result_cache
from orderdesk.models import OrderInvoice, Role, User
import orderdesk.infrastructure.database as db_module
from orderdesk.main import app

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def session_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the in-memory engine (no pool sizing)."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_session_factory, session_manager):
    """FastAPI test client with DB dependency overridden, cache disabled."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    async def no_cache():
        return None

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_result_cache] = no_cache

    original_manager = db_module.db_manager
    db_module.db_manager = session_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def login():
    """Install an authenticated context with the given role for the client."""

    def _login(role: str, user_id: int = 1) -> RequestContext:
        context = RequestContext(
            token_data=TokenPayload(id=user_id, email=f"{role}@orderdesk.test", role=role),
            token="test-token",
        )
        app.dependency_overrides[get_request_context] = lambda: context
        return context

    return _login


@pytest.fixture
async def seed_data(test_db):
    """3 roles, 25 users (alternating admin/user), 12 invoices."""
    roles = [
        Role(name="user", description="Regular user"),
        Role(name="global_admin", description="All tenants"),
        Role(name="admin", description="One tenant"),
    ]
    test_db.add_all(roles)
    await test_db.flush()

    users = [
        User(
            email=f"user{i:02d}@orderdesk.test",
            name=f"User {i:02d}",
            password_hash=f"hash-{i}",
            role_id=roles[2].id if i % 2 == 0 else roles[0].id,
            created_at=BASE_TIME + timedelta(days=i),
        )
        for i in range(25)
    ]
    test_db.add_all(users)
    await test_db.flush()

    statuses = ["draft", "issued", "paid", "void"]
    invoices = [
        OrderInvoice(
            number=f"INV-{i:04d}",
            status=statuses[i % 4],
            total_cents=1000 * (i + 1),
            currency="USD",
            internal_notes="do not expose",
            user_id=users[i % 5].id,
            issued_at=BASE_TIME + timedelta(hours=i),
        )
        for i in range(12)
    ]
    test_db.add_all(invoices)
    await test_db.commit()
    return {"roles": roles, "users": users, "invoices": invoices}
