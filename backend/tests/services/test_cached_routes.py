"""List Endpoints behind the result cache — a repeated request never reaches the database.

Invariants:
    - Second identical request returns the first body byte-for-byte, even after the
      rows are gone (served from cache)
    - Cached pages keep nested relations (user.role, invoice.customer) and the
      aliased customer_id field
    - A different page/filter is a different cache entry

Design Decisions:
    - Dict-backed cache installed through the get_result_cache override (no Redis)
    - TTL supplied by patching get_settings where cached_listing looks it up
"""

import pytest
from sqlalchemy import delete

from orderdesk.config import Settings
from orderdesk.infrastructure.result_cache import get_result_cache
from orderdesk.main import app
from orderdesk.models import OrderInvoice, User


class _DictCache:
    def __init__(self):
        self.store: dict[str, str] = {}

    async def get(self, key):
        return self.store.get(key)

    async def set(self, key, value, ttl):
        self.store[key] = value


@pytest.fixture
def cache(client, monkeypatch):
    monkeypatch.setattr(
        "orderdesk.services.cached_listing.get_settings",
        lambda: Settings(redis_default_cache_ttl=60),
    )
    store = _DictCache()
    app.dependency_overrides[get_result_cache] = lambda: store
    return store


async def _delete_all(db, *models):
    for model in models:
        await db.execute(delete(model))
    await db.commit()


async def test_users_repeat_request_served_from_cache(
    client, seed_data, cache, login, test_db,
):
    login("admin")
    params = {"sort": "id:asc", "limit": 5}
    first = await client.get("/api/v1/users", params=params)
    assert first.status_code == 200

    await _delete_all(test_db, OrderInvoice, User)
    second = await client.get("/api/v1/users", params=params)

    assert second.status_code == 200
    assert second.json() == first.json()
    body = second.json()
    assert body["total"] == 25
    assert body["payloads"][0]["role"]["name"] == "admin"
    assert len(cache.store) == 1


async def test_users_other_page_is_a_separate_entry(
    client, seed_data, cache, login, test_db,
):
    login("admin")
    await client.get("/api/v1/users", params={"page": 1})
    await _delete_all(test_db, OrderInvoice, User)

    res = await client.get("/api/v1/users", params={"page": 2})
    assert res.json()["total"] == 0
    assert len(cache.store) == 2


async def test_invoices_cached_page_keeps_alias_and_customer(
    client, seed_data, cache, login, test_db,
):
    login("user")
    params = {"sort": "id:asc", "limit": 3}
    first = await client.get("/api/v1/invoices", params=params)
    assert first.status_code == 200

    await _delete_all(test_db, OrderInvoice)
    second = await client.get("/api/v1/invoices", params=params)

    assert second.json() == first.json()
    invoice = second.json()["payloads"][0]
    assert invoice["customer_id"] == seed_data["users"][0].id
    assert invoice["customer"]["id"] == invoice["customer_id"]
    assert "user_id" not in invoice
    assert "internal_notes" not in invoice


async def test_invoices_filter_is_part_of_the_key(
    client, seed_data, cache, login, test_db,
):
    login("user")
    paid = await client.get("/api/v1/invoices", params={"status": "paid"})
    assert paid.json()["total"] == 3

    await _delete_all(test_db, OrderInvoice)
    void = await client.get("/api/v1/invoices", params={"status": "void"})
    assert void.json()["total"] == 0
    cached_paid = await client.get("/api/v1/invoices", params={"status": "paid"})
    assert cached_paid.json() == paid.json()
