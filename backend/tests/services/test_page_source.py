"""SQLAlchemy Page Source — count + page over the same predicate, field allow-list."""

import pytest

from orderdesk.core.domain_types import SortOrder
from orderdesk.core.errors import InvalidQueryError
from orderdesk.core.query_args import QueryArgs
from orderdesk.core.projection import RelatedProjection
from orderdesk.infrastructure.page_source import SqlAlchemyPageSource
from orderdesk.models import OrderInvoice, User
from orderdesk.schemas.listing import OrderInvoiceDto, RoleDto, UserDto, UserSummary
from orderdesk.services.query_results import query_results


async def test_page_and_total(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User)
    items, total = await source.find_page({}, {"id": SortOrder.ASC}, 10, 10)
    assert total == 25
    assert [u.email for u in items] == [f"user{i:02d}@orderdesk.test" for i in range(10, 20)]


async def test_filter_applies_to_count_and_page(test_db, seed_data):
    admin_role = seed_data["roles"][2]
    source = SqlAlchemyPageSource(test_db, User)
    items, total = await source.find_page({"role_id": admin_role.id}, {}, 5, 0)
    assert total == 13
    assert len(items) == 5
    assert all(u.role_id == admin_role.id for u in items)


async def test_descending_order(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User)
    items, _ = await source.find_page({}, {"created_at": SortOrder.DESC}, 3, 0)
    assert [u.name for u in items] == ["User 24", "User 23", "User 22"]


async def test_field_outside_allow_list_rejected(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User, fields=("id", "email"))
    with pytest.raises(InvalidQueryError) as exc:
        await source.find_page({"password_hash": "hash-1"}, {}, 10, 0)
    assert exc.value.field == "password_hash"
    assert exc.value.http_status == 400


async def test_unknown_sort_field_rejected(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User)
    with pytest.raises(InvalidQueryError):
        await source.find_page({}, {"nickname": SortOrder.ASC}, 10, 0)


async def test_relationships_are_not_columns(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User)
    with pytest.raises(InvalidQueryError):
        await source.find_page({"role": 1}, {}, 10, 0)


async def test_query_results_with_eager_relation(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, User, eager=("role",))
    result = await query_results(
        source, QueryArgs(page=1, limit=2, order={"id": "asc"}),
        UserDto, RelatedProjection("role", RoleDto),
    )
    assert result.total == 25
    assert [p.role.name for p in result.payloads] == ["admin", "user"]
    assert "password_hash" not in result.payloads[0].model_dump()


async def test_invoice_projection_maps_alias_and_hides_notes(test_db, seed_data):
    source = SqlAlchemyPageSource(test_db, OrderInvoice, eager=("customer",))
    result = await query_results(
        source, QueryArgs(limit=3, filters={"status": "paid"}, order={"id": "asc"}),
        OrderInvoiceDto, RelatedProjection("customer", UserSummary),
    )
    assert result.total == 3
    first = result.payloads[0]
    assert first.number == "INV-0002"
    assert first.customer_id == first.customer.id
    assert "internal_notes" not in first.model_dump()
