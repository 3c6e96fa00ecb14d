"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - Enums have expected members and serialize to string
    - CacheKeyTemplate is a closed set of three templates
"""

import pytest

from orderdesk.core.domain_types import (
    UserId, RoleId, InvoiceId,
    SortOrder, Role, CacheKeyTemplate, InvoiceStatus,
)


def test_identity_types_wrap_int():
    assert UserId(7) == 7
    assert RoleId(2) == 2
    assert InvoiceId(11) == 11


def test_sort_order_accepts_raw_values():
    assert SortOrder("asc") is SortOrder.ASC
    assert SortOrder("desc") is SortOrder.DESC
    with pytest.raises(ValueError):
        SortOrder("sideways")


def test_role_values():
    assert {r.value for r in Role} == {"global_admin", "admin", "user"}


def test_cache_key_templates_are_closed_set():
    assert {t.value for t in CacheKeyTemplate} == {
        "order:invoice:get:list", "role:get:list", "user:get:list",
    }
    with pytest.raises(ValueError):
        CacheKeyTemplate("anything:else")


def test_invoice_status_is_str():
    assert InvoiceStatus.PAID == "paid"
    assert isinstance(InvoiceStatus.DRAFT, str)
