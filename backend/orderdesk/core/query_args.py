"""Query Arguments — normalized paging, equality filters and ordering.

Invariants:
    - page and limit fall back to defaults when absent, falsy, or below 1
    - offset == (page - 1) * limit
    - filters are equality-only; order values are SortOrder members
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from orderdesk.core.domain_types import SortOrder
from orderdesk.core.errors import InvalidQueryError

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class QueryArgs:
    """Paging, equality filters and ordering for one list query."""
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    filters: Mapping[str, Any] = field(default_factory=dict)
    order: Mapping[str, SortOrder] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "page", _positive_or(self.page, DEFAULT_PAGE))
        object.__setattr__(self, "limit", _positive_or(self.limit, DEFAULT_LIMIT))
        object.__setattr__(self, "filters", dict(self.filters or {}))
        object.__setattr__(self, "order", _normalize_order(self.order or {}))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_sort(specs: list[str] | None) -> dict[str, SortOrder]:
    """Parse ["field:asc", "other:desc", "plain"] into an ordering mapping."""
    order: dict[str, SortOrder] = {}
    for spec in specs or []:
        name, _, direction = spec.partition(":")
        name = name.strip()
        if not name:
            raise InvalidQueryError(f"Empty sort field in '{spec}'", "sort")
        try:
            order[name] = SortOrder((direction or SortOrder.ASC.value).strip().lower())
        except ValueError:
            raise InvalidQueryError(
                f"Sort direction must be 'asc' or 'desc', got '{direction}'", "sort",
            )
    return order


def _positive_or(value: Any, default: int) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
        return value
    return default


def _normalize_order(order: Mapping[str, Any]) -> dict[str, SortOrder]:
    normalized = {}
    for name, direction in order.items():
        try:
            normalized[name] = SortOrder(direction)
        except ValueError:
            raise InvalidQueryError(
                f"Sort direction must be 'asc' or 'desc', got '{direction}'", name,
            )
    return normalized
