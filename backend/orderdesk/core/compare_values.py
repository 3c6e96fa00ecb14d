"""Comparator — three-way comparison of two records by a selected field.

Invariants:
    - Never raises: unsupported or mixed type pairs compare as equal (0)
    - str vs str collates like a human-facing sort, not by code point:
      base letters first (case- and accent-insensitive), then accents, then case
      with lowercase ahead of uppercase; "apple" < "Banana" under any process locale
    - int/float vs int/float compares by subtraction; bool is NOT numeric here
    - datetime vs datetime compares by instant; naive vs aware is unsupported (0)
    - DESC flips the sign of every non-zero result

Design Decisions:
    - Explicit accessor callables instead of reflective field names: callers state
      how a field is read (by_field covers the common mapping/attribute case)
    - Each collation level still goes through locale.strcoll, so a configured
      LC_COLLATE refines the order instead of being replaced
    - Used as a post-fetch fallback sort, so stability matters more than speed:
      sort_records relies on sorted() being stable for equal (0) pairs
"""

import locale
import unicodedata
from collections.abc import Callable, Iterable, Mapping
from datetime import datetime
from functools import cmp_to_key
from typing import Any, TypeVar

from orderdesk.core.domain_types import SortOrder

T = TypeVar("T")
FieldSelector = Callable[[T], Any]


def by_field(name: str) -> FieldSelector:
    """Accessor for a named field on a mapping or an attribute-bearing object."""

    def _select(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(name)
        return getattr(record, name, None)

    return _select


def compare_values(
    a: T, b: T, selector: FieldSelector, order: SortOrder | str = SortOrder.ASC,
) -> float:
    """Compare a and b on the selected field. Negative, zero or positive."""
    left, right = selector(a), selector(b)
    if SortOrder(order) is SortOrder.DESC:
        left, right = right, left

    if isinstance(left, str) and isinstance(right, str):
        return _collate(left, right)
    if _is_number(left) and _is_number(right):
        return left - right
    if _comparable_datetimes(left, right):
        return (left - right).total_seconds()
    return 0


def sort_records(
    records: Iterable[T], selector: FieldSelector, order: SortOrder | str = SortOrder.ASC,
) -> list[T]:
    """Stable in-memory sort of records using compare_values."""
    direction = SortOrder(order)
    return sorted(
        records,
        key=cmp_to_key(lambda a, b: compare_values(a, b, selector, direction)),
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _comparable_datetimes(left: Any, right: Any) -> bool:
    if not (isinstance(left, datetime) and isinstance(right, datetime)):
        return False
    return (left.utcoffset() is None) == (right.utcoffset() is None)


def _collate(left: str, right: str) -> int:
    for level in (_base_letters, str.casefold, str.swapcase):
        result = locale.strcoll(level(left), level(right))
        if result:
            return result
    return locale.strcoll(left, right)


def _base_letters(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
