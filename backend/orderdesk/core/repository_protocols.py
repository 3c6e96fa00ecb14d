"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from orderdesk.core.domain_types import SortOrder


class PageSource(Protocol):
    """Counted, filtered, paginated fetch — implemented by shell.

    `total` MUST be computed over the same equality predicate as `items`.
    """
    async def find_page(
        self,
        filters: Mapping[str, Any],
        order: Mapping[str, SortOrder],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Any], int]: ...


class RelationLoader(Protocol):
    """Resolves a (possibly lazy) related entity; None when absent."""
    async def __call__(self, entity: Any, relation_field: str) -> Any: ...


class ResultCache(Protocol):
    """Serialized list-result cache — implemented by shell."""
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str, ttl: int) -> None: ...
