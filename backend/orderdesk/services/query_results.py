"""Paginated Query Executor — counted fetch + allow-list projection + optional relation.

Invariants:
    - payloads keep the page source's order, whatever order per-item work finishes in
    - total comes from the page source untouched (independent of limit/offset)
    - Only fields declared on the shapes reach the output (core/projection.py)
    - A relation that resolves to None is not attached (field stays unset)
    - Any page-source or relation failure propagates unchanged; remaining
      per-item tasks are cancelled and no partial result is returned

Design Decisions:
    - Per-item work runs concurrently in an asyncio.TaskGroup (items are independent);
      siblings are cancelled AND awaited before the failure is re-raised
    - Relation field is skipped during base projection so a lazy relation is only
      ever touched through the loader
    - No timeout here: the page source owns it
"""

import asyncio
import inspect
import logging
from collections.abc import Coroutine, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncAttrs

from orderdesk.core.projection import RelatedProjection, project
from orderdesk.core.query_args import QueryArgs
from orderdesk.core.repository_protocols import PageSource, RelationLoader

logger = logging.getLogger(__name__)

DTO = TypeVar("DTO", bound=BaseModel)
R = TypeVar("R")


@dataclass(frozen=True)
class QueryResult(Generic[DTO]):
    """Projected page plus the count of all rows matching the filters."""
    payloads: list[DTO]
    total: int


async def load_relation(entity: Any, relation_field: str) -> Any:
    """Default RelationLoader: mapping key, AsyncAttrs relation, or attribute."""
    if isinstance(entity, Mapping):
        value = entity.get(relation_field)
    elif isinstance(entity, AsyncAttrs):
        value = await getattr(entity.awaitable_attrs, relation_field)
    else:
        value = getattr(entity, relation_field, None)
    if inspect.isawaitable(value):
        value = await value
    return value


async def query_results(
    source: PageSource,
    args: QueryArgs,
    shape: type[DTO],
    related: RelatedProjection | None = None,
    *,
    relation_loader: RelationLoader = load_relation,
) -> QueryResult[DTO]:
    """Fetch one page from source and project every row onto shape."""
    if related is not None and related.relation_field not in shape.model_fields:
        raise ValueError(
            f"{shape.__name__} does not declare relation field '{related.relation_field}'",
        )

    items, total = await source.find_page(
        args.filters, args.order, args.limit, args.offset,
    )

    async def _project_item(item: Any) -> DTO:
        if related is None:
            return project(item, shape)
        value = await relation_loader(item, related.relation_field)
        attach = {}
        if value is not None:
            attach[related.relation_field] = project(value, related.shape)
        return project(item, shape, skip=(related.relation_field,), attach=attach)

    payloads = await _gather_in_order([_project_item(item) for item in items])
    logger.debug(
        f"{shape.__name__}: {len(payloads)} of {total} rows projected",
        extra={"page": args.page, "limit": args.limit, "total": total},
    )
    return QueryResult(payloads=payloads, total=total)


async def _gather_in_order(steps: list[Coroutine[Any, Any, R]]) -> list[R]:
    """Run steps concurrently; results in input order; first failure cancels the rest."""
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(step) for step in steps]
    except BaseExceptionGroup as group_error:
        raise group_error.exceptions[0] from None
    return [task.result() for task in tasks]
