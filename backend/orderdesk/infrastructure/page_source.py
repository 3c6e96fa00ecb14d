"""SQLAlchemy Page Source — counted, filtered, paginated fetch over one ORM model.

Invariants:
    - count and page queries share the SAME equality predicate
    - Only column attributes (optionally narrowed by `fields`) can be filtered or ordered
    - Relations in `eager` are selectin-loaded, so later awaitable_attrs access does no IO

Design Decisions:
    - Two statements (count + page) instead of a window function: portable to SQLite tests
    - Unknown fields raise InvalidQueryError (400) instead of being ignored silently
"""

import logging
from collections.abc import Collection, Mapping, Sequence
from typing import Any

from sqlalchemy import func, inspect as sa_inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from orderdesk.core.domain_types import SortOrder
from orderdesk.core.errors import InvalidQueryError

logger = logging.getLogger(__name__)


class SqlAlchemyPageSource:
    """PageSource implementation for a single mapped model."""

    def __init__(
        self,
        db: AsyncSession,
        model: type,
        *,
        fields: Collection[str] | None = None,
        eager: Collection[str] = (),
    ):
        self._db = db
        self._model = model
        columns = {attr.key for attr in sa_inspect(model).column_attrs}
        self._fields = columns if fields is None else columns & set(fields)
        self._eager = tuple(eager)

    async def find_page(
        self,
        filters: Mapping[str, Any],
        order: Mapping[str, SortOrder],
        limit: int,
        offset: int,
    ) -> tuple[Sequence[Any], int]:
        conditions = [
            self._column(name, "filter") == value for name, value in filters.items()
        ]

        count_stmt = select(func.count()).select_from(self._model).where(*conditions)
        total = (await self._db.execute(count_stmt)).scalar_one()

        stmt = select(self._model).where(*conditions)
        for name, direction in order.items():
            column = self._column(name, "sort")
            stmt = stmt.order_by(
                column.desc() if SortOrder(direction) is SortOrder.DESC else column.asc(),
            )
        if self._eager:
            stmt = stmt.options(
                *(selectinload(getattr(self._model, rel)) for rel in self._eager),
            )
        stmt = stmt.limit(limit).offset(offset)

        items = (await self._db.execute(stmt)).scalars().all()
        logger.debug(
            f"{self._model.__name__} page fetched: {len(items)}/{total}",
            extra={"total": total, "limit": limit},
        )
        return list(items), total

    def _column(self, name: str, purpose: str):
        if name not in self._fields:
            raise InvalidQueryError(
                f"Cannot {purpose} {self._model.__name__} by '{name}'", name,
            )
        return getattr(self._model, name)
