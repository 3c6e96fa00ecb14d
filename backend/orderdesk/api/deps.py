"""API Dependencies — request context guards, list parameters, service providers.

Invariants:
    - RequestContext is read from request.state.context (set by the auth layer);
      absent -> 401, present without an allowed role -> 403
    - List limit is clamped to settings.max_page_limit
    - Singletons are looked up at call time (they are created in the lifespan)

Design Decisions:
    - FastAPI Depends as the DI mechanism: routes declare what they need, tests
      override providers through app.dependency_overrides
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, Query, Request

import orderdesk.infrastructure.database as database_module
import orderdesk.infrastructure.result_cache as cache_module
from orderdesk.config import get_settings
from orderdesk.core.domain_types import Role, SortOrder
from orderdesk.core.errors import (
    AuthenticationRequiredError, ErrorContext, ForbiddenError,
)
from orderdesk.core.query_args import QueryArgs, parse_sort
from orderdesk.core.request_context import RequestContext
from orderdesk.services.healthcheck import HealthcheckService


async def get_request_context(request: Request) -> RequestContext:
    """Authenticated context for this request, or 401."""
    context = getattr(request.state, "context", None)
    if not isinstance(context, RequestContext):
        raise AuthenticationRequiredError()
    return context


def require_roles(*roles: Role):
    """Dependency factory: allow the request only for callers holding one of roles."""

    async def _guard(
        context: RequestContext = Depends(get_request_context),
    ) -> RequestContext:
        if not context.has_any_role(roles):
            raise ForbiddenError(
                [r.value for r in roles],
                ErrorContext(user_id=context.token_data.id),
            )
        return context

    return _guard


@dataclass(frozen=True)
class ListParams:
    """Paging and ordering shared by every list endpoint."""
    page: int | None
    limit: int
    order: dict[str, SortOrder]

    def to_args(self, filters: Mapping[str, Any]) -> QueryArgs:
        """Build QueryArgs, dropping filters the caller did not supply."""
        return QueryArgs(
            page=self.page,
            limit=self.limit,
            filters={k: v for k, v in filters.items() if v is not None},
            order=self.order,
        )


async def get_list_params(
    page: int | None = Query(None, ge=1),
    limit: int | None = Query(None, ge=1),
    sort: list[str] | None = Query(None, description="field:asc|desc, repeatable"),
) -> ListParams:
    settings = get_settings()
    return ListParams(
        page=page,
        limit=min(limit or settings.default_page_limit, settings.max_page_limit),
        order=parse_sort(sort),
    )


def get_healthcheck_service() -> HealthcheckService:
    return HealthcheckService(database_module.db_manager, cache_module.cache_manager)
