"""Role Listing — paginated roles.

Invariants:
    - Admin roles only
    - Without a `sort` parameter each page is re-sorted by name in memory
      (locale-aware comparator); the sort orders rows within that page only
    - With a `sort` parameter the database ordering is returned untouched
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.api.deps import ListParams, get_list_params, require_roles
from orderdesk.core.compare_values import by_field
from orderdesk.core.domain_types import CacheKeyTemplate, Role
from orderdesk.core.repository_protocols import ResultCache
from orderdesk.infrastructure.database import get_db
from orderdesk.infrastructure.page_source import SqlAlchemyPageSource
from orderdesk.infrastructure.result_cache import get_result_cache
from orderdesk.models.role import Role as RoleModel
from orderdesk.schemas.listing import PageResponse, RoleDto
from orderdesk.services.cached_listing import CachedListing, list_with_cache
from orderdesk.services.query_results import query_results

router = APIRouter(prefix="/api/v1/roles", tags=["roles"])

ROLE_FIELDS = ("id", "name")
ROLE_LISTING = CachedListing(
    CacheKeyTemplate.ROLE_GET_LIST, RoleDto, sort_by=by_field("name"),
)


@router.get(
    "",
    response_model=PageResponse[RoleDto],
    dependencies=[Depends(require_roles(Role.GLOBAL_ADMIN, Role.ADMIN))],
)
async def list_roles(
    params: ListParams = Depends(get_list_params),
    name: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    cache: ResultCache | None = Depends(get_result_cache),
):
    """List roles; name order within the page unless `sort` is given."""
    args = params.to_args({"name": name})
    source = SqlAlchemyPageSource(db, RoleModel, fields=ROLE_FIELDS)
    return await list_with_cache(
        cache, ROLE_LISTING, args,
        lambda: query_results(source, args, RoleDto),
    )
