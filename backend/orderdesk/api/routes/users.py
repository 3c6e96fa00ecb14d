"""User Listing — paginated users with their role attached.

Invariants:
    - Admin roles only
    - Filterable/sortable fields limited to USER_FIELDS (never password_hash)
    - role is eager-loaded by the page source, attached by query_results
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from orderdesk.api.deps import ListParams, get_list_params, require_roles
from orderdesk.core.domain_types import CacheKeyTemplate, Role, RoleId
from orderdesk.core.projection import RelatedProjection
from orderdesk.core.repository_protocols import ResultCache
from orderdesk.infrastructure.database import get_db
from orderdesk.infrastructure.page_source import SqlAlchemyPageSource
from orderdesk.infrastructure.result_cache import get_result_cache
from orderdesk.models.user import User
from orderdesk.schemas.listing import PageResponse, RoleDto, UserDto
from orderdesk.services.cached_listing import CachedListing, list_with_cache
from orderdesk.services.query_results import query_results

router = APIRouter(prefix="/api/v1/users", tags=["users"])

USER_FIELDS = ("id", "email", "name", "role_id", "created_at")
USER_LISTING = CachedListing(CacheKeyTemplate.USER_GET_LIST, UserDto)


@router.get(
    "",
    response_model=PageResponse[UserDto],
    dependencies=[Depends(require_roles(Role.GLOBAL_ADMIN, Role.ADMIN))],
)
async def list_users(
    params: ListParams = Depends(get_list_params),
    role_id: RoleId | None = Query(None),
    email: str | None = Query(None),
    db: AsyncSession = Depends(get_db),
    cache: ResultCache | None = Depends(get_result_cache),
):
    """List users, optionally filtered by role or exact email."""
    args = params.to_args({"role_id": role_id, "email": email})
    source = SqlAlchemyPageSource(db, User, fields=USER_FIELDS, eager=("role",))
    return await list_with_cache(
        cache, USER_LISTING, args,
        lambda: query_results(source, args, UserDto, RelatedProjection("role", RoleDto)),
    )
