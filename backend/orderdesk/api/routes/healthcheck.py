"""Admin Healthcheck — detailed backend status, restricted to administrators.

Invariants:
    - Only global_admin and admin roles reach the handler (401/403 otherwise)
    - Response always 200 once authorized; degraded state is reported in the body
"""

from fastapi import APIRouter, Depends

from orderdesk.api.deps import get_healthcheck_service, require_roles
from orderdesk.core.domain_types import Role
from orderdesk.services.healthcheck import HealthcheckService

router = APIRouter(
    prefix="/api/v1/healthcheck",
    tags=["health"],
    dependencies=[Depends(require_roles(Role.GLOBAL_ADMIN, Role.ADMIN))],
)


@router.get("/")
async def healthcheck(
    service: HealthcheckService = Depends(get_healthcheck_service),
):
    """Database and cache status."""
    return await service.healthcheck()
