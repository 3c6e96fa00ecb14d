"""Healthcheck Service — detailed backend status for administrators.

Invariants:
    - Never raises: every probe failure is reported as a status value
    - cache is "disabled" when no result cache is configured
    - overall status is "healthy" only if the database is healthy and the cache
      is healthy or disabled
"""

import logging
from datetime import datetime, timezone

from orderdesk.infrastructure.database import DatabaseSessionManager
from orderdesk.infrastructure.result_cache import RedisResultCache

logger = logging.getLogger(__name__)

SERVICE_NAME = "orderdesk-api"
SERVICE_VERSION = "1.0.0"


class HealthcheckService:
    def __init__(
        self,
        db: DatabaseSessionManager | None,
        cache: RedisResultCache | None,
    ):
        self._db = db
        self._cache = cache

    async def healthcheck(self) -> dict:
        database = "healthy" if self._db and await self._db.health_check() else "unhealthy"
        if self._cache is None:
            cache = "disabled"
        else:
            cache = "healthy" if await self._cache.ping() else "unhealthy"

        status = "healthy" if database == "healthy" and cache != "unhealthy" else "degraded"
        if status != "healthy":
            logger.warning(f"Healthcheck degraded: database={database} cache={cache}")
        return {
            "status": status,
            "service": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"database": database, "cache": cache},
        }
