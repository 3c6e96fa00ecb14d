"""Service Lifecycle — startup initialization and not-initialized guards.

Invariants:
    - safely_initialize_service logs success at INFO, failure at ERROR, and re-raises
    - ensure_initialized never returns None

Design Decisions:
    - Failures re-raised unchanged: the lifespan aborts startup instead of
      serving with a half-initialized backend
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from orderdesk.core.errors import ServiceNotInitializedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def safely_initialize_service(
    service_name: str, initialize_fn: Callable[[], Awaitable[None]],
) -> None:
    """Run an async initializer, logging the outcome."""
    try:
        await initialize_fn()
        logger.info(
            f"{service_name} initialized successfully",
            extra={"service": service_name},
        )
    except Exception as e:
        logger.error(
            f"{service_name} initialization failed: {e or 'An unknown error occurred'}",
            extra={"service": service_name},
        )
        raise


def ensure_initialized(resource: T | None, service_name: str) -> T:
    """Return resource, or raise if startup has not initialized it."""
    if resource is None:
        raise ServiceNotInitializedError(service_name)
    return resource
