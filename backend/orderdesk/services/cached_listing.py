"""Cached Listing — list queries served through the result cache.

Invariants:
    - Cache keys derive from a CacheKeyTemplate + the normalized query args
    - TTL is read from settings at call time; a missing TTL raises InvalidConfigurationError
    - A cache failure (CacheError) never fails the request: logged, then bypassed
    - sort_by re-sorts payloads in memory AFTER fetch/cache (never changes total),
      and only when the caller asked for no ordering: an explicit `sort` wins
    - sort_by orders rows within the returned page, not across pages

Design Decisions:
    - Whole PageResponse cached as JSON: a hit skips the database entirely
    - No cache when the dependency yields None (REDIS_URL unset)
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel

from orderdesk.config import get_settings
from orderdesk.core.cache_keys import CacheKeyRecord, derive_cache_key, scoped_cache_key
from orderdesk.core.compare_values import FieldSelector, sort_records
from orderdesk.core.domain_types import CacheKeyTemplate, SortOrder
from orderdesk.core.errors import CacheError
from orderdesk.core.query_args import QueryArgs
from orderdesk.core.repository_protocols import ResultCache
from orderdesk.schemas.listing import PageResponse
from orderdesk.services.query_results import QueryResult

logger = logging.getLogger(__name__)

DTO = TypeVar("DTO", bound=BaseModel)


@dataclass(frozen=True)
class CachedListing(Generic[DTO]):
    """Cache domain, output shape, and optional in-memory sort for one list endpoint."""
    template: CacheKeyTemplate
    response_shape: type[DTO]
    sort_by: FieldSelector | None = None
    sort_order: SortOrder = SortOrder.ASC


def generate_cache_key(template: CacheKeyTemplate | str) -> CacheKeyRecord:
    """Derive a cache key using the configured default TTL."""
    return derive_cache_key(template, get_settings().redis_default_cache_ttl)


async def list_with_cache(
    cache: ResultCache | None,
    listing: CachedListing[DTO],
    args: QueryArgs,
    run_query: Callable[[], Awaitable[QueryResult[DTO]]],
) -> PageResponse[DTO]:
    """Serve a page from cache, or run the query and cache its response."""
    page_model = PageResponse[listing.response_shape]

    if cache is None:
        response = _to_response(page_model, await run_query(), args)
    else:
        record = generate_cache_key(listing.template)
        key = scoped_cache_key(record, args)
        cached = await _read(cache, key)
        if cached is not None:
            logger.debug("Cache hit", extra={"cache_key": key})
            response = page_model.model_validate_json(cached)
        else:
            response = _to_response(page_model, await run_query(), args)
            await _write(cache, key, response.model_dump_json(), record.ttl)

    if listing.sort_by is not None and not args.order:
        response = response.model_copy(update={
            "payloads": sort_records(response.payloads, listing.sort_by, listing.sort_order),
        })
    return response


def _to_response(page_model, result: QueryResult, args: QueryArgs):
    return page_model(
        payloads=result.payloads, total=result.total,
        page=args.page, limit=args.limit,
    )


async def _read(cache: ResultCache, key: str) -> str | None:
    try:
        return await cache.get(key)
    except CacheError as e:
        logger.warning(
            f"Cache read bypassed: {e.message}",
            extra={"cache_key": key, "error_code": e.code},
        )
        return None


async def _write(cache: ResultCache, key: str, value: str, ttl: int) -> None:
    try:
        await cache.set(key, value, ttl)
    except CacheError as e:
        logger.warning(
            f"Cache write skipped: {e.message}",
            extra={"cache_key": key, "error_code": e.code},
        )
