"""Cache Key Deriver — deterministic cache keys and TTLs for named cache domains.

Invariants:
    - cache_key == f"{template}:{md5(template)}:{template}" (template appears twice)
    - Only CacheKeyTemplate members are accepted (closed set, never user input)
    - ttl is a non-negative int; anything else raises InvalidConfigurationError
    - Pure: the TTL is passed in, the caller decides where it is read from

Design Decisions:
    - md5 is enough: keys only need to be stable and distinct across a finite
      template set, not resistant to adversarial input
    - Eager TTL validation (fail fast) instead of returning an unusable TTL
    - scoped_cache_key appends an args fingerprint so pages/filters of one
      domain never share an entry
"""

import hashlib
import json
from dataclasses import dataclass

from orderdesk.core.domain_types import CacheKeyTemplate
from orderdesk.core.errors import InvalidConfigurationError
from orderdesk.core.query_args import QueryArgs

TTL_SETTING = "REDIS_DEFAULT_CACHE_TTL"


@dataclass(frozen=True)
class CacheKeyRecord:
    """A derived cache key and its time-to-live in seconds."""
    cache_key: str
    ttl: int


def derive_cache_key(
    template: CacheKeyTemplate | str, ttl: object,
) -> CacheKeyRecord:
    """Derive the cache key for a template. Raises on an invalid TTL."""
    key_template = CacheKeyTemplate(template).value
    digest = hashlib.md5(key_template.encode("utf-8")).hexdigest()
    return CacheKeyRecord(
        cache_key=f"{key_template}:{digest}:{key_template}",
        ttl=_validate_ttl(ttl),
    )


def scoped_cache_key(record: CacheKeyRecord, args: QueryArgs) -> str:
    """Cache key for one page/filter/order combination within a domain."""
    fingerprint = json.dumps(
        {
            "page": args.page,
            "limit": args.limit,
            "filters": dict(args.filters),
            "order": {k: v.value for k, v in args.order.items()},
        },
        sort_keys=True,
        default=str,
    )
    digest = hashlib.md5(fingerprint.encode("utf-8")).hexdigest()
    return f"{record.cache_key}:{digest}"


def _validate_ttl(ttl: object) -> int:
    if ttl is None:
        raise InvalidConfigurationError(TTL_SETTING, "not set")
    if isinstance(ttl, bool) or not isinstance(ttl, int):
        raise InvalidConfigurationError(TTL_SETTING, f"not an integer: {ttl!r}")
    if ttl < 0:
        raise InvalidConfigurationError(TTL_SETTING, f"negative: {ttl}")
    return ttl
