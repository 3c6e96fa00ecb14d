"""Error Handlers — envelope shape, details passthrough, severity-based log level.

Design Decisions:
    - Handlers called directly with a bare ASGI scope: the catch-all path cannot be
      observed through ASGITransport (Starlette re-raises after responding)
"""

import json
import logging

from starlette.requests import Request

from orderdesk.api.error_handlers import handle_orderdesk_error, handle_unexpected_error
from orderdesk.core.errors import (
    CacheError, InvalidConfigurationError, ServiceNotInitializedError,
)


def _request(path: str = "/api/v1/roles") -> Request:
    return Request({
        "type": "http", "method": "GET", "path": path,
        "headers": [], "query_string": b"",
    })


async def test_unexpected_error_hides_internals(caplog):
    res = await handle_unexpected_error(_request(), RuntimeError("dsn=postgres://secret"))
    assert res.status_code == 500
    assert json.loads(res.body) == {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": "internal",
            "severity": "critical",
        },
    }
    assert caplog.records[-1].exc_info is not None


async def test_domain_details_reach_the_client():
    res = await handle_orderdesk_error(_request(), ServiceNotInitializedError("Database"))
    body = json.loads(res.body)["error"]
    assert res.status_code == 503
    assert body["details"] == {"service": "Database"}


async def test_configuration_error_names_the_setting():
    error = InvalidConfigurationError("REDIS_DEFAULT_CACHE_TTL", "must be set")
    body = json.loads((await handle_orderdesk_error(_request(), error)).body)["error"]
    assert body["details"] == {"setting": "REDIS_DEFAULT_CACHE_TTL"}


async def test_log_level_follows_severity(caplog):
    with caplog.at_level(logging.INFO):
        await handle_orderdesk_error(_request(), CacheError("down", "get"))
        await handle_orderdesk_error(_request(), ServiceNotInitializedError("Database"))
    warning, error = caplog.records[-2:]
    assert warning.levelno == logging.WARNING
    assert error.levelno == logging.ERROR
    assert error.error_code == "SERVICE_NOT_INITIALIZED"
