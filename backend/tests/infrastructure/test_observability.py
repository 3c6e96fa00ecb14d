"""Structured Logging — formatter output and idempotent setup."""

import json
import logging

import pytest

from orderdesk.infrastructure.observability import (
    JSONFormatter, TextFormatter, setup_logging,
)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "orderdesk.services.cached_listing", logging.WARNING, __file__, 1,
        "Cache read bypassed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_surfaces_extras_and_skips_none():
    entry = json.loads(JSONFormatter().format(
        _record(cache_key="role:get:list:abc", page=2, user_id=None),
    ))
    assert entry["level"] == "WARNING"
    assert entry["message"] == "Cache read bypassed"
    assert entry["cache_key"] == "role:get:list:abc"
    assert entry["page"] == 2
    assert "user_id" not in entry


def test_json_timestamp_comes_from_record():
    record = _record()
    record.created = 0
    entry = json.loads(JSONFormatter().format(record))
    assert entry["timestamp"] == "1970-01-01T00:00:00+00:00"


def test_text_appends_extras():
    line = TextFormatter().format(_record(error_code="CACHE_ERROR"))
    assert line.endswith("Cache read bypassed error_code=CACHE_ERROR")


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_logging_replaces_its_own_handler(restore_root_logger):
    setup_logging("DEBUG", "json")
    second = setup_logging("info", "text")

    ours = [h for h in restore_root_logger.handlers if h.get_name() == "orderdesk"]
    assert ours == [second]
    assert isinstance(second.formatter, TextFormatter)
    assert restore_root_logger.level == logging.INFO
