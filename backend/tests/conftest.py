"""Root conftest — shared test configuration."""

import os

# Tests never talk to a real database or cache
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.pop("REDIS_URL", None)
os.environ.setdefault("LOG_FORMAT", "text")
