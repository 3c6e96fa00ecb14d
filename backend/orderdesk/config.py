"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - A non-numeric REDIS_DEFAULT_CACHE_TTL fails settings loading (startup)
    - REDIS_DEFAULT_CACHE_TTL is required whenever REDIS_URL is set

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
    - Cache disabled (redis_url None) unless explicitly configured
"""

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://orderdesk:orderdesk@db:5432/orderdesk"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers give postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Result cache
    redis_url: str | None = None
    redis_default_cache_ttl: int | None = Field(None, ge=0)

    @model_validator(mode="after")
    def require_ttl_with_cache(self):
        if self.redis_url and self.redis_default_cache_ttl is None:
            raise ValueError("REDIS_DEFAULT_CACHE_TTL is required when REDIS_URL is set")
        return self

    # Pagination
    default_page_limit: int = Field(10, ge=1)
    max_page_limit: int = Field(100, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
