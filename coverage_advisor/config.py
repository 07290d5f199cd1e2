"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache), single instance per process
    - audit_write_timeout_seconds is strictly positive
    - max_request_bytes is strictly positive (default 10 KiB)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://postgres:password@db:5432/insurance_recommendations"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Audit
    audit_write_timeout_seconds: float = 5.0

    @field_validator("audit_write_timeout_seconds")
    @classmethod
    def check_positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("audit_write_timeout_seconds must be positive")
        return v

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    max_request_bytes: int = 10_240

    @field_validator("max_request_bytes")
    @classmethod
    def check_positive_body_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_request_bytes must be positive")
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
