"""Logger configuration settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Logger configuration settings.

    All settings can be overridden via environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "staging", "production"] = Field(
        default="production",
        description="'development' installs the human-readable renderer, anything else JSON",
    )

    # Service identity (serviceContext)
    service_name: str | None = Field(
        default=None, description="Service name reported to Stackdriver"
    )
    service_version: str | None = Field(
        default=None, description="Service version reported to Stackdriver"
    )
    service_manifest: str = Field(
        default="pyproject.toml",
        description=(
            "pyproject.toml read for the identity when SERVICE_NAME is unset; empty disables"
        ),
    )

    # Filtering
    log_filter: str | None = Field(
        default=None,
        description="Level filter, e.g. 'info' or 'warning,my_app.db=debug'",
    )
    ignored_paths: str = Field(
        default="", description="Comma-separated logger names whose records are dropped"
    )
    filter_ignored_paths: bool = True

    # Document shape
    custom_fields: bool = Field(
        default=False, description="Merge extra={...} fields into the JSON document"
    )
    service_context_fallback: bool = Field(
        default=False,
        description="Always emit serviceContext, using 'unknown_service' when no identity is set",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


__all__ = ["Settings", "get_settings"]
