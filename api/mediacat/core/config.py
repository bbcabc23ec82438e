"""Application settings parsed from environment variables and defaults.

``settings`` is resolved on first access so tooling such as ``mediacat --help``
can import this module without a complete environment.
"""

import json
from functools import lru_cache
from typing import Any, Optional
from urllib.parse import urlsplit

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _as_host_list(value: Any) -> list[str]:
    """Accept a list, a JSON array string, or comma-separated hosts/CIDRs."""
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            try:
                value = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ValueError(f"invalid JSON list: {exc.msg}") from exc
        else:
            value = text.split(",")
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected a list of hosts or networks")
    return [entry for entry in (str(item).strip() for item in value) if entry]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "Media Catalog API"
    environment: str = "development"
    api_prefix: str = ""

    log_level: str = "INFO"
    log_json: bool = False
    log_timestamp: bool = True

    redis_url: str = "redis://redis:6379/0"

    storage_bucket: str
    storage_endpoint_url: str = ""
    s3_use_path_style: bool = False
    aws_region: Optional[str] = None
    presign_expires_seconds: int = Field(default=900, gt=0)

    server_host: str = "0.0.0.0"
    server_port: int = 8080
    server_shutdown_timeout: int = Field(default=30, gt=0)

    healthcheck_timeout: float = Field(default=10.0, gt=0)
    health_allowlist: list[str] | str = Field(default_factory=list)

    @field_validator("storage_bucket")
    @classmethod
    def _require_bucket(cls, value: str) -> str:
        """Reject blank bucket names."""
        stripped = value.strip()
        if not stripped:
            raise ValueError("STORAGE_BUCKET cannot be blank")
        return stripped

    @field_validator("storage_endpoint_url")
    @classmethod
    def _validate_endpoint_url(cls, value: str) -> str:
        """Allow an empty base or an absolute http(s) URL."""
        stripped = value.strip()
        if not stripped:
            return ""
        parts = urlsplit(stripped)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError("STORAGE_ENDPOINT_URL must be an absolute http(s) URL")
        return stripped

    @field_validator("health_allowlist", mode="before")
    @classmethod
    def _parse_health_allowlist(cls, value: Any) -> list[str]:
        return _as_host_list(value)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


def env_usage() -> list[tuple[str, str]]:
    """Return ``(ENV_NAME, description)`` pairs for every setting."""
    rows: list[tuple[str, str]] = []
    for name, field in Settings.model_fields.items():
        if field.is_required():
            detail = "required"
        else:
            default = field.get_default(call_default_factory=True)
            detail = f"default: {default!r}"
        rows.append((name.upper(), detail))
    return rows


def __getattr__(name: str) -> Any:
    if name == "settings":
        return get_settings()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
