"""Application settings loaded from environment variables.

Hey future me - every knob lives here, grouped by concern. Values come from
GRAIL_* env vars (nested groups use a double underscore, e.g.
GRAIL_API__BASE_URL=https://catalog.example.com). The API base URL has no
default: an httpx client can't do "same origin", so a missing or relative URL
fails at startup instead of on every request. Other defaults mirror what the
browser client shipped with: 10 second timeout, 25 items per page and a
10-page pagination window.
"""

from functools import lru_cache
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseModel):
    """Catalog API connection settings."""

    base_url: str = Field(..., description="Absolute catalog API base URL (http/https)")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout (s)")
    max_retries: int = Field(
        default=3, ge=1, description="Attempts per request when rate limited (429)"
    )
    initial_backoff_seconds: float = Field(
        default=1.0, ge=0, description="First wait after a 429, doubled per retry"
    )

    @field_validator("base_url")
    @classmethod
    def require_absolute_url(cls, v: str) -> str:
        """Reject relative or non-http(s) URLs, drop a trailing slash."""
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v.rstrip("/")


class CatalogSettings(BaseModel):
    """Listing sizes and display options for detail pages."""

    artist_per_page: int = Field(default=25, ge=1)
    label_per_page: int = Field(default=25, ge=1)
    master_per_page: int = Field(default=25, ge=1)
    currency: str = Field(default="USD", min_length=3, max_length=3)
    page_window_size: int = Field(default=10, ge=2)


class ObservabilitySettings(BaseModel):
    """Logging settings."""

    log_level: str = Field(default="INFO")
    json_format: bool = Field(default=False)


class Settings(BaseSettings):
    """Root settings object."""

    model_config = SettingsConfigDict(
        env_prefix="GRAIL_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "grailclient"
    api: ApiSettings
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


# Cached so every component sees the same instance. Tests build Settings()
# directly instead of going through here.
@lru_cache
def get_settings() -> Settings:
    """Get the cached settings instance."""
    return Settings()
