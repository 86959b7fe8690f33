"""Settings for findme."""

from typing import Literal

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FINDME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote services
    ip_lookup_url: HttpUrl = Field(
        default=HttpUrl("https://api.ipify.org"),
        description="Public IP lookup endpoint (called with format=json)",
    )
    reverse_geocode_url: HttpUrl = Field(
        default=HttpUrl("https://api.bigdatacloud.net/data/reverse-geocode-client"),
        description="Reverse geocoding endpoint",
    )
    locality_language: str = Field(
        default="en", description="Language for place names from the geocoder"
    )
    http_timeout: float | None = Field(
        default=None,
        description="HTTP timeout in seconds; unset keeps the httpx default",
    )

    # Map viewport
    default_latitude: float = Field(default=32.4279, description="Initial map centre")
    default_longitude: float = Field(default=53.6880, description="Initial map centre")
    default_delta: float = Field(default=10.0, description="Initial map span in degrees")
    locate_delta: float = Field(
        default=0.005, description="Map span after a successful locate"
    )

    # Platform stand-ins
    location_permission: Literal["prompt", "granted", "denied"] = Field(
        default="prompt",
        description="Ask on the console, or answer the permission request up front",
    )
    fixed_latitude: float | None = Field(
        default=None, description="Use this latitude instead of geo-IP"
    )
    fixed_longitude: float | None = Field(
        default=None, description="Use this longitude instead of geo-IP"
    )

    # Presentation
    panel_label: str = Field(
        default="github.com/tariux", description="Fixed label at the top of the panel"
    )
    log_level: str = Field(default="WARNING", description="Minimum log level")


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
