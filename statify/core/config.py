"""
Application configuration models and helpers.

Centralizes settings management so the FastAPI app, the OAuth flow and the
maintenance scripts share a consistent configuration surface.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

CALLBACK_PATH = "/api/auth/callback"


def _split_list(value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
    """Accept comma or whitespace separated strings as well as sequences."""
    if value is None:
        return ()
    if isinstance(value, (tuple, list)):
        return tuple(item.strip() for item in value if item and item.strip())
    normalized = value.replace(",", " ")
    return tuple(item for item in normalized.split() if item)


class SpotifySettings(BaseSettings):
    """Configuration required for interacting with the Spotify accounts and Web API."""

    model_config = SettingsConfigDict(
        env_prefix="SPOTIFY_", env_file=".env", extra="ignore"
    )

    client_id: Optional[str] = Field(
        None,
        description="OAuth client id. Absence is reported when the flow starts.",
    )
    client_secret: Optional[str] = None
    auth_url: str = "https://accounts.spotify.com/authorize"
    token_url: str = "https://accounts.spotify.com/api/token"
    api_base_url: str = "https://api.spotify.com/v1"
    scopes: Annotated[tuple[str, ...], NoDecode] = (
        "user-read-private",
        "user-read-email",
        "user-top-read",
        "user-read-recently-played",
    )
    request_timeout: float = Field(
        10.0,
        description="Timeout in seconds applied to every outbound Spotify call.",
    )

    @field_validator("scopes", mode="before")
    @classmethod
    def _split_scopes(cls, value: str | tuple[str, ...] | list[str]) -> tuple[str, ...]:
        """Support providing scopes as a comma or space separated string."""
        return _split_list(value)


class SessionSettings(BaseSettings):
    """Server-side session and cookie configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_", env_file=".env", extra="ignore"
    )

    secret: str = "spotify-stats-secret-key"
    cookie_name: str = "statify_session"
    ttl_seconds: int = Field(24 * 60 * 60, gt=0)


class AppSettings(BaseSettings):
    """Root settings object for the FastAPI application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = Field("development", validation_alias="APP_ENV")
    log_level: str = Field("INFO", validation_alias="APP_LOG_LEVEL")
    domains: Annotated[tuple[str, ...], NoDecode] = Field(
        (),
        validation_alias=AliasChoices("APP_DOMAINS", "REPLIT_DOMAINS"),
        description="Canonical public domains; the first one builds the redirect URI.",
    )
    spotify: SpotifySettings = Field(default_factory=SpotifySettings)
    session: SessionSettings = Field(default_factory=SessionSettings)

    @field_validator("domains", mode="before")
    @classmethod
    def _split_domains(cls, value: str | tuple[str, ...] | list[str] | None) -> tuple[str, ...]:
        if value is None:
            return ()
        if isinstance(value, str):
            return tuple(item.strip() for item in value.split(",") if item.strip())
        return _split_list(value)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def redirect_config(self) -> RedirectURIConfig:
        """Snapshot the values that decide the OAuth redirect URI."""
        return RedirectURIConfig(domains=self.domains, production=self.is_production)


@dataclass(frozen=True)
class RedirectURIConfig:
    """Explicit inputs for :func:`resolve_redirect_uri`."""

    domains: tuple[str, ...] = ()
    production: bool = False
    callback_path: str = CALLBACK_PATH


def resolve_redirect_uri(config: RedirectURIConfig, host: str | None) -> str:
    """
    Derive the OAuth callback URL.

    Spotify compares the redirect URI of the token exchange byte for byte with
    the one used for authorization, so both legs of the flow must call this.
    """
    if config.domains:
        domain = config.domains[0].strip()
        return f"https://{domain}{config.callback_path}"

    host = host or "localhost:5000"
    scheme = "http" if "localhost" in host and not config.production else "https"
    return f"{scheme}://{host}{config.callback_path}"


@lru_cache()
def get_settings() -> AppSettings:
    """Return a cached settings object."""
    return AppSettings()


__all__ = [
    "AppSettings",
    "CALLBACK_PATH",
    "RedirectURIConfig",
    "SessionSettings",
    "SpotifySettings",
    "get_settings",
    "resolve_redirect_uri",
]
