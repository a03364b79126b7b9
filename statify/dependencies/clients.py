"""
Factory functions to provide shared clients, stores and services as FastAPI
dependencies.

Stores are built once per process; tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends

from statify.clients import SpotifyAPIClient, SpotifyOAuthClient
from statify.core.config import AppSettings
from statify.dependencies.config import get_app_settings
from statify.services import (
    SessionCookieCipher,
    SessionStore,
    SpotifyAuthService,
    SpotifyProxyService,
    UserStore,
)


@lru_cache()
def _settings() -> AppSettings:
    """Internal helper to cache settings for client factories."""
    return get_app_settings()


@lru_cache()
def get_user_store() -> UserStore:
    """Provide the process-wide user store."""
    return UserStore()


@lru_cache()
def get_session_store() -> SessionStore:
    """Provide the process-wide session store."""
    return SessionStore(ttl_seconds=_settings().session.ttl_seconds)


@lru_cache()
def get_session_cipher() -> SessionCookieCipher:
    """Provide the cookie sealing helper keyed by the session secret."""
    settings = _settings()
    return SessionCookieCipher(
        secret=settings.session.secret,
        max_age_seconds=settings.session.ttl_seconds,
    )


@lru_cache()
def get_spotify_oauth_client() -> SpotifyOAuthClient:
    """Create a singleton Spotify OAuth client."""
    return SpotifyOAuthClient(_settings().spotify)


@lru_cache()
def get_spotify_api_client() -> SpotifyAPIClient:
    """Create a singleton Spotify Web API client."""
    return SpotifyAPIClient(_settings().spotify)


def get_auth_service(
    settings: AppSettings = Depends(get_app_settings),
    oauth_client: SpotifyOAuthClient = Depends(get_spotify_oauth_client),
    api_client: SpotifyAPIClient = Depends(get_spotify_api_client),
    user_store: UserStore = Depends(get_user_store),
) -> SpotifyAuthService:
    """Build the sign-in service from the injected collaborators."""
    return SpotifyAuthService(
        settings=settings,
        oauth_client=oauth_client,
        api_client=api_client,
        user_store=user_store,
    )


def get_proxy_service(
    api_client: SpotifyAPIClient = Depends(get_spotify_api_client),
    user_store: UserStore = Depends(get_user_store),
) -> SpotifyProxyService:
    """Build the Web API pass-through service."""
    return SpotifyProxyService(user_store=user_store, api_client=api_client)


__all__ = [
    "get_auth_service",
    "get_proxy_service",
    "get_session_cipher",
    "get_session_store",
    "get_spotify_api_client",
    "get_spotify_oauth_client",
    "get_user_store",
]
