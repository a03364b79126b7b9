"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_auth_service,
    get_proxy_service,
    get_session_cipher,
    get_session_store,
    get_spotify_api_client,
    get_spotify_oauth_client,
    get_user_store,
)
from .config import get_app_settings
from .session import clear_session_cookie, get_current_session, start_session

__all__ = [
    "clear_session_cookie",
    "get_app_settings",
    "get_auth_service",
    "get_current_session",
    "get_proxy_service",
    "get_session_cipher",
    "get_session_store",
    "get_spotify_api_client",
    "get_spotify_oauth_client",
    "get_user_store",
    "start_session",
]
