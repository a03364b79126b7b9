"""Service layer exports."""

from .auth_flow import SpotifyAuthService
from .proxy import SpotifyProxyService, TimeRange
from .session_cipher import SessionCookieCipher
from .sessions import Session, SessionStore
from .user_store import UserStore

__all__ = [
    "Session",
    "SessionCookieCipher",
    "SessionStore",
    "SpotifyAuthService",
    "SpotifyProxyService",
    "TimeRange",
    "UserStore",
]
