"""
Authenticated pass-through to the Spotify Web API.
"""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Any, Callable, Optional

from statify.clients.spotify import SpotifyAPIClient, SpotifyAPIError
from statify.core.errors import (
    TOKEN_EXPIRED,
    ParameterValidationError,
    Unauthorized,
    UpstreamError,
)
from statify.models import User
from statify.services.sessions import Session, current_user_id
from statify.services.user_store import UserStore

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20


class TimeRange(str, Enum):
    SHORT_TERM = "short_term"
    MEDIUM_TERM = "medium_term"
    LONG_TERM = "long_term"


DEFAULT_TIME_RANGE = TimeRange.MEDIUM_TERM


def parse_time_range(value: Optional[str]) -> TimeRange:
    """Validate the ``time_range`` query parameter; absent means medium term."""
    if value is None or value == "":
        return DEFAULT_TIME_RANGE
    try:
        return TimeRange(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in TimeRange)
        raise ParameterValidationError(
            f"Invalid time_range '{value}'. Expected one of: {allowed}."
        ) from exc


def parse_limit(value: Optional[str]) -> int:
    if value is None or value == "":
        return DEFAULT_LIMIT
    try:
        return int(value)
    except ValueError as exc:
        raise ParameterValidationError(
            f"Invalid limit '{value}'. Expected an integer."
        ) from exc


class SpotifyProxyService:
    """Resolves the session's user and forwards requests with their token."""

    def __init__(
        self,
        *,
        user_store: UserStore,
        api_client: SpotifyAPIClient,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._users = user_store
        self._api = api_client
        self._clock = clock

    def authorize(self, session: Optional[Session]) -> User:
        """Return the user behind ``session`` or raise :class:`Unauthorized`."""
        user_id = current_user_id(session)
        if user_id is None:
            raise Unauthorized()

        user = self._users.get(user_id)
        if user is None:
            logger.info("Session points at unknown user %s", user_id)
            raise Unauthorized("User not found")

        if user.token_expired(self._clock()):
            logger.info("Token expired for user %s", user.id)
            raise Unauthorized("Token expired", reason=TOKEN_EXPIRED)

        return user

    async def top_artists(
        self, user: User, *, time_range: Optional[str] = None, limit: Optional[str] = None
    ) -> Any:
        params = {
            "time_range": parse_time_range(time_range).value,
            "limit": parse_limit(limit),
        }
        return await self._forward(user, "/me/top/artists", params)

    async def top_tracks(
        self, user: User, *, time_range: Optional[str] = None, limit: Optional[str] = None
    ) -> Any:
        params = {
            "time_range": parse_time_range(time_range).value,
            "limit": parse_limit(limit),
        }
        return await self._forward(user, "/me/top/tracks", params)

    async def recently_played(self, user: User, *, limit: Optional[str] = None) -> Any:
        params = {"limit": parse_limit(limit)}
        return await self._forward(user, "/me/player/recently-played", params)

    async def _forward(self, user: User, path: str, params: dict) -> Any:
        try:
            return await self._api.get(path, access_token=user.access_token, params=params)
        except SpotifyAPIError as exc:
            logger.error("Spotify request %s failed for user %s: %s", path, user.id, exc)
            raise UpstreamError() from exc


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_TIME_RANGE",
    "SpotifyProxyService",
    "TimeRange",
    "parse_limit",
    "parse_time_range",
]
