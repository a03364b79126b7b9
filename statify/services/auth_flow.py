"""
Spotify sign-in: authorization URL construction and callback completion.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError

from statify.clients.spotify import (
    SpotifyAPIClient,
    SpotifyAPIError,
    SpotifyOAuthClient,
    SpotifyTokenExchangeError,
)
from statify.core.config import AppSettings, resolve_redirect_uri
from statify.core.errors import AuthError, ConfigurationError
from statify.models import User, UserDraft
from statify.services.user_store import UserStore

logger = logging.getLogger(__name__)


def _first_image_url(profile: Dict[str, Any]) -> Optional[str]:
    images = profile.get("images") or []
    if images and isinstance(images[0], dict):
        return images[0].get("url")
    return None


def _follower_total(profile: Dict[str, Any]) -> int:
    followers = profile.get("followers") or {}
    try:
        return int(followers.get("total") or 0)
    except (TypeError, ValueError):
        return 0


class SpotifyAuthService:
    """Coordinates the authorization-code flow and the user upsert."""

    def __init__(
        self,
        *,
        settings: AppSettings,
        oauth_client: SpotifyOAuthClient,
        api_client: SpotifyAPIClient,
        user_store: UserStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._oauth = oauth_client
        self._api = api_client
        self._users = user_store
        self._clock = clock

    def redirect_uri(self, host: Optional[str]) -> str:
        return resolve_redirect_uri(self._settings.redirect_config(), host)

    def authorization_url(self, host: Optional[str]) -> str:
        """Build the consent URL for a request that arrived with ``host``."""
        if not self._settings.spotify.client_id:
            raise ConfigurationError("Spotify client ID not configured")

        redirect_uri = self.redirect_uri(host)
        logger.info("Using redirect URI: %s", redirect_uri)
        return self._oauth.build_authorization_url(redirect_uri)

    async def complete(self, code: Optional[str], host: Optional[str]) -> User:
        """
        Exchange ``code`` for tokens and upsert the matching user.

        Raises :class:`AuthError` for every failure so the caller can send the
        browser back to the front-end error state.
        """
        spotify = self._settings.spotify
        if not code or not spotify.client_id or not spotify.client_secret:
            raise AuthError("Missing code or credentials")

        redirect_uri = self.redirect_uri(host)
        logger.info("Callback using redirect URI: %s", redirect_uri)

        try:
            grant = await self._oauth.exchange_authorization_code(code, redirect_uri)
        except SpotifyTokenExchangeError as exc:
            raise AuthError("Failed to exchange authorization code.") from exc
        token_expiry = int(self._clock()) + grant.expires_in

        try:
            profile = await self._api.get_profile(grant.access_token)
        except SpotifyAPIError as exc:
            raise AuthError("Failed to fetch Spotify profile.") from exc

        external_id = str(profile["id"])
        try:
            draft = UserDraft(
                external_id=external_id,
                display_name=profile.get("display_name") or external_id,
                email=profile.get("email"),
                access_token=grant.access_token,
                refresh_token=grant.refresh_token,
                token_expiry=token_expiry,
                profile_image=_first_image_url(profile),
                followers=_follower_total(profile),
            )
        except ValidationError as exc:
            raise AuthError("Spotify profile could not be mapped to a user.") from exc

        user, created = self._users.get_or_create(draft)
        if created:
            logger.info("Created user %s for Spotify account %s", user.id, external_id)
            return user

        updated = self._users.update_tokens(
            user.id, grant.access_token, grant.refresh_token, token_expiry
        )
        if updated is None:
            raise AuthError("User record disappeared during token update.")
        return updated


__all__ = ["SpotifyAuthService"]
