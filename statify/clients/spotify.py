"""
Spotify OAuth and Web API clients.

These wrappers build authorization URLs, exchange authorization codes and
issue bearer-authenticated Web API requests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from fastapi import status

from statify.core.config import SpotifySettings


class SpotifyTokenExchangeError(Exception):
    """Raised when the token endpoint rejects or fails an exchange."""


class SpotifyAPIError(Exception):
    """Raised when a Web API request fails or returns a non-success status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class TokenGrant:
    """Tokens returned by the authorization-code exchange."""

    access_token: str
    refresh_token: str
    expires_in: int


class SpotifyOAuthClient:
    """Build Spotify authorization URLs and exchange authorization codes."""

    def __init__(
        self,
        settings: SpotifySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    def build_authorization_url(self, redirect_uri: str) -> str:
        """Construct the Spotify consent URL."""
        params = {
            "client_id": self._settings.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": " ".join(self._settings.scopes),
            "show_dialog": "true",
        }
        return f"{self._settings.auth_url}?{urlencode(params)}"

    async def exchange_authorization_code(self, code: str, redirect_uri: str) -> TokenGrant:
        """
        Exchange an authorization code for tokens.

        ``redirect_uri`` must equal the one sent with the authorization request.
        """
        payload = {
            "code": code,
            "redirect_uri": redirect_uri,
            "grant_type": "authorization_code",
        }
        auth = (self._settings.client_id or "", self._settings.client_secret or "")

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self._settings.token_url, data=payload, auth=auth
                )
        except httpx.HTTPError as exc:
            raise SpotifyTokenExchangeError(f"Token request failed: {exc!r}") from exc

        if response.status_code != status.HTTP_200_OK:
            raise SpotifyTokenExchangeError(response.text)

        try:
            token_payload = response.json()
        except ValueError as exc:
            raise SpotifyTokenExchangeError("Token endpoint returned invalid JSON.") from exc

        if not isinstance(token_payload, dict):
            raise SpotifyTokenExchangeError("Token endpoint returned an unexpected payload.")

        access_token = token_payload.get("access_token")
        refresh_token = token_payload.get("refresh_token")
        expires_in = token_payload.get("expires_in")

        if not access_token or not refresh_token or not expires_in:
            raise SpotifyTokenExchangeError("Incomplete token payload returned from Spotify.")

        try:
            lifetime = int(expires_in)
        except (TypeError, ValueError) as exc:
            raise SpotifyTokenExchangeError(
                f"Token payload has a non-numeric expires_in: {expires_in!r}"
            ) from exc

        return TokenGrant(access_token, refresh_token, lifetime)


class SpotifyAPIClient:
    """Thin bearer-authenticated wrapper around the Spotify Web API."""

    def __init__(
        self,
        settings: SpotifySettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def get(
        self,
        path: str,
        *,
        access_token: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Issue ``GET {api_base_url}{path}`` and return the decoded JSON body."""
        url = f"{self._settings.api_base_url.rstrip('/')}/{path.lstrip('/')}"
        headers = {"Authorization": f"Bearer {access_token}"}

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request_timeout, transport=self._transport
            ) as client:
                response = await client.get(url, headers=headers, params=params)
        except httpx.HTTPError as exc:
            raise SpotifyAPIError(f"Request to {path} failed: {exc!r}") from exc

        if response.is_error:
            raise SpotifyAPIError(
                f"Spotify returned {response.status_code} for {path}: {response.text}",
                status_code=response.status_code,
            )

        if response.status_code == status.HTTP_204_NO_CONTENT:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise SpotifyAPIError(
                f"Spotify returned a non-JSON body for {path}.",
                status_code=response.status_code,
            ) from exc

    async def get_profile(self, access_token: str) -> Dict[str, Any]:
        """Fetch the current user's profile (``GET /me``)."""
        profile = await self.get("/me", access_token=access_token)
        if not isinstance(profile, dict) or not profile.get("id"):
            raise SpotifyAPIError("Spotify profile response is missing an id.")
        return profile


__all__ = [
    "SpotifyAPIClient",
    "SpotifyAPIError",
    "SpotifyOAuthClient",
    "SpotifyTokenExchangeError",
    "TokenGrant",
]
