"""
Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status and client-facing message it maps to, so
the exception handler in :mod:`statify.main` can render them uniformly.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Optional


class StatifyError(Exception):
    """Base class for errors that are reported to API clients."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_payload(self) -> dict:
        return {"message": self.message}


class ConfigurationError(StatifyError):
    """A required client id or secret is not configured."""


class AuthError(StatifyError):
    """The OAuth callback could not complete."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Authentication failed"


class Unauthorized(StatifyError):
    """No session, a stale session, or an expired access token."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = "Unauthorized"

    def __init__(self, message: Optional[str] = None, *, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.reason = reason

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.reason:
            payload["reason"] = self.reason
        return payload


class ParameterValidationError(StatifyError):
    """A query parameter failed validation."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = "Invalid request parameter"


class UpstreamError(StatifyError):
    """The proxied Spotify call failed; details stay in the server log."""


class SessionStoreError(StatifyError):
    """The session store could not complete an operation."""

    default_message = "Error during logout"


TOKEN_EXPIRED = "token_expired"


__all__ = [
    "AuthError",
    "ConfigurationError",
    "ParameterValidationError",
    "SessionStoreError",
    "StatifyError",
    "TOKEN_EXPIRED",
    "Unauthorized",
    "UpstreamError",
]
