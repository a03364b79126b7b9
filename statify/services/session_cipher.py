"""Symmetric encryption for the session cookie."""

from __future__ import annotations

import base64
import hashlib
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken


class SessionCookieCipher:
    """Seal session ids into cookie values using a derived Fernet key."""

    def __init__(self, *, secret: str, max_age_seconds: Optional[int] = None) -> None:
        if not secret:
            raise ValueError("Session secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        key = base64.urlsafe_b64encode(digest)
        self._fernet = Fernet(key)
        self._max_age = max_age_seconds

    def seal(self, session_id: str) -> str:
        """Encrypt a session id and return the cookie value."""
        token = self._fernet.encrypt(session_id.encode("utf-8"))
        return token.decode("utf-8")

    def unseal(self, cookie_value: str) -> str:
        """Decrypt a cookie value, rejecting tampered or stale cookies."""
        try:
            plaintext = self._fernet.decrypt(
                cookie_value.encode("utf-8"), ttl=self._max_age
            )
        except InvalidToken as exc:
            raise ValueError("Invalid or expired session cookie.") from exc
        return plaintext.decode("utf-8")


__all__ = ["SessionCookieCipher"]
