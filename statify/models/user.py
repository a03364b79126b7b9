"""
Domain models for Spotify-authenticated users.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserDraft(BaseModel):
    """A user record before the store assigns its surrogate id."""

    external_id: str = Field(..., description="Spotify user id; unique and immutable.")
    display_name: str
    email: Optional[str] = None
    access_token: str
    refresh_token: str
    token_expiry: int = Field(..., description="Absolute expiry in epoch seconds.")
    profile_image: Optional[str] = None
    followers: int = 0


class User(UserDraft):
    """A stored user record."""

    id: int

    def token_expired(self, now: float) -> bool:
        return self.token_expiry <= now


__all__ = ["User", "UserDraft"]
