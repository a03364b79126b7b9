"""Schemas returned by the authentication endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from statify.models import User


class LoginResponse(BaseModel):
    """Authorization URL the front-end should navigate to."""

    url: str = Field(..., description="Spotify consent URL.")


class LogoutResponse(BaseModel):
    success: bool
    message: str


class UserSummary(BaseModel):
    """Public view of a stored user; tokens are never exposed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    external_id: str
    display_name: str
    email: Optional[str] = None
    profile_image: Optional[str] = None
    followers: int = 0

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            external_id=user.external_id,
            display_name=user.display_name,
            email=user.email,
            profile_image=user.profile_image,
            followers=user.followers,
        )


class MeResponse(BaseModel):
    authenticated: bool
    user: Optional[UserSummary] = None


__all__ = ["LoginResponse", "LogoutResponse", "MeResponse", "UserSummary"]
