"""Public schema exports."""

from .auth import LoginResponse, LogoutResponse, MeResponse, UserSummary

__all__ = [
    "LoginResponse",
    "LogoutResponse",
    "MeResponse",
    "UserSummary",
]
