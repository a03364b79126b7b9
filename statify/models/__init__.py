"""Domain models."""

from .user import User, UserDraft

__all__ = ["User", "UserDraft"]
