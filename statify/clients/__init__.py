"""Expose constructed client wrappers."""

from .spotify import SpotifyAPIClient, SpotifyOAuthClient

__all__ = [
    "SpotifyAPIClient",
    "SpotifyOAuthClient",
]
