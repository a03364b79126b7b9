"""Spotify listening statistics service."""
