"""Pre-flight check for the ``.env`` file a Statify deployment boots with.

Loads the same settings the API would, insists on the Spotify client
credentials and prints the OAuth redirect URI those settings resolve to, so it
can be compared with the URI registered in the Spotify developer dashboard
before the first sign-in fails with ``INVALID_CLIENT``.

Example usages::

    python -m scripts.check_env --env-file /srv/statify/.env

    # Preview the fallback URI when no public domain is configured.
    python -m scripts.check_env --env-file .env --host localhost:5000
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from statify.core.config import (
    AppSettings,
    SessionSettings,
    SpotifySettings,
    resolve_redirect_uri,
)

EXIT_OK = 0
EXIT_MISSING_FILE = 1
EXIT_INVALID_SETTINGS = 2

REQUIRED_CREDENTIALS = ("SPOTIFY_CLIENT_ID", "SPOTIFY_CLIENT_SECRET")


def load_settings(env_file: Path) -> AppSettings:
    """Build settings from ``env_file``; process environment variables still win."""
    return AppSettings(
        _env_file=env_file,
        spotify=SpotifySettings(_env_file=env_file),
        session=SessionSettings(_env_file=env_file),
    )


def missing_credentials(settings: AppSettings) -> list[str]:
    values = dict(
        zip(
            REQUIRED_CREDENTIALS,
            (settings.spotify.client_id, settings.spotify.client_secret),
        )
    )
    return [name for name in REQUIRED_CREDENTIALS if not values[name]]


def summarize(settings: AppSettings, host: Optional[str]) -> list[str]:
    """Human-readable lines describing what the API will do with ``settings``."""
    redirect_uri = resolve_redirect_uri(settings.redirect_config(), host)
    if settings.domains:
        source = f"domain {settings.domains[0]}"
    else:
        source = f"request host {host or 'localhost:5000'}"
    return [
        f"Environment: {settings.environment}",
        f"Redirect URI: {redirect_uri} (from {source})",
        f"Scopes: {' '.join(settings.spotify.scopes)}",
        f"Session cookie: {settings.session.cookie_name}, "
        f"ttl {settings.session.ttl_seconds}s",
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check Statify settings and show the Spotify redirect URI."
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        type=Path,
        help="Path to the environment file (default: .env in the working directory).",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Host header to assume when no domain is configured.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    env_file: Path = args.env_file

    if not env_file.is_file():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_MISSING_FILE

    try:
        settings = load_settings(env_file)
    except ValidationError as exc:
        print(f"Invalid settings in {env_file}:\n{exc}", file=sys.stderr)
        return EXIT_INVALID_SETTINGS

    missing = missing_credentials(settings)
    if missing:
        print(f"Missing Spotify credentials: {', '.join(missing)}", file=sys.stderr)
        return EXIT_INVALID_SETTINGS

    for line in summarize(settings, args.host):
        print(line)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
