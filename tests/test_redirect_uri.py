try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from statify.core.config import (
    AppSettings,
    RedirectURIConfig,
    SpotifySettings,
    resolve_redirect_uri,
)


def test_first_configured_domain_wins() -> None:
    config = RedirectURIConfig(domains=("stats.example.com ", "other.example.com"))

    assert (
        resolve_redirect_uri(config, "ignored.example.org")
        == "https://stats.example.com/api/auth/callback"
    )


@pytest.mark.parametrize(
    ("host", "production", "expected"),
    [
        ("localhost:5000", False, "http://localhost:5000/api/auth/callback"),
        ("localhost:5000", True, "https://localhost:5000/api/auth/callback"),
        ("stats.example.org", False, "https://stats.example.org/api/auth/callback"),
        (None, False, "http://localhost:5000/api/auth/callback"),
    ],
)
def test_host_header_fallback(host, production, expected) -> None:
    config = RedirectURIConfig(production=production)

    assert resolve_redirect_uri(config, host) == expected


def test_resolution_is_repeatable() -> None:
    config = RedirectURIConfig(domains=(), production=False)

    assert resolve_redirect_uri(config, "localhost:5000") == resolve_redirect_uri(
        config, "localhost:5000"
    )


def test_settings_split_comma_separated_domains(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("APP_DOMAINS", raising=False)
    monkeypatch.setenv("REPLIT_DOMAINS", "a.example.com, b.example.com")
    monkeypatch.setenv("APP_ENV", "production")

    settings = AppSettings(spotify=SpotifySettings(client_id="id"))

    assert settings.domains == ("a.example.com", "b.example.com")
    assert settings.is_production is True
    assert settings.redirect_config() == RedirectURIConfig(
        domains=("a.example.com", "b.example.com"), production=True
    )


def test_scopes_accept_comma_separated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SPOTIFY_SCOPES", "user-read-email, user-top-read")

    settings = SpotifySettings()

    assert settings.scopes == ("user-read-email", "user-top-read")
