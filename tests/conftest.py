"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

import time
from typing import Any, Callable

import httpx
import pytest

try:
    from ._fakes import FakeAPIClient, FakeOAuthClient
except ImportError:  # pragma: no cover - fallback for direct execution
    from _fakes import FakeAPIClient, FakeOAuthClient  # type: ignore
from statify.core.config import AppSettings, SessionSettings, SpotifySettings
from statify.models import User, UserDraft
from statify.services import SessionCookieCipher, SessionStore, UserStore
from statify.services.sessions import bind


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture()
def settings() -> AppSettings:
    return AppSettings(
        environment="development",
        domains=(),
        spotify=SpotifySettings(
            client_id="test-client-id",
            client_secret="test-client-secret",
        ),
        session=SessionSettings(secret="test-session-secret"),
    )


def make_draft(external_id: str = "spotify-user-1", **overrides: Any) -> UserDraft:
    values: dict[str, Any] = {
        "external_id": external_id,
        "display_name": "Ada Listener",
        "email": "ada@example.com",
        "access_token": "access-0",
        "refresh_token": "refresh-0",
        "token_expiry": int(time.time()) + 3600,
        "profile_image": "https://i.scdn.co/image/ada-1",
        "followers": 42,
    }
    values.update(overrides)
    return UserDraft(**values)


@pytest.fixture()
def draft_factory() -> Callable[..., UserDraft]:
    return make_draft


class SpotifyAppState:
    """Isolated collaborators wired into the FastAPI app for one test."""

    def __init__(self, settings: AppSettings) -> None:
        self.settings = settings
        self.user_store = UserStore()
        self.session_store = SessionStore(ttl_seconds=settings.session.ttl_seconds)
        self.cipher = SessionCookieCipher(
            secret=settings.session.secret,
            max_age_seconds=settings.session.ttl_seconds,
        )
        self.oauth = FakeOAuthClient(settings.spotify)
        self.api = FakeAPIClient(settings.spotify)

    def session_cookies(self, user: User) -> dict[str, str]:
        """Bind a new session to ``user`` and return the matching cookie jar."""
        session = self.session_store.create()
        bind(session, user)
        self.session_store.save(session)
        return {self.settings.session.cookie_name: self.cipher.seal(session.session_id)}

    def client(self, **kwargs: Any) -> httpx.AsyncClient:
        from statify.main import app

        return httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app),
            base_url="http://testserver",
            **kwargs,
        )


@pytest.fixture()
def spotify_app(settings: AppSettings):
    from statify import dependencies
    from statify.main import app

    state = SpotifyAppState(settings)
    app.dependency_overrides.update(
        {
            dependencies.get_app_settings: lambda: state.settings,
            dependencies.get_user_store: lambda: state.user_store,
            dependencies.get_session_store: lambda: state.session_store,
            dependencies.get_session_cipher: lambda: state.cipher,
            dependencies.get_spotify_oauth_client: lambda: state.oauth,
            dependencies.get_spotify_api_client: lambda: state.api,
        }
    )

    yield state

    app.dependency_overrides.clear()
