try:
    from . import _bootstrap  # noqa: F401
except Exception:  # pragma: no cover - fallback for direct execution
    import _bootstrap  # type: ignore # noqa: F401

from datetime import datetime, timedelta, timezone

from statify.services.sessions import (
    Session,
    SessionStore,
    bind,
    current_user_id,
    is_authenticated,
)
from statify.services.user_store import UserStore


def test_bind_marks_session_authenticated(draft_factory) -> None:
    user = UserStore().create(draft_factory("spotify-a"))
    session = Session(session_id="s1")

    bind(session, user)

    assert session.user_id == user.id
    assert session.external_id == "spotify-a"
    assert is_authenticated(session) is True
    assert current_user_id(session) == user.id


def test_missing_flag_or_user_is_unauthenticated() -> None:
    assert is_authenticated(None) is False
    assert is_authenticated(Session(session_id="s1")) is False
    assert is_authenticated(Session(session_id="s2", user_id=3)) is False
    assert is_authenticated(Session(session_id="s3", authenticated=True)) is False
    assert current_user_id(Session(session_id="s4", user_id=3)) is None


def test_store_create_get_destroy() -> None:
    store = SessionStore()

    session = store.create()
    assert store.get(session.session_id) is session

    store.destroy(session.session_id)
    assert store.get(session.session_id) is None

    store.destroy(session.session_id)
    assert len(store) == 0


def test_store_prunes_sessions_older_than_ttl() -> None:
    store = SessionStore(ttl_seconds=60)
    stale = store.create()
    fresh = store.create()
    stale.updated_at = datetime.now(timezone.utc) - timedelta(seconds=120)

    assert store.get(stale.session_id) is None
    assert store.get(fresh.session_id) is fresh


def test_save_refreshes_activity_timestamp() -> None:
    store = SessionStore(ttl_seconds=60)
    session = store.create()
    session.updated_at = datetime.now(timezone.utc) - timedelta(seconds=50)

    store.save(session)

    assert datetime.now(timezone.utc) - session.updated_at < timedelta(seconds=5)
