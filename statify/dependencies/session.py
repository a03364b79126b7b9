"""
Session cookie handling for FastAPI routes.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Request, Response

from statify.core.config import AppSettings
from statify.dependencies.clients import get_session_cipher, get_session_store
from statify.dependencies.config import get_app_settings
from statify.models import User
from statify.services import SessionCookieCipher, SessionStore
from statify.services.sessions import Session, bind

logger = logging.getLogger(__name__)


def get_current_session(
    request: Request,
    settings: AppSettings = Depends(get_app_settings),
    store: SessionStore = Depends(get_session_store),
    cipher: SessionCookieCipher = Depends(get_session_cipher),
) -> Optional[Session]:
    """Resolve the session named by the request cookie, if any."""
    cookie_value = request.cookies.get(settings.session.cookie_name)
    if not cookie_value:
        return None
    try:
        session_id = cipher.unseal(cookie_value)
    except ValueError:
        logger.debug("Ignoring unreadable session cookie")
        return None
    return store.get(session_id)


def start_session(
    response: Response,
    user: User,
    *,
    settings: AppSettings,
    store: SessionStore,
    cipher: SessionCookieCipher,
    previous: Optional[Session] = None,
) -> Session:
    """Bind ``user`` to a freshly issued session and set its cookie."""
    if previous is not None:
        store.destroy(previous.session_id)

    session = store.create()
    bind(session, user)
    store.save(session)

    response.set_cookie(
        key=settings.session.cookie_name,
        value=cipher.seal(session.session_id),
        max_age=store.ttl_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    logger.info("Session created for user: %s", user.external_id)
    return session


def clear_session_cookie(response: Response, settings: AppSettings) -> None:
    response.delete_cookie(
        key=settings.session.cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


__all__ = ["clear_session_cookie", "get_current_session", "start_session"]
