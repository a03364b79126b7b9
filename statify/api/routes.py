"""
FastAPI routes for Spotify sign-in and the listening statistics proxy.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from statify.core.config import AppSettings
from statify.core.errors import SessionStoreError, Unauthorized
from statify.dependencies import (
    clear_session_cookie,
    get_app_settings,
    get_auth_service,
    get_current_session,
    get_proxy_service,
    get_session_cipher,
    get_session_store,
    start_session,
)
from statify.schemas import LoginResponse, LogoutResponse, MeResponse, UserSummary
from statify.services import (
    SessionCookieCipher,
    SessionStore,
    SpotifyAuthService,
    SpotifyProxyService,
)
from statify.services.sessions import Session

router = APIRouter()
logger = logging.getLogger(__name__)

AUTH_FAILURE_REDIRECT = "/?error=auth_failure"

CurrentSession = Annotated[Optional[Session], Depends(get_current_session)]


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/login", response_model=LoginResponse)
async def login(
    request: Request,
    auth_service: Annotated[SpotifyAuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """Return the Spotify consent URL; the front-end performs the navigation."""
    url = auth_service.authorization_url(request.headers.get("host"))
    return LoginResponse(url=url)


@router.get("/auth/callback")
async def auth_callback(
    request: Request,
    session: CurrentSession,
    auth_service: Annotated[SpotifyAuthService, Depends(get_auth_service)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    cipher: Annotated[SessionCookieCipher, Depends(get_session_cipher)],
    code: Optional[str] = Query(default=None, description="Authorization code from Spotify."),
) -> Response:
    """Complete the OAuth exchange, bind a session and send the browser home."""
    try:
        user = await auth_service.complete(code, request.headers.get("host"))
        response = RedirectResponse(url="/", status_code=HTTPStatus.TEMPORARY_REDIRECT)
        start_session(
            response,
            user,
            settings=settings,
            store=session_store,
            cipher=cipher,
            previous=session,
        )
    except Exception:  # pylint: disable=broad-except
        logger.exception("OAuth callback error")
        return RedirectResponse(
            url=AUTH_FAILURE_REDIRECT, status_code=HTTPStatus.TEMPORARY_REDIRECT
        )
    return response


@router.get("/auth/logout", response_model=LogoutResponse)
async def logout(
    session: CurrentSession,
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    session_store: Annotated[SessionStore, Depends(get_session_store)],
) -> JSONResponse:
    """Destroy the current session, if there is one."""
    if session is None:
        payload = LogoutResponse(success=True, message="No active session")
    else:
        try:
            session_store.destroy(session.session_id)
        except SessionStoreError:
            logger.exception("Logout error")
            raise
        payload = LogoutResponse(success=True, message="Logged out successfully")

    response = JSONResponse(content=payload.model_dump())
    clear_session_cookie(response, settings)
    return response


@router.get("/auth/me", response_model=MeResponse)
async def me(
    session: CurrentSession,
    proxy_service: Annotated[SpotifyProxyService, Depends(get_proxy_service)],
) -> Any:
    """Report whether the session is signed in and who it belongs to."""
    try:
        user = proxy_service.authorize(session)
    except Unauthorized as exc:
        content: dict[str, Any] = {"authenticated": False}
        if exc.reason:
            content["reason"] = exc.reason
        return JSONResponse(status_code=HTTPStatus.UNAUTHORIZED, content=content)

    return MeResponse(authenticated=True, user=UserSummary.from_user(user))


@router.get("/me/top/artists")
async def top_artists(
    session: CurrentSession,
    proxy_service: Annotated[SpotifyProxyService, Depends(get_proxy_service)],
    time_range: Optional[str] = Query(
        default=None, description="short_term, medium_term (default) or long_term."
    ),
    limit: Optional[str] = Query(default=None, description="Number of items, default 20."),
) -> Any:
    """Pass through ``GET /me/top/artists`` for the signed-in user."""
    user = proxy_service.authorize(session)
    return await proxy_service.top_artists(user, time_range=time_range, limit=limit)


@router.get("/me/top/tracks")
async def top_tracks(
    session: CurrentSession,
    proxy_service: Annotated[SpotifyProxyService, Depends(get_proxy_service)],
    time_range: Optional[str] = Query(
        default=None, description="short_term, medium_term (default) or long_term."
    ),
    limit: Optional[str] = Query(default=None, description="Number of items, default 20."),
) -> Any:
    """Pass through ``GET /me/top/tracks`` for the signed-in user."""
    user = proxy_service.authorize(session)
    return await proxy_service.top_tracks(user, time_range=time_range, limit=limit)


@router.get("/me/player/recently-played")
async def recently_played(
    session: CurrentSession,
    proxy_service: Annotated[SpotifyProxyService, Depends(get_proxy_service)],
    limit: Optional[str] = Query(default=None, description="Number of items, default 20."),
) -> Any:
    """Pass through ``GET /me/player/recently-played`` for the signed-in user."""
    user = proxy_service.authorize(session)
    return await proxy_service.recently_played(user, limit=limit)


__all__ = ["router"]
