"""
Helpers for session cookies and session recovery.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from fastapi.responses import Response

from core.config import secure_cookies_enabled
from core.identity import IdentityClient, Session

SESSION_COOKIE_NAME = "aicareer_session"
SESSION_COOKIE_MAX_AGE = 7 * 24 * 60 * 60  # 7 days

log = logging.getLogger("session_recovery")


@dataclass(frozen=True)
class CookieOptions:
    path: str = "/"
    httponly: bool = True
    secure: bool = field(default_factory=secure_cookies_enabled)
    samesite: str = "lax"


@dataclass(frozen=True)
class SessionRecoveryOptions:
    max_age: int = SESSION_COOKIE_MAX_AGE
    cookie_name: str = SESSION_COOKIE_NAME
    cookie_options: CookieOptions = field(default_factory=CookieOptions)


def get_session_from_cookie(
    request: Request,
    identity_client: IdentityClient,
    options: Optional[SessionRecoveryOptions] = None,
) -> Optional[Session]:
    """
    Return the live session behind the recovery cookie, or None.

    No cookie means no provider call. Provider errors, a missing session and an
    expiry at or before now all come back as None.
    """
    config = options or SessionRecoveryOptions()
    token = request.cookies.get(config.cookie_name)
    if not token:
        return None

    try:
        lookup = identity_client.get_session(token)
    except Exception as exc:
        log.warning("Session lookup raised %s; treating as signed out", exc.__class__.__name__)
        return None

    if lookup.error is not None:
        log.warning("Session lookup failed: %s", lookup.error)
        return None

    session = lookup.session
    if session is None or session.is_expired():
        return None

    return session


def set_session_cookie(
    response: Response,
    session: Session,
    options: Optional[SessionRecoveryOptions] = None,
) -> Response:
    if session is None:
        raise ValueError("session is required")

    config = options or SessionRecoveryOptions()
    cookie = config.cookie_options
    response.set_cookie(
        key=config.cookie_name,
        value=session.access_token,
        max_age=config.max_age,
        expires=datetime.now(timezone.utc) + timedelta(seconds=config.max_age),
        path=cookie.path,
        httponly=cookie.httponly,
        secure=cookie.secure,
        samesite=cookie.samesite,
    )
    return response


def clear_session_cookie(
    response: Response,
    options: Optional[SessionRecoveryOptions] = None,
) -> Response:
    config = options or SessionRecoveryOptions()
    cookie = config.cookie_options
    response.delete_cookie(
        config.cookie_name,
        path=cookie.path,
        httponly=cookie.httponly,
        secure=cookie.secure,
        samesite=cookie.samesite,
    )
    return response


def get_current_session(request: Request) -> Optional[Session]:
    """Session recovered (or confirmed) for this request by the middleware."""
    return getattr(request.state, "session", None)


__all__ = [
    "SESSION_COOKIE_NAME",
    "SESSION_COOKIE_MAX_AGE",
    "CookieOptions",
    "SessionRecoveryOptions",
    "get_session_from_cookie",
    "set_session_cookie",
    "clear_session_cookie",
    "get_current_session",
]
