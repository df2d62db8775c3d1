import logging

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

from app.auth_utils import clear_session_cookie, get_current_session
from core.auth_config import get_auth_config

router = APIRouter()
log = logging.getLogger("auth")


@router.get("/auth/session")
def session_status(request: Request):
    session = get_current_session(request)
    if session is None:
        return {"authenticated": False, "expires_at": None}
    return {"authenticated": True, "expires_at": session.expires_at}


@router.get("/auth/providers")
def auth_providers():
    return get_auth_config()


@router.get("/logout")
def logout(request: Request):
    if get_current_session(request) is not None:
        log.info("Clearing recovered session on logout")
    response = RedirectResponse(url="/", status_code=303)
    clear_session_cookie(response)
    return response
