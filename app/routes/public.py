from fastapi import APIRouter, Request

from app.auth_utils import get_current_session

router = APIRouter()


@router.get("/")
def home(request: Request):
    session = get_current_session(request)
    return {
        "service": "aicareer-session",
        "status": "ok",
        "authenticated": session is not None,
    }
