import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from dotenv import load_dotenv
from starlette.concurrency import run_in_threadpool

from app.auth_utils import SESSION_COOKIE_NAME, get_session_from_cookie, set_session_cookie
from app.routes import auth, public
from core.config import ConfigError, load_identity_config
from core.identity import IdentityClient, SupabaseIdentityClient

# Ensure .env values are loaded even if uvicorn is launched without `dotenv run`.
# Use override=True so editing `.env` (and restarting uvicorn) reliably takes effect even if
# older values exist in the environment from a previous shell/session.
load_dotenv(override=True)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
log = logging.getLogger("api")

# Cookie the provider's own helpers maintain; when present there is nothing to recover.
PROVIDER_COOKIE_NAME = "sb-access-token"
# JSON API calls and static assets never get the session cookie rewritten.
SKIP_RECOVERY_PREFIXES = ("/api", "/static", "/favicon.ico")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "identity_client", None) is None:
        try:
            config = load_identity_config()
        except ConfigError as exc:
            log.error("Startup configuration invalid: %s", exc)
            raise
        app.state.identity_client = SupabaseIdentityClient.from_config(config)
        log.info("Identity provider configured at %s", config.url)
    yield


SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": (
        "default-src 'self'; img-src 'self' data:; style-src 'self' 'unsafe-inline'; script-src 'self' 'unsafe-inline'; "
        "font-src 'self' data:; connect-src 'self';"
    ),
}


async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    # Anything that writes or clears the session cookie must not be cached by a proxy.
    if _sets_cookie(response, SESSION_COOKIE_NAME):
        response.headers["Cache-Control"] = "no-store"
    return response


async def recover_session(request: Request, call_next):
    """
    Re-establish the session cookie from the recovery cookie when the provider
    cookie is gone. Each request validates on its own; nothing is cached.
    """
    if _skips_recovery(request.url.path) or request.cookies.get(PROVIDER_COOKIE_NAME):
        return await call_next(request)

    session = None
    identity_client = getattr(request.app.state, "identity_client", None)
    if identity_client is not None:
        # The provider client is blocking; keep it off the event loop.
        session = await run_in_threadpool(get_session_from_cookie, request, identity_client)
    request.state.session = session

    response = await call_next(request)
    # Expiry is re-checked at write time; a route that already wrote the cookie (e.g. logout) wins.
    if session is not None and not session.is_expired() and not _sets_cookie(response, SESSION_COOKIE_NAME):
        set_session_cookie(response, session)
    return response


def _sets_cookie(response, name: str) -> bool:
    prefix = f"{name}="
    return any(value.startswith(prefix) for value in response.headers.getlist("set-cookie"))


def _skips_recovery(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in SKIP_RECOVERY_PREFIXES)


def create_app(identity_client: Optional[IdentityClient] = None) -> FastAPI:
    app = FastAPI(title="AI Career session service", lifespan=lifespan)
    app.state.identity_client = identity_client

    app.include_router(public.router)
    app.include_router(auth.router)

    # Registered last so it wraps everything, including recovery responses.
    app.middleware("http")(recover_session)
    app.middleware("http")(add_security_headers)
    return app


app = create_app()
