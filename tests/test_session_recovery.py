from http.cookies import SimpleCookie

import pytest
from starlette.responses import Response

from app import auth_utils
from app.auth_utils import (
    CookieOptions,
    SessionRecoveryOptions,
    clear_session_cookie,
    get_session_from_cookie,
    set_session_cookie,
)
from core.identity import IdentityProviderError, Session, SessionLookup


def _cookies(response):
    jar = SimpleCookie()
    for header in response.headers.getlist("set-cookie"):
        jar.load(header)
    return jar


def test_no_cookie_returns_none_without_provider_call(fake_identity, make_request):
    client = fake_identity()
    assert get_session_from_cookie(make_request(), client) is None
    assert client.calls == []


def test_other_cookies_do_not_count(fake_identity, make_request):
    client = fake_identity()
    req = make_request({"sb-refresh-token": "abc", "csrf_token": "x"})
    assert get_session_from_cookie(req, client) is None
    assert client.calls == []


def test_live_session_is_returned_unchanged(fake_identity, make_request, now):
    session = Session(access_token="test-token", refresh_token="test-refresh", expires_at=now + 3600)
    client = fake_identity(SessionLookup(session=session))

    result = get_session_from_cookie(make_request({"aicareer_session": "test-token"}), client)

    assert result is session
    assert client.calls == ["test-token"]


def test_expired_session_returns_none(fake_identity, make_request, now):
    session = Session(access_token="test-token", refresh_token="r", expires_at=now - 3600)
    client = fake_identity(SessionLookup(session=session))

    assert get_session_from_cookie(make_request({"aicareer_session": "test-token"}), client) is None
    assert client.calls == ["test-token"]


def test_session_expiring_now_is_expired(fake_identity, make_request, monkeypatch):
    monkeypatch.setattr("core.identity.models.time.time", lambda: 1_700_000_000.0)
    session = Session(access_token="t", refresh_token="r", expires_at=1_700_000_000)
    client = fake_identity(SessionLookup(session=session))

    assert get_session_from_cookie(make_request({"aicareer_session": "t"}), client) is None


def test_session_without_expiry_returns_none(fake_identity, make_request):
    session = Session(access_token="t", refresh_token="", expires_at=None)
    client = fake_identity(SessionLookup(session=session))

    assert get_session_from_cookie(make_request({"aicareer_session": "t"}), client) is None


def test_missing_session_returns_none(fake_identity, make_request):
    client = fake_identity(SessionLookup(session=None))
    assert get_session_from_cookie(make_request({"aicareer_session": "t"}), client) is None


def test_provider_error_returns_none(fake_identity, make_request, now):
    session = Session(access_token="t", refresh_token="r", expires_at=now + 3600)
    client = fake_identity(SessionLookup(session=session, error=IdentityProviderError("down")))

    assert get_session_from_cookie(make_request({"aicareer_session": "t"}), client) is None


def test_provider_exception_is_contained(fake_identity, make_request):
    client = fake_identity(exc=ConnectionError("boom"))
    assert get_session_from_cookie(make_request({"aicareer_session": "t"}), client) is None
    assert client.calls == ["t"]


def test_custom_cookie_name_is_read(fake_identity, make_request, now):
    session = Session(access_token="abc", refresh_token="r", expires_at=now + 60)
    client = fake_identity(SessionLookup(session=session))
    options = SessionRecoveryOptions(cookie_name="custom")

    assert get_session_from_cookie(make_request({"aicareer_session": "abc"}), client, options) is None
    assert get_session_from_cookie(make_request({"custom": "abc"}), client, options) is session


def test_set_session_cookie_defaults(now):
    response = Response()
    session = Session(access_token="test-token", refresh_token="r", expires_at=now + 3600)

    returned = set_session_cookie(response, session)

    assert returned is response
    morsel = _cookies(response)["aicareer_session"]
    assert morsel.value == "test-token"
    assert morsel["path"] == "/"
    assert morsel["httponly"] is True
    assert morsel["samesite"].lower() == "lax"
    assert morsel["max-age"] == str(7 * 24 * 60 * 60)
    assert morsel["expires"]


def test_set_session_cookie_custom_options(now):
    response = Response()
    session = Session(access_token="T", refresh_token="r", expires_at=now + 3600)
    options = SessionRecoveryOptions(
        max_age=3600,
        cookie_name="custom",
        cookie_options=CookieOptions(path="/api", httponly=True, secure=True, samesite="strict"),
    )

    set_session_cookie(response, session, options)

    jar = _cookies(response)
    assert "aicareer_session" not in jar
    morsel = jar["custom"]
    assert morsel.value == "T"
    assert morsel["path"] == "/api"
    assert morsel["secure"] is True
    assert morsel["samesite"].lower() == "strict"
    assert morsel["max-age"] == "3600"


def test_partial_options_keep_defaults(now):
    response = Response()
    session = Session(access_token="T", refresh_token="r", expires_at=now + 3600)

    set_session_cookie(response, session, SessionRecoveryOptions(cookie_name="custom"))

    morsel = _cookies(response)["custom"]
    assert morsel["path"] == "/"
    assert morsel["max-age"] == str(auth_utils.SESSION_COOKIE_MAX_AGE)


def test_set_session_cookie_requires_session():
    with pytest.raises(ValueError):
        set_session_cookie(Response(), None)


def test_clear_session_cookie_empties_value():
    response = Response()
    returned = clear_session_cookie(response)

    assert returned is response
    morsel = _cookies(response)["aicareer_session"]
    assert morsel.value == ""
    assert morsel["max-age"] == "0"
    assert morsel["path"] == "/"


def test_clear_session_cookie_uses_configured_path():
    response = Response()
    options = SessionRecoveryOptions(cookie_name="custom", cookie_options=CookieOptions(path="/api"))

    clear_session_cookie(response, options)

    morsel = _cookies(response)["custom"]
    assert morsel.value == ""
    assert morsel["path"] == "/api"
