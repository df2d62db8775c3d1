import time

import jwt
import pytest
from starlette.requests import Request

from core.identity import SessionLookup

TEST_SIGNING_KEY = "test-signing-key-for-session-tests-0123456789"


class FakeIdentityClient:
    """Stands in for the provider; records every token it is asked about."""

    def __init__(self, lookup=None, exc=None):
        self.lookup = lookup if lookup is not None else SessionLookup()
        self.exc = exc
        self.calls = []

    def get_session(self, access_token):
        self.calls.append(access_token)
        if self.exc is not None:
            raise self.exc
        return self.lookup


@pytest.fixture
def fake_identity():
    return FakeIdentityClient


@pytest.fixture
def make_jwt():
    def _make(**claims) -> str:
        return jwt.encode(claims, TEST_SIGNING_KEY, algorithm="HS256")

    return _make


@pytest.fixture
def make_request():
    def _make(cookies=None, path="/") -> Request:
        headers = []
        if cookies:
            cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
            headers.append((b"cookie", cookie_header.encode("latin-1")))
        scope = {
            "type": "http",
            "method": "GET",
            "path": path,
            "headers": headers,
            "query_string": b"",
        }
        return Request(scope)

    return _make


@pytest.fixture
def now():
    return int(time.time())
