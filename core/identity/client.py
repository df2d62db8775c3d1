"""
Identity provider client (Supabase Auth over its REST endpoint).
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Protocol

import httpx
import jwt

from core.config import IdentityConfig
from core.identity.models import Session, SessionLookup

log = logging.getLogger("identity")


class IdentityProviderError(RuntimeError):
    """The provider could not confirm a session (transport, status or payload problem)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class IdentityClient(Protocol):
    def get_session(self, access_token: str) -> SessionLookup:
        ...


def token_expiry(access_token: str) -> Optional[int]:
    """
    Read the `exp` claim from a JWT without verifying it.
    The provider has already vouched for the token when this is called.
    """
    claims = jwt.decode(access_token, options={"verify_signature": False})
    exp = claims.get("exp")
    if exp is None:
        return None
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
        raise ValueError(f"exp claim is not a number: {exp!r}")
    return int(exp)


class SupabaseIdentityClient:
    """
    Confirms an access token against `GET /auth/v1/user`.
    A fresh httpx client is used per call; no state is shared between requests.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(cls, config: IdentityConfig, transport: Optional[httpx.BaseTransport] = None):
        return cls(config.url, config.anon_key, timeout=config.timeout, transport=transport)

    def get_session(self, access_token: str) -> SessionLookup:
        endpoint = f"{self.url}/auth/v1/user"
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {access_token}",
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                resp = client.get(endpoint, headers=headers)
        except httpx.HTTPError as exc:
            log.warning("Identity provider request failed: %s", exc.__class__.__name__)
            return SessionLookup(error=IdentityProviderError(f"request failed: {exc}"))

        if resp.status_code in (401, 403):
            return SessionLookup(
                error=IdentityProviderError("access token rejected", status_code=resp.status_code)
            )
        if not resp.is_success:
            log.warning("Identity provider returned %s", resp.status_code)
            return SessionLookup(
                error=IdentityProviderError(
                    f"unexpected status {resp.status_code}", status_code=resp.status_code
                )
            )

        try:
            user = resp.json()
        except ValueError:
            return SessionLookup(error=IdentityProviderError("malformed user payload"))
        if not isinstance(user, dict) or not user.get("id"):
            return SessionLookup()

        try:
            expires_at = token_expiry(access_token)
        except (jwt.PyJWTError, ValueError) as exc:
            return SessionLookup(error=IdentityProviderError(f"unreadable access token: {exc}"))

        return SessionLookup(
            session=Session(access_token=access_token, refresh_token="", expires_at=expires_at)
        )


__all__ = [
    "IdentityClient",
    "IdentityProviderError",
    "SupabaseIdentityClient",
    "token_expiry",
]
