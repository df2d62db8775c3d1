"""
Session records as reported by the identity provider.
"""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Session:
    access_token: str
    refresh_token: str
    expires_at: Optional[int]

    def is_expired(self, now: Optional[float] = None) -> bool:
        """A session without an expiry is never considered live."""
        if self.expires_at is None:
            return True
        current = int(time.time()) if now is None else now
        return self.expires_at <= current


@dataclass(frozen=True)
class SessionLookup:
    """Result of asking the provider for a session: exactly what it said, no judgement."""

    session: Optional[Session] = None
    error: Optional[Exception] = None


__all__ = ["Session", "SessionLookup"]
