"""
Identity provider access, split by responsibility.
"""
from core.identity.models import Session, SessionLookup
from core.identity.client import (
    IdentityClient,
    IdentityProviderError,
    SupabaseIdentityClient,
    token_expiry,
)

__all__ = [
    "Session",
    "SessionLookup",
    "IdentityClient",
    "IdentityProviderError",
    "SupabaseIdentityClient",
    "token_expiry",
]
