"""
Sign-in methods enabled on the identity provider.
"""
from __future__ import annotations

import os
from typing import Dict, Mapping, Optional

OAUTH_PROVIDERS = ("google", "github", "linkedin")


def get_auth_config(environ: Optional[Mapping[str, str]] = None) -> Dict:
    """
    Describe the enabled sign-in methods.
    OAuth client IDs are never returned, only whether one is configured.
    """
    env = os.environ if environ is None else environ

    providers: Dict[str, Dict] = {
        "email": {"enabled": True, "require_email_confirmation": True},
    }
    for name in OAUTH_PROVIDERS:
        client_id = (env.get(f"SUPABASE_AUTH_{name.upper()}_CLIENT_ID") or "").strip()
        providers[name] = {"enabled": True, "configured": bool(client_id)}

    return {
        "providers": providers,
        "magic_link": {"enabled": True},
    }


__all__ = ["OAUTH_PROVIDERS", "get_auth_config"]
