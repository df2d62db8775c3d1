"""
Runtime configuration for the identity provider and session cookies.

Nothing here reads the environment at import time; `load_identity_config()` is
called explicitly when the app starts.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

URL_ENV_NAMES = ("NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL")
ANON_KEY_ENV_NAMES = ("NEXT_PUBLIC_SUPABASE_ANON_KEY", "SUPABASE_ANON_KEY")
DEFAULT_TIMEOUT_SECONDS = 10.0


class ConfigError(RuntimeError):
    """Raised when required startup configuration is missing or invalid."""

    def __init__(self, message: str, missing: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing = missing


@dataclass(frozen=True)
class IdentityConfig:
    url: str
    anon_key: str
    timeout: float = DEFAULT_TIMEOUT_SECONDS


def _first_set(environ: Mapping[str, str], names: tuple[str, ...]) -> str:
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return ""


def load_identity_config(environ: Optional[Mapping[str, str]] = None) -> IdentityConfig:
    """
    Build the identity provider config from the environment.
    Raises ConfigError naming every missing variable.
    """
    env = os.environ if environ is None else environ

    url = _first_set(env, URL_ENV_NAMES).rstrip("/")
    anon_key = _first_set(env, ANON_KEY_ENV_NAMES)

    missing = []
    if not url:
        missing.append(URL_ENV_NAMES[0])
    if not anon_key:
        missing.append(ANON_KEY_ENV_NAMES[0])
    if missing:
        raise ConfigError(
            "Missing Supabase environment variables: " + ", ".join(missing),
            missing=tuple(missing),
        )

    if not (url.startswith("https://") or url.startswith("http://")):
        raise ConfigError(f"{URL_ENV_NAMES[0]} must start with http:// or https://")

    raw_timeout = (env.get("IDENTITY_TIMEOUT_SECONDS") or "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ConfigError("IDENTITY_TIMEOUT_SECONDS must be a number") from exc
    if timeout <= 0:
        raise ConfigError("IDENTITY_TIMEOUT_SECONDS must be positive")

    return IdentityConfig(url=url, anon_key=anon_key, timeout=timeout)


def is_production(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return any(
        (env.get(name) or "").strip().lower() == "production"
        for name in ("APP_ENV", "ENVIRONMENT")
    )


def secure_cookies_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    env = os.environ if environ is None else environ
    return (
        is_production(env)
        or (env.get("COOKIE_SECURE") or "").lower() in ("1", "true", "yes")
        or (env.get("PUBLIC_BASE_URL") or "").lower().startswith("https://")
    )


__all__ = [
    "ConfigError",
    "IdentityConfig",
    "load_identity_config",
    "is_production",
    "secure_cookies_enabled",
]
