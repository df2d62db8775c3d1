"""
Ask the identity provider whether an access token still backs a live session.

Usage:
  python -m dotenv run -- python scripts/check_session.py <access_token>
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

from dotenv import load_dotenv

from core.config import ConfigError, load_identity_config
from core.identity import SupabaseIdentityClient


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Validate an access token against the identity provider.")
    parser.add_argument("access_token", help="JWT access token (the value of the session cookie)")
    args = parser.parse_args(argv)

    load_dotenv(override=True)
    try:
        config = load_identity_config()
    except ConfigError as exc:
        raise SystemExit(f"Config error: {exc}") from exc

    lookup = SupabaseIdentityClient.from_config(config).get_session(args.access_token)
    if lookup.error is not None:
        print(f"Invalid: {lookup.error}")
        return 1

    session = lookup.session
    if session is None:
        print("Invalid: provider returned no session")
        return 1
    if session.is_expired():
        print("Invalid: session expired")
        return 1

    expires = datetime.fromtimestamp(session.expires_at, tz=timezone.utc)
    print(f"Valid until {expires.isoformat(timespec='seconds')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
