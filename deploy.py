# Deployment notes for the session service (comments only).

# Host: any platform that runs a single uvicorn process is enough; there is no worker or database here.
# API: python -m uvicorn app.api:app --host 0.0.0.0 --port $PORT
# Environment vars to set in the host dashboard:
# Identity provider: NEXT_PUBLIC_SUPABASE_URL, NEXT_PUBLIC_SUPABASE_ANON_KEY (SUPABASE_URL / SUPABASE_ANON_KEY also accepted).
# Provider timeout: IDENTITY_TIMEOUT_SECONDS (defaults to 10).
# Environment: APP_ENV=production. This turns on Secure cookies; COOKIE_SECURE=true or an https PUBLIC_BASE_URL does the same.
# OAuth (reported by /auth/providers only): SUPABASE_AUTH_GOOGLE_CLIENT_ID, SUPABASE_AUTH_GITHUB_CLIENT_ID, SUPABASE_AUTH_LINKEDIN_CLIENT_ID.
# The app refuses to start when the Supabase URL or anon key is missing; check the startup log for "Startup configuration invalid".
# Minimal pre-flight:
# pip install -e ".[test]" && python -m pytest
# Smoke-test: sign in on the frontend, delete the sb-access-token cookie, reload, and confirm aicareer_session is rewritten.
# Check a token by hand: python scripts/check_session.py "<access_token>"
