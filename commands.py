# Quick reference commands (run from repo root). These are comments only; copy/paste as needed.

# Install the package with test dependencies (includes httpx for TestClient)
# python -m pip install -e ".[test]"

# Run the full test suite
# python -m pytest

# Run focused test files
# python -m pytest tests/test_session_recovery.py
# python -m pytest tests/test_identity_client.py
# python -m pytest tests/test_config.py
# python -m pytest tests/test_security_headers.py
# python -m pytest tests/test_auth_flow.py

# Start the API locally (with env vars loaded)
# python -m dotenv run -- python -m uvicorn app.api:app --reload
# python main.py

# Check whether a session token is still valid at the provider
# python -m dotenv run -- python scripts/check_session.py "<access_token>"
