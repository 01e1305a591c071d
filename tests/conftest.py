"""
Shared fixtures: test settings, session tokens and API clients.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi.testclient import TestClient
from jose import jwt

from finance_api.src.config import Settings
from finance_api.src.main import create_app


TEST_JWT_KEY = "test-session-signing-key-do-not-use-in-production"
TEST_JWT_ALGORITHM = "HS256"


def make_token(
    user_id: Optional[str] = "user_123",
    key: str = TEST_JWT_KEY,
    expires_delta: timedelta = timedelta(minutes=5),
    **claims: Any
) -> str:
    """
    Create a session token like the identity provider would.

    Args:
        user_id: Subject claim (omitted when None)
        key: Signing key
        expires_delta: Lifetime relative to now (negative for expired)
        **claims: Extra claims

    Returns:
        Encoded JWT
    """
    now = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {"iat": now, "exp": now + expires_delta, "sid": "sess_abc"}
    if user_id is not None:
        payload["sub"] = user_id
    payload.update(claims)

    return jwt.encode(payload, key, algorithm=TEST_JWT_ALGORITHM)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        auth_jwt_key=TEST_JWT_KEY,
        auth_jwt_algorithm=TEST_JWT_ALGORITHM,
        environment="development",
        log_format="text",
    )


@pytest.fixture
def app(settings):
    return create_app(settings=settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def token_factory():
    return make_token
