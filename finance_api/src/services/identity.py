"""
Identity resolution for incoming requests.

Provides:
- IdentityProvider protocol: request -> Identity or None
- JWTIdentityProvider: verifies session tokens issued by the identity
  provider (bearer header or session cookie) with python-jose
"""

import structlog
from typing import Optional, Protocol

from fastapi import Request
from jose import JWTError, jwt

from finance_api.src.config import Settings, get_settings
from finance_api.src.models.auth import Identity

logger = structlog.get_logger(__name__)


class IdentityProvider(Protocol):
    """Resolves the authenticated caller of a request."""

    async def resolve(self, request: Request) -> Optional[Identity]:
        ...


class JWTIdentityProvider:
    """Identity provider backed by signed session tokens."""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize identity provider.

        Args:
            settings: Settings with token verification parameters
        """
        self.settings = settings or get_settings()

    async def resolve(self, request: Request) -> Optional[Identity]:
        """
        Resolve the caller from request credentials.

        Args:
            request: HTTP request

        Returns:
            Identity, or None when no valid credentials are present
        """
        token = self._extract_token(request)

        if not token:
            logger.debug("identity_missing_token", path=request.url.path)
            return None

        return self.decode_token(token)

    def decode_token(self, token: str) -> Optional[Identity]:
        """
        Decode and verify a session token.

        Args:
            token: JWT token string

        Returns:
            Identity or None if invalid
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.auth_jwt_key,
                algorithms=[self.settings.auth_jwt_algorithm],
                audience=self.settings.auth_jwt_audience,
                issuer=self.settings.auth_jwt_issuer,
                options={"verify_aud": self.settings.auth_jwt_audience is not None},
            )
        except JWTError as e:
            logger.warning("identity_token_invalid", error=str(e))
            return None

        subject = payload.get("sub")
        if not subject:
            logger.warning("identity_token_missing_subject")
            return None

        return Identity(
            user_id=str(subject),
            session_id=payload.get("sid"),
            claims=payload,
        )

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract the session token from the Authorization header or cookie.

        Args:
            request: HTTP request

        Returns:
            Token or None if not found
        """
        authorization = request.headers.get("Authorization")

        if authorization:
            parts = authorization.split()
            if len(parts) != 2 or parts[0].lower() != "bearer":
                logger.warning("identity_malformed_header")
                return None
            return parts[1]

        return request.cookies.get(self.settings.auth_session_cookie) or None
