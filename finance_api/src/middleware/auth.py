"""
Identity middleware for FastAPI.

Provides:
- Identity resolution on every request (stored on request.state.identity)
- Rejection of protected routes when no identity resolves, before any
  handler runs
"""

import re
import structlog
from typing import Callable, Iterable, List, Optional, Pattern

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from finance_api.src.errors import Unauthorized
from finance_api.src.services.identity import IdentityProvider

logger = structlog.get_logger(__name__)


def create_route_matcher(patterns: Iterable[str]) -> Callable[[str], bool]:
    """
    Build a predicate matching request paths against regex patterns.

    Args:
        patterns: Regular expressions matched against the whole path

    Returns:
        Function returning True when any pattern matches

    Example:
        >>> is_protected = create_route_matcher(["/api/.*"])
        >>> is_protected("/api/accounts")
        True
    """
    compiled: List[Pattern[str]] = [re.compile(pattern) for pattern in patterns]

    def matches(path: str) -> bool:
        return any(pattern.fullmatch(path) for pattern in compiled)

    return matches


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware to resolve the caller of each request.

    Every request gets request.state.identity (None when anonymous).
    Requests to protected paths without an identity receive a 401 and
    never reach the router.
    """

    def __init__(
        self,
        app,
        identity_provider: IdentityProvider,
        protected_routes: Optional[Iterable[str]] = None,
    ):
        """
        Initialize auth middleware.

        Args:
            app: ASGI application
            identity_provider: Resolves identities from requests
            protected_routes: Path patterns that require an identity
        """
        super().__init__(app)
        self.identity_provider = identity_provider
        self.is_protected = create_route_matcher(protected_routes or [])

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Resolve identity and gate protected routes.

        Args:
            request: HTTP request
            call_next: Next middleware in chain

        Returns:
            HTTP response
        """
        identity = await self.identity_provider.resolve(request)
        request.state.identity = identity

        if identity is None and request.method != "OPTIONS" and self.is_protected(request.url.path):
            logger.warning(
                "auth_missing_identity",
                path=request.url.path,
                method=request.method,
                client=request.client.host if request.client else None
            )
            error = Unauthorized()
            return JSONResponse(
                status_code=error.status_code,
                content=error.body,
                headers=error.headers
            )

        if identity is not None:
            logger.debug(
                "request_authenticated",
                path=request.url.path,
                method=request.method,
                user_id=identity.user_id
            )

        return await call_next(request)
