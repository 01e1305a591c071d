"""FastAPI middleware components.

This package contains the identity middleware that resolves the caller of
each request and rejects anonymous requests to protected routes.
"""

from finance_api.src.middleware.auth import AuthMiddleware, create_route_matcher

__all__ = [
    "AuthMiddleware",
    "create_route_matcher",
]
