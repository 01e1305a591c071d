"""
FastAPI dependency injection for identity, repositories and request input.

Provides injectable dependencies for:
- The authenticated caller (required or optional)
- Repository instances held in application state
- JSON request bodies
"""

import json
import structlog
from typing import Any, Optional

from fastapi import Depends, Request

from finance_api.src.errors import HttpError, Unauthorized, ValidationFailed
from finance_api.src.models.auth import Identity
from finance_api.src.repositories.account_repo import AccountRepository
from finance_api.src.validation import Schema, validate

logger = structlog.get_logger(__name__)


# ============================================================================
# IDENTITY DEPENDENCIES
# ============================================================================


async def get_optional_identity(request: Request) -> Optional[Identity]:
    """
    Get the caller's identity if one was resolved, None otherwise.

    Args:
        request: HTTP request

    Returns:
        Identity or None
    """
    return getattr(request.state, "identity", None)


async def require_identity(
    request: Request,
    identity: Optional[Identity] = Depends(get_optional_identity)
) -> Identity:
    """
    Require an authenticated caller.

    Runs before the route handler; an anonymous request never reaches it.

    Args:
        request: HTTP request
        identity: Identity resolved by the auth middleware

    Returns:
        Identity

    Raises:
        Unauthorized: If no identity was resolved

    Example:
        @router.get("/me")
        async def me(identity: Identity = Depends(require_identity)):
            return {"userId": identity.user_id}
    """
    if identity is None:
        logger.warning("identity_required", path=request.url.path, method=request.method)
        raise Unauthorized()

    return identity


# ============================================================================
# REPOSITORY DEPENDENCIES
# ============================================================================


def get_account_repository(request: Request) -> AccountRepository:
    """
    Get the account repository from application state.

    Returns:
        AccountRepository instance
    """
    return request.app.state.account_repo


# ============================================================================
# REQUEST INPUT
# ============================================================================


async def get_json_body(request: Request) -> Any:
    """
    Decode the JSON request body.

    Raises:
        HttpError: 400 if the body is not valid JSON
    """
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("invalid_json_body", path=request.url.path, error=str(e))
        raise HttpError(400, {"error": "Invalid JSON body"})


def validated(schema: Schema, data: Any, message: str = "Validation failed") -> Any:
    """
    Validate input or raise a 400 error carrying the field errors.

    Args:
        schema: Schema to validate against
        data: Raw input
        message: Error message for the response envelope

    Returns:
        Validated value

    Raises:
        ValidationFailed: If validation fails
    """
    result = validate(schema, data)

    if not result.ok:
        logger.info("validation_failed", schema=schema.name, fields=sorted(result.errors))
        raise ValidationFailed(result.errors, message=message)

    return result.value
