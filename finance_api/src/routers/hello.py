"""Identity echo endpoint."""

import structlog
from typing import Dict

from fastapi import APIRouter, Depends

from finance_api.src.dependencies import require_identity
from finance_api.src.models.auth import ErrorResponse, Identity

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["Hello"],
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}}
)


@router.get("/hello", summary="Greet the authenticated caller")
async def hello(identity: Identity = Depends(require_identity)) -> Dict[str, str]:
    """
    Return a greeting with the caller's user id.

    **Authentication:** Required
    """
    return {
        "message": "Hello from the Finance Tracker API!",
        "userId": identity.user_id,
    }
