"""
Example router showing request validation.

- POST validates a sign-up payload
- GET validates pagination query parameters
"""

import structlog
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from finance_api.src.dependencies import get_json_body, validated
from finance_api.src.models.auth import ErrorResponse
from finance_api.src.models.schemas import pagination_schema, sign_up_schema

logger = structlog.get_logger(__name__)

router = APIRouter(
    tags=["Example"],
    responses={400: {"model": ErrorResponse, "description": "Validation Error"}}
)


@router.post("", status_code=status.HTTP_201_CREATED, summary="Validate a sign-up payload")
async def sign_up(body: Any = Depends(get_json_body)) -> Dict[str, Any]:
    """
    Validate a sign-up payload and echo the non-secret fields.

    **Request Body:**
    - email, password (8+ characters), confirmPassword, name (2+ characters)
    """
    values = validated(sign_up_schema, body)

    # password omitted
    logger.info("sign_up_validated", email=values.email, name=values.name)

    return {
        "message": "User created successfully",
        "user": {"email": values.email, "name": values.name},
    }


@router.get("", summary="Validate pagination query parameters")
async def query(request: Request) -> Dict[str, Any]:
    """
    Validate page, limit, search, sortBy and sortOrder.

    Missing page/limit fall back to 1 and 10.
    """
    params = validated(
        pagination_schema,
        dict(request.query_params),
        message="Invalid query parameters",
    )

    return {
        "message": "Query validated successfully",
        "data": params.model_dump(by_alias=True),
    }
