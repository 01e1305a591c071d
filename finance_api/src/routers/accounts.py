"""
Accounts router.

Provides REST API endpoints for the caller's accounts:
- List, create, read, rename and delete

All endpoints require an authenticated caller and only ever touch that
caller's accounts.
"""

import structlog
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from finance_api.src.dependencies import (
    get_account_repository,
    get_json_body,
    require_identity,
    validated,
)
from finance_api.src.errors import HttpError
from finance_api.src.models.auth import ErrorResponse, Identity
from finance_api.src.models.schemas import account_form_schema, insert_account_schema
from finance_api.src.repositories.account_repo import AccountRepository

logger = structlog.get_logger(__name__)

NOT_FOUND = {"error": "Not found"}

router = APIRouter(
    tags=["Accounts"],
    responses={
        400: {"model": ErrorResponse, "description": "Validation Error"},
        401: {"model": ErrorResponse, "description": "Unauthorized"},
        404: {"model": ErrorResponse, "description": "Not Found"},
    }
)


@router.get("", summary="List accounts")
async def list_accounts(
    identity: Identity = Depends(require_identity),
    account_repo: AccountRepository = Depends(get_account_repository)
) -> Dict[str, Any]:
    """List the caller's accounts."""
    records = await account_repo.list_accounts(identity.user_id)
    return {"data": [record.to_account().model_dump() for record in records]}


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create account")
async def create_account(
    identity: Identity = Depends(require_identity),
    account_repo: AccountRepository = Depends(get_account_repository),
    body: Any = Depends(get_json_body)
) -> Dict[str, Any]:
    """
    Create an account for the caller.

    **Request Body:**
    - name: Display name (required, non-empty)

    **Error Responses:**
    - 400: Validation error with field details
    - 401: No authenticated caller
    """
    values = validated(insert_account_schema, body)
    record = await account_repo.create_account(identity.user_id, values.name)
    return {"data": record.to_account().model_dump()}


@router.get("/{account_id}", summary="Get account")
async def get_account(
    account_id: str,
    identity: Identity = Depends(require_identity),
    account_repo: AccountRepository = Depends(get_account_repository)
) -> Dict[str, Any]:
    record = await account_repo.get_account(identity.user_id, account_id)

    if record is None:
        raise HttpError(status.HTTP_404_NOT_FOUND, NOT_FOUND)

    return {"data": record.to_account().model_dump()}


@router.patch("/{account_id}", summary="Rename account")
async def update_account(
    account_id: str,
    identity: Identity = Depends(require_identity),
    account_repo: AccountRepository = Depends(get_account_repository),
    body: Any = Depends(get_json_body)
) -> Dict[str, Any]:
    """Rename one of the caller's accounts."""
    values = validated(account_form_schema, body)
    record = await account_repo.update_account(identity.user_id, account_id, values.name)

    if record is None:
        raise HttpError(status.HTTP_404_NOT_FOUND, NOT_FOUND)

    return {"data": record.to_account().model_dump()}


@router.delete("/{account_id}", summary="Delete account")
async def delete_account(
    account_id: str,
    identity: Identity = Depends(require_identity),
    account_repo: AccountRepository = Depends(get_account_repository)
) -> Dict[str, Any]:
    deleted = await account_repo.delete_account(identity.user_id, account_id)

    if not deleted:
        raise HttpError(status.HTTP_404_NOT_FOUND, NOT_FOUND)

    return {"data": {"id": account_id}}
