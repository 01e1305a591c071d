"""
Account repository.

Stores accounts in process memory, keyed by owner. Every operation is
scoped to a user id; one user can never read or change another user's
accounts. No awaits happen between reads and writes, so each operation
completes atomically on the event loop.
"""

import structlog
from typing import Dict, List, Optional

from finance_api.src.models.account import AccountRecord
from finance_api.src.utils.formatting import generate_id

logger = structlog.get_logger(__name__)


class AccountRepository:
    """Repository for account records."""

    def __init__(self):
        self._records: Dict[str, Dict[str, AccountRecord]] = {}

    async def list_accounts(self, user_id: str) -> List[AccountRecord]:
        """
        List accounts owned by a user, in creation order.

        Args:
            user_id: Owner id

        Returns:
            List of account records
        """
        return list(self._records.get(user_id, {}).values())

    async def get_account(self, user_id: str, account_id: str) -> Optional[AccountRecord]:
        return self._records.get(user_id, {}).get(account_id)

    async def create_account(self, user_id: str, name: str) -> AccountRecord:
        """
        Create an account for a user.

        Args:
            user_id: Owner id
            name: Display name

        Returns:
            Created account record
        """
        record = AccountRecord(id=generate_id(), name=name, user_id=user_id)
        self._records.setdefault(user_id, {})[record.id] = record

        logger.info("account_created", user_id=user_id, account_id=record.id)
        return record

    async def update_account(self, user_id: str, account_id: str, name: str) -> Optional[AccountRecord]:
        """
        Rename an account.

        Returns:
            Updated record, or None if the user has no such account
        """
        accounts = self._records.get(user_id, {})
        if account_id not in accounts:
            return None

        record = accounts[account_id].model_copy(update={"name": name})
        accounts[account_id] = record

        logger.info("account_updated", user_id=user_id, account_id=account_id)
        return record

    async def delete_account(self, user_id: str, account_id: str) -> bool:
        """
        Delete an account.

        Returns:
            True if deleted, False if the user has no such account
        """
        accounts = self._records.get(user_id, {})
        if accounts.pop(account_id, None) is None:
            return False

        logger.info("account_deleted", user_id=user_id, account_id=account_id)
        return True
