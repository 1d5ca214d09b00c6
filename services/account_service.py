"""
services/account_service.py
---------------------------
Business logic for changing existing accounts.
"""

import uuid
from dataclasses import replace
from typing import Optional

from db.transaction import ExecutionContext, TransactionManager
from models.account import Account
from repositories.account_repo import AccountRepository


class AccountService:
    """Account changes that need more than one repository call."""

    def __init__(self, repo: AccountRepository, tx_manager: TransactionManager):
        self.repo = repo
        self.tx_manager = tx_manager

    def change(
        self,
        ctx: ExecutionContext,
        account_id: uuid.UUID,
        email: Optional[str] = None,
        secret: Optional[str] = None,
    ) -> Account:
        """
        Overwrite only the supplied fields of an account.

        Reads the current row and writes it back in one transaction, so a
        field left as None keeps its stored value.

        Raises:
            NotFoundError: No account has this identifier.
            AlreadyExistsError: The new email belongs to another account.
        """
        with self.tx_manager.transaction(ctx) as tx_ctx:
            current = self.repo.get(tx_ctx, account_id)
            changed = replace(
                current,
                email=current.email if email is None else email,
                secret=current.secret if secret is None else secret,
            )
            return self.repo.update(tx_ctx, changed)
