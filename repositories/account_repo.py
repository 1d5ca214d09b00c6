"""
repositories/account_repo.py
----------------------------
Data access layer for accounts.
All SQL queries related to the `users` table live here.
"""

import uuid

from db.transaction import ExecutionContext
from models.account import Account
from repositories.base import BaseRepository
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "user_id, email, password, role"


class AccountRepository(BaseRepository):
    """Repository for CRUD operations on the users table."""

    # ── CREATE ────────────────────────────────────────────

    def create(self, ctx: ExecutionContext, account: Account) -> Account:
        """
        Insert a new account with all of its attributes.

        Args:
            ctx: Execution context (may carry an ambient transaction).
            account: Account with its identifier already assigned.

        Returns:
            The same Account, unchanged.

        Raises:
            AlreadyExistsError: The email or identifier is taken.
            UnknownError: Any other store failure.
        """
        sql = f"INSERT INTO users ({_COLUMNS}) VALUES (%s, %s, %s, %s);"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (account.id, account.email, account.secret, account.role))
        logger.info(f"Created account {account.id}")
        return account

    # ── READ ──────────────────────────────────────────────

    def get(self, ctx: ExecutionContext, account_id: uuid.UUID) -> Account:
        """
        Fetch one account by identifier.

        Raises:
            NotFoundError: No account has this identifier.
            UnknownError: Any other store failure.
        """
        sql = f"SELECT {_COLUMNS} FROM users WHERE user_id = %s;"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (account_id,))
            row = cur.fetchone()
            if row is None:
                raise self._not_found()
        return self._row_to_account(row)

    def get_by_email(self, ctx: ExecutionContext, email: str) -> Account:
        """
        Fetch one account by exact email, secret included.

        Used by sign-in; comparing the supplied secret is up to the caller.

        Raises:
            NotFoundError: No account has this email.
            UnknownError: Any other store failure.
        """
        sql = f"SELECT {_COLUMNS} FROM users WHERE email = %s;"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (email,))
            row = cur.fetchone()
            if row is None:
                raise self._not_found()
        return self._row_to_account(row)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, ctx: ExecutionContext, account: Account) -> Account:
        """
        Replace email and secret of the account with `account.id`.

        The identifier and role are never written.

        Raises:
            NotFoundError: No row matched the identifier.
            AlreadyExistsError: The new email belongs to another account.
            UnknownError: Any other store failure.
        """
        sql = "UPDATE users SET email = %s, password = %s WHERE user_id = %s;"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (account.email, account.secret, account.id))
            if cur.rowcount == 0:
                raise self._not_found()
        return account

    # ── DELETE ────────────────────────────────────────────

    def delete(self, ctx: ExecutionContext, account_id: uuid.UUID) -> Account:
        """
        Delete an account and return it as the store had it.

        Raises:
            NotFoundError: No row matched the identifier.
            UnknownError: Any other store failure.
        """
        sql = f"DELETE FROM users WHERE user_id = %s RETURNING {_COLUMNS};"
        with self._cursor(ctx) as cur:
            cur.execute(sql, (account_id,))
            row = cur.fetchone()
            if row is None:
                raise self._not_found()
        logger.info(f"Deleted account {account_id}")
        return self._row_to_account(row)

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _row_to_account(row: tuple) -> Account:
        """Convert a database row tuple to an Account domain object."""
        return Account(
            id=row[0],
            email=row[1],
            secret=row[2],
            role=bool(row[3]),
        )
