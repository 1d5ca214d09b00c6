"""
services/auth_service.py
------------------------
Business logic for registration and sign-in.
Orchestrates between the AccountRepository and the SecretVerifier.
"""

import uuid

from db.transaction import ExecutionContext
from models.account import Account
from repositories.account_repo import AccountRepository
from repositories.errors import InvalidFieldError
from security.secrets import PlaintextSecretVerifier, SecretVerifier
from utils.logger import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """
    Handles account registration and credential checks.

    Workflow (sign-in):
        1. Look the account up by email.
        2. Verify the supplied secret against the stored one.
        3. Return the account, or reject with InvalidFieldError.
    """

    def __init__(self, repo: AccountRepository, verifier: SecretVerifier | None = None):
        self.repo = repo
        self.verifier = verifier or PlaintextSecretVerifier()

    def register(self, ctx: ExecutionContext, email: str, secret: str, role: bool = False) -> Account:
        """
        Create an account with a freshly generated identifier.

        Raises:
            AlreadyExistsError: The email is already registered.
        """
        account = Account(id=uuid.uuid4(), email=email, secret=secret, role=role)
        return self.repo.create(ctx, account)

    def sign_in(self, ctx: ExecutionContext, email: str, secret: str) -> Account:
        """
        Check credentials and return the matching account.

        Raises:
            NotFoundError: No account has this email.
            InvalidFieldError: The secret does not match.
        """
        account = self.repo.get_by_email(ctx, email)
        if not self.verifier.verify(secret, account.secret):
            logger.warning(f"Rejected sign-in for account {account.id}")
            raise InvalidFieldError(INVALID_CREDENTIALS)
        return account
