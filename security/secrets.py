"""
security/secrets.py
-------------------
Secret verification used at sign-in.

Accounts currently store their secret exactly as supplied, so the only
available check is plain equality. All verification goes through a
`SecretVerifier` so a one-way scheme can replace it without touching the
account repository.
"""

import hmac
from typing import Protocol


class SecretVerifier(Protocol):
    def verify(self, supplied: str, stored: str) -> bool: ...


class PlaintextSecretVerifier:
    """Compares the supplied secret with the stored one as opaque strings."""

    def verify(self, supplied: str, stored: str) -> bool:
        return hmac.compare_digest(supplied.encode("utf-8"), stored.encode("utf-8"))
