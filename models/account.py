"""
models/account.py
-----------------
Domain model for user accounts.
"""

import uuid
from dataclasses import dataclass, field


@dataclass
class Account:
    """
    Represents a registered account.

    Attributes:
        email: Unique sign-in address, compared case-sensitively.
        secret: Opaque credential string, stored exactly as supplied.
        role: Role flag (True for privileged accounts).
        id: Identifier assigned by the caller before insertion, never changed.
    """
    email: str
    secret: str
    role: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    def to_public_dict(self) -> dict:
        """Serializable view without the secret."""
        return {"id": str(self.id), "email": self.email, "role": self.role}

    def __str__(self) -> str:
        return f"{self.email} ({self.id})"
