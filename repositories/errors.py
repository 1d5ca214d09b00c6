"""
repositories/errors.py
----------------------
Error taxonomy shared by every repository, plus the classification of
store-level failures into it.

The store signals a small, finite set of conditions (row not found,
unique-key violation, anything else). `condition_of` reduces a driver
exception to one of them and `classify` turns the condition into one of
the taxonomy errors, so no psycopg2 exception ever leaves a repository.
"""

from enum import Enum
from typing import Optional

from psycopg2 import errors as pg_errors

UNIQUE_VIOLATION_SQLSTATE = "23505"
NO_DATA_FOUND_SQLSTATE = "P0002"


class RepositoryError(Exception):
    """Base class for every error a repository can raise."""

    default_message = "Repository error"

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        self.message = message or self.default_message
        self.cause = cause
        super().__init__(self.message)


class NotFoundError(RepositoryError):
    default_message = "Entity not found"


class AlreadyExistsError(RepositoryError):
    default_message = "Entity already exists"


class UnknownError(RepositoryError):
    """Store failure matching no known condition. `cause` holds the original."""

    default_message = "Unknown error"


# Reserved for input-validation layers; repositories never raise these.
class InvalidEntityError(RepositoryError):
    default_message = "Invalid entity"


class InvalidFieldError(RepositoryError):
    default_message = "Invalid field"


class InvalidSQLRequestError(RepositoryError):
    default_message = "Invalid SQL request"


class StoreCondition(Enum):
    """Conditions a store backend can report."""

    NOT_FOUND = "not_found"
    UNIQUE_VIOLATION = "unique_violation"
    GENERIC = "generic"


CLASSIFICATION: dict[StoreCondition, type[RepositoryError]] = {
    StoreCondition.NOT_FOUND: NotFoundError,
    StoreCondition.UNIQUE_VIOLATION: AlreadyExistsError,
    StoreCondition.GENERIC: UnknownError,
}


def condition_of(exc: BaseException) -> StoreCondition:
    """
    Reduce a store exception to a `StoreCondition`.

    Args:
        exc: Exception raised while talking to the store.

    Returns:
        UNIQUE_VIOLATION for duplicate keys, NOT_FOUND for the driver's
        no-data signal, GENERIC for everything else.
    """
    if isinstance(exc, pg_errors.UniqueViolation):
        return StoreCondition.UNIQUE_VIOLATION
    if isinstance(exc, pg_errors.NoDataFound):
        return StoreCondition.NOT_FOUND
    pgcode = getattr(exc, "pgcode", None)
    if pgcode == UNIQUE_VIOLATION_SQLSTATE:
        return StoreCondition.UNIQUE_VIOLATION
    if pgcode == NO_DATA_FOUND_SQLSTATE:
        return StoreCondition.NOT_FOUND
    return StoreCondition.GENERIC


def classify(condition: StoreCondition, cause: Optional[BaseException] = None) -> RepositoryError:
    """Build the taxonomy error for a store condition."""
    return CLASSIFICATION[condition](cause=cause)


def translate(exc: BaseException) -> RepositoryError:
    """Classify a raw store exception. Taxonomy errors pass through untouched."""
    if isinstance(exc, RepositoryError):
        return exc
    return classify(condition_of(exc), cause=exc)
