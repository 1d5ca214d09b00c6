"""
api/responses.py
----------------
Uniform response envelope and the mapping from repository errors to
HTTP status codes.

    200 {"OK": payload}
    400 {"BadRequest": message}
    500 {"Internal": message}
"""

import uuid
from typing import Any, Optional

from fastapi.responses import JSONResponse

from repositories.errors import (
    AlreadyExistsError,
    InvalidEntityError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
)
from utils.logger import get_logger

logger = get_logger(__name__)

INVALID_REQUEST = "Invalid request"
INVALID_ID = "Invalid id"

# Client-side kinds and the short message shown for each.
_CLIENT_ERRORS: dict[type[RepositoryError], Optional[str]] = {
    AlreadyExistsError: "Already exists",
    NotFoundError: "Not found",
    InvalidEntityError: None,
    InvalidFieldError: None,
}


def ok(payload: Any) -> JSONResponse:
    return JSONResponse({"OK": payload}, status_code=200)


def bad_request(message: str) -> JSONResponse:
    return JSONResponse({"BadRequest": message}, status_code=400)


def internal(message: str) -> JSONResponse:
    return JSONResponse({"Internal": message}, status_code=500)


def error_response(error: RepositoryError) -> JSONResponse:
    """
    Translate a repository error into the envelope.

    Client-input and state-conflict kinds become 400 with a short message;
    everything else becomes 500 and is logged with its cause.
    """
    for kind, message in _CLIENT_ERRORS.items():
        if isinstance(error, kind):
            return bad_request(message or error.message)
    logger.error(f"Store failure: {error.message} (cause: {error.cause!r})")
    return internal("Unknown error")


def parse_id(raw: str) -> Optional[uuid.UUID]:
    """Parse an identifier string; None when it is not a UUID."""
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        return None
