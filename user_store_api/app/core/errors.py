"""
Error kinds raised by the record store and the user service.

Every failure a request can run into while talking to the store is a
``StoreError`` subclass.  The API does not distinguish between them:
``register_exception_handlers`` renders each one as the same
``400 Invalid request.`` envelope carrying the exception message, and
request body validation errors are folded into that envelope as well.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INVALID_REQUEST = "Invalid request."
USER_NOT_FOUND = "user_not_found"


class StoreError(Exception):
    """Base class for errors surfaced to clients through the error envelope."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StoreUnavailable(StoreError):
    """The store file could not be read or written."""


class StoreCorrupt(StoreError):
    """The store file was read but its content could not be decoded."""


class NotFound(StoreError):
    """No user exists under the requested identifier."""

    def __init__(self, message: str = USER_NOT_FOUND) -> None:
        super().__init__(message)


class ValidationFailure(StoreError):
    """The request body could not be decoded into the expected payload."""


def error_envelope(message: str) -> Dict[str, Any]:
    body: Dict[str, Any] = {"status": INVALID_REQUEST}
    if message:
        body["error"] = message
    return body


def invalid_request(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=error_envelope(message))


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        path = [p for p in error.get("loc", ()) if p != "body"]
        if error.get("type") == "json_invalid":
            # the location is a character offset into the raw body
            path = [p for p in path if not isinstance(p, int)]
        loc = ".".join(str(p) for p in path)
        msg = error.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return invalid_request(exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    failure = ValidationFailure(_validation_message(exc))
    return await store_error_handler(request, failure)


def register_exception_handlers(app: FastAPI) -> None:
    """Map store errors and body validation errors to the 400 envelope."""
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
