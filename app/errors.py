# app/errors.py
# Role: Typed error classes raised by the services and their central mapping
#       to JSON responses of the form {"error": "..."}.

"""
Error taxonomy for the ledger.

Services raise these; routes never build error responses themselves.
register_error_handlers() wires the mapping into the FastAPI app.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """Base class for every error that maps to an HTTP status."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LedgerError):
    # Malformed id, empty required name, malformed color
    status_code = 400
    default_message = "Invalid request"


class Conflict(LedgerError):
    # Unique constraint violation (duplicate name)
    status_code = 409
    default_message = "Resource already exists"


class NotFound(LedgerError):
    status_code = 404
    default_message = "Resource not found"


class PreconditionFailed(LedgerError):
    # e.g. archiving with no active transactions
    status_code = 400
    default_message = "Precondition failed"


class InternalError(LedgerError):
    # Storage failure, numeric conversion failure
    status_code = 500
    default_message = "Internal server error"


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s rejected (%d): %s",
            request.method,
            request.url.path,
            exc.status_code,
            exc.message,
        )
    return _error_response(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("%s %s invalid body: %s", request.method, request.url.path, exc.errors())
    return _error_response(400, "Invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s crashed", request.method, request.url.path)
    return _error_response(500, InternalError.default_message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


def register_error_handlers(app: FastAPI) -> None:
    """
    Map every error type to the {"error": message} body with its status.
    """
    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
