"""
Error responses.

Every error leaves the API in the same envelope as successful
responses, with ``success`` set to ``false``::

    {"success": false, "message": "User not found",
     "error": "User with ID user_7 does not exist"}

Handlers raise :class:`ApiError` for expected failures (400, 404).
``register_exception_handlers`` renders those, Starlette's own
routing errors and FastAPI request validation errors.  Unexpected
exceptions are turned into a 500 envelope by
``middleware.ErrorEnvelopeMiddleware`` through
:func:`unhandled_error_response`, so they still pass through the CORS
and security header middleware.  Their message is only exposed in
development.
"""

import logging
from http import HTTPStatus
from typing import Dict, Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..services.validation import describe_errors

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"


class ApiError(StarletteHTTPException):
    """HTTP error carrying the envelope ``message`` and ``error`` text."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(status_code=status_code, detail=error or message, headers=headers)
        self.message = message


def user_not_found(user_id: str) -> ApiError:
    return ApiError(
        status.HTTP_404_NOT_FOUND,
        "User not found",
        f"User with ID {user_id} does not exist",
    )


def validation_failed(reasons: Iterable[str]) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, VALIDATION_FAILED, "; ".join(reasons))


def error_response(
    status_code: int,
    message: str,
    error: Optional[str],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ApiError):
        message, error = exc.message, str(exc.detail)
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        message = HTTPStatus.NOT_FOUND.phrase
        error = f"Route {request.method} {request.url.path} not found"
    else:
        try:
            message = HTTPStatus(exc.status_code).phrase
        except ValueError:
            message = "Error"
        error = str(exc.detail)
    return error_response(exc.status_code, message, error, getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    reasons = describe_errors(exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_FAILED, "; ".join(reasons))


def unhandled_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings = request.app.state.settings
    error = str(exc) if settings.is_development else "Something went wrong"
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error", error
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
