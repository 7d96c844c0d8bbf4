"""Translate application errors into the API's ``{success, error}`` shape."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notification_service.application.errors import (
    ApplicationError,
    AuthError,
    ForbiddenError,
    IllegalTransitionError,
    NotFoundError,
    PersistenceError,
    StaleVersionError,
    ValidationError,
)
from notification_service.config import get_settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Server Error"

_STATUS_BY_ERROR: tuple[tuple[type[ApplicationError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (IllegalTransitionError, status.HTTP_409_CONFLICT),
    (StaleVersionError, status.HTTP_409_CONFLICT),
)

_AUTH_HEADERS = {"WWW-Authenticate": "Bearer"}


def to_http_exception(exc: ApplicationError) -> HTTPException:
    """Return the ``HTTPException`` matching ``exc``.

    Store failures and unknown application errors become a 500 whose detail
    is only revealed in debug mode.
    """

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            headers = _AUTH_HEADERS if isinstance(exc, AuthError) else None
            return HTTPException(status_code=status_code, detail=str(exc), headers=headers)

    if not isinstance(exc, PersistenceError):
        logger.error("Unclassified application error: %s", exc)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=_internal_detail(exc),
    )


def _internal_detail(exc: Exception) -> str:
    if get_settings().debug:
        return f"{GENERIC_ERROR_MESSAGE}: {exc}"
    return GENERIC_ERROR_MESSAGE


def _error_response(status_code: int, message: object, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail, getattr(exc, "headers", None))


async def _application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    return await _http_exception_handler(request, to_http_exception(exc))


async def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return _error_response(status.HTTP_400_BAD_REQUEST, "; ".join(problems) or "Invalid request")


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, _internal_detail(exc))


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error raised by the API with the same JSON shape."""

    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(ApplicationError, _application_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)


__all__ = ["GENERIC_ERROR_MESSAGE", "register_exception_handlers", "to_http_exception"]
