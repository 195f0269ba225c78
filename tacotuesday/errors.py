"""
Error responses shared by the routers and registered on the app in main.

Bodies follow the shape the web client expects: a status code plus an
`errors` collection it can join into one message.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

VALIDATION_TITLE = "One or more validation errors occurred."
VALIDATION_TYPE = "https://tools.ietf.org/html/rfc7231#section-6.5.1"


class NotAuthorizedError(Exception):
    """The caller is authenticated but does not own the record."""

    def __init__(self, message: str = "Not Authorized") -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(Exception):
    """The request is well-formed JSON but inconsistent (e.g. id mismatch)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def validation_problem(errors: dict[str, list[str]]) -> JSONResponse:
    """Build a 400 response listing messages per field."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "type": VALIDATION_TYPE,
            "title": VALIDATION_TITLE,
            "status": status.HTTP_400_BAD_REQUEST,
            "errors": errors,
        },
    )


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "body"


def collect_field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic error messages by the offending field."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(tuple(err.get("loc", ()))), []).append(err["msg"])
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Replace FastAPI's 422 with a 400 carrying per-field messages."""
    errors = collect_field_errors(exc)
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return validation_problem(errors)


async def not_authorized_handler(request: Request, exc: NotAuthorizedError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"status": status.HTTP_401_UNAUTHORIZED, "errors": [exc.message]},
    )


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"status": status.HTTP_400_BAD_REQUEST, "errors": [exc.message]},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the API's error handlers to app."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(NotAuthorizedError, not_authorized_handler)
    app.add_exception_handler(BadRequestError, bad_request_handler)
