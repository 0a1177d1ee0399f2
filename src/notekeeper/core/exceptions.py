"""
Application errors and the handlers that turn them into JSON responses.

Every error body carries a ``message``; validation failures also carry an
``errors`` list with one ``{"field", "message"}`` entry per problem.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("notekeeper.errors")

_LOCATION_PREFIXES = ("body", "query", "path", "header", "cookie")


class InvalidInputError(HTTPException):
    """400 - request failed validation."""

    def __init__(self, message: str = "Validation failed", errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=message)
        self.errors = errors or []


class UnauthenticatedError(HTTPException):
    """401 - missing, malformed, expired or forged credentials."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=message,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(HTTPException):
    """404 - resource does not exist for the requesting user."""

    def __init__(self, resource: str = "Resource"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{resource} not found")


def _field_name(loc: Sequence[Any]) -> str:
    parts = list(loc)
    if len(parts) > 1 and parts[0] in _LOCATION_PREFIXES:
        parts = parts[1:]
    return ".".join(str(p) for p in parts)


def _clean_message(msg: str) -> str:
    # pydantic prefixes messages raised from validators
    return msg[len("Value error, "):] if msg.startswith("Value error, ") else msg


def format_validation_errors(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """Flatten pydantic error dicts into ``{"field", "message"}`` pairs."""
    return [
        {"field": _field_name(err.get("loc", ())), "message": _clean_message(str(err.get("msg", "")))}
        for err in errors
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on the app."""

    @app.exception_handler(InvalidInputError)
    async def _invalid_input_handler(request: Request, exc: InvalidInputError):
        body: Dict[str, Any] = {"message": exc.detail}
        if exc.errors:
            body["errors"] = exc.errors
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = format_validation_errors(exc.errors())
        logger.info("Request validation failed", extra={"path": request.url.path, "errors": errors})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail or "HTTP error"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Server error"},
        )
