"""
Error types and their HTTP representation.

Two kinds of failure reach clients: invalid input (422 with one entry
per failing field) and database failures (500 with the driver message
and the SQL text that failed).  ``register_exception_handlers`` wires
the corresponding handlers into an application.
"""

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """A statement failed in the database driver."""

    def __init__(self, message: str, sql: str) -> None:
        super().__init__(message)
        self.message = message
        self.sql = sql


class UserNotFoundError(LookupError):
    """No row exists for the requested user id."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


def utf8_safe(value: Any) -> Any:
    """Replace characters that cannot be encoded as UTF-8, such as lone surrogates."""
    if isinstance(value, str):
        return value.encode("utf-8", "replace").decode("utf-8")
    if isinstance(value, list):
        return [utf8_safe(item) for item in value]
    if isinstance(value, dict):
        return {utf8_safe(key): utf8_safe(item) for key, item in value.items()}
    return value


def format_validation_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Flatten pydantic error dicts into ``location``/``param``/``msg``/``value`` entries."""
    formatted = []
    for error in errors:
        loc = list(error.get("loc", ()))
        location = str(loc[0]) if loc else None
        param = ".".join(str(part) for part in loc[1:]) or None
        # For missing fields pydantic reports the whole body as input.
        value = None if error.get("type") == "missing" else error.get("input")
        formatted.append(
            {
                "location": location,
                "param": param,
                "msg": error.get("msg"),
                "value": value,
            }
        )
    return formatted


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = format_validation_errors(exc.errors())
    logger.info("Rejected %s %s: %d invalid field(s)", request.method, request.url.path, len(errors))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=utf8_safe(jsonable_encoder({"errors": errors})),
    )


async def persistence_error_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Database error on %s %s: %s [%s]", request.method, request.url.path, exc.message, exc.sql)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.message, "sql": exc.sql},
    )


async def not_found_error_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to ``app``."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(PersistenceError, persistence_error_handler)
    app.add_exception_handler(UserNotFoundError, not_found_error_handler)
