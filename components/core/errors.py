"""Exception types and handlers shared by all endpoints."""

import logging
from typing import Optional

import fastapi
from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FieldValidationError(Exception):
    """A submitted field failed a check that needs the database."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


def _field_name(loc) -> Optional[str]:
    # loc looks like ("body", "amount"); drop the request part
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) if parts else None


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report only the first failing field with its message."""
    errors = exc.errors()
    first = errors[0] if errors else {"loc": (), "msg": "Invalid request"}
    field = _field_name(first.get("loc", ()))
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, first.get("msg"))
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": first.get("msg"), "field": field}),
    )


async def field_validation_handler(request: Request, exc: FieldValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "field": exc.field},
    )


def init_error_handlers(app: fastapi.FastAPI) -> None:
    """Register the validation error handlers on the app."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(FieldValidationError, field_validation_handler)
