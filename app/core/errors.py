"""
Central error handling

Every error leaves the API as ``{"message": ..., "error"?: ...}`` so the
frontend can display ``message`` without inspecting the status code.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from sqlalchemy.exc import IntegrityError

from app.core.config import settings

logger = logging.getLogger(__name__)


def _field_name(loc) -> str:
    """Drop the leading 'body'/'query'/'path' segment from a pydantic error location."""
    parts = [str(p) for p in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(parts) or "request"


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with the uniform ``{"message": ...}`` body

    Headers set on the exception (e.g. WWW-Authenticate on 401) are preserved.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError as a 400 with field-level messages

    Does not leak validation details in production.
    """
    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation error"},
        )

    errors = [
        {"field": _field_name(e.get("loc", ())), "message": e.get("msg", "Invalid value")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique/foreign key violations that escaped a service are reported as conflicts."""
    logger.warning("Integrity error on %s: %s", request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Duplicate record"},
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with a generic message plus the raw error text

    The raw text is withheld in production.
    """
    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)

    content = {"message": "Server error"}
    if settings.APP_ENV != "prod":
        content["error"] = str(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=content,
    )
