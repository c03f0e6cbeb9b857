"""Exception handlers rendering every failure as the standard envelope."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from tortoise.exceptions import DoesNotExist, IntegrityError

from ..common.schemas import envelope

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return envelope(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix, keep the field path
        location = [str(part) for part in error.get("loc", ())[1:]]
        errors[".".join(location) or "body"] = error.get("msg", "Validation error")
    message = ", ".join(f"{field}: {msg}" for field, msg in errors.items())
    return envelope(status.HTTP_400_BAD_REQUEST, message or "Validation failed", errors)


async def does_not_exist_handler(request: Request, exc: DoesNotExist):
    return envelope(status.HTTP_404_NOT_FOUND, str(exc) or "Resource not found")


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc}")
    return envelope(status.HTTP_400_BAD_REQUEST, "Resource conflicts with existing data")


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, f"Internal server error: {exc}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(DoesNotExist, does_not_exist_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
