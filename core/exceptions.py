"""
Service exceptions and the JSON error handlers registered on the app.

Every error body has the shape ``{"error": str, "errorCode": str}`` with an
optional ``details`` string, which is what the study frontend expects.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class ServiceException(Exception):
    """Base exception for service layer errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "SERVICE_ERROR"


class ConfigNotLoaded(ServiceException):
    """Raised when the knowledge test definition failed to load at startup."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    error_code = "CONFIG_NOT_LOADED"

    def __init__(self, message: str = "Knowledge test configuration is not loaded"):
        super().__init__(message)


def error_response(status_code: int, error: str, error_code: str, details: str | None = None) -> JSONResponse:
    content = {"error": error, "errorCode": error_code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def service_exception_handler(request: Request, exc: ServiceException) -> JSONResponse:
    logger.error(f"Service error in {request.url.path}: {exc}")
    return error_response(exc.status_code, str(exc), exc.error_code)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Report missing or malformed request fields as 400, naming the fields
    the client has to fix.
    """
    fields = []
    all_missing = True
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
        if err.get("type") != "missing":
            all_missing = False

    prefix = "Missing required fields" if all_missing else "Missing or invalid fields"
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        f"{prefix}. Please provide: {', '.join(fields)}",
        "VALIDATION_ERROR",
    )


async def database_exception_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"Database error in {request.url.path}: {exc}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to access the database",
        "DATABASE_ERROR",
    )
