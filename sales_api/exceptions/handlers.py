"""
Exception handlers for the API

Every failure leaves the application in the same envelope:
``{"success": false, "message": ..., "error": ...}``. The ``error`` field
is only filled in debug mode.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from sales_api.exceptions.api_exception import APIException
from sales_api.schemas.sales import ErrorResponse
from sales_api.settings import settings

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(message=message, error=error if settings.DEBUG else None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions, including routes that do not exist."""
    if exc.status_code >= 500:
        logger.error(f"HTTP error {exc.status_code} {exc.detail} - URL: {request.url}")
    else:
        logger.warning(f"HTTP error {exc.status_code} {exc.detail} - URL: {request.url}")

    if exc.status_code == status.HTTP_404_NOT_FOUND and not isinstance(exc, APIException):
        return error_response(exc.status_code, "Route not found")

    return error_response(
        exc.status_code,
        str(exc.detail),
        getattr(exc, "diagnostic", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Validation error: {exc.errors()} - URL: {request.url}")
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed",
        str(exc.errors()),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for anything the routes did not convert themselves."""
    logger.exception(f"Unhandled exception: {exc} - URL: {request.url}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        str(exc),
    )


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
