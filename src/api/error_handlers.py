"""Centralized error handling for dashboard API endpoints."""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from src.services.market_data_aggregator import (
    MarketDataProviderError,
    MarketDataUnavailableError,
)
from src.services.quote_summary_builder import QuoteDataUnavailableError


class DashboardError:
    """Standard error codes for the dashboard API."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_TIME_RANGE = "INVALID_TIME_RANGE"
    DATA_UNAVAILABLE = "DATA_UNAVAILABLE"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse:
    """Standardized error response format."""

    def __init__(
        self,
        error_code: str,
        message: str,
        details: dict[str, Any] | list[str] | None = None,
        status_code: int = status.HTTP_400_BAD_REQUEST,
    ):
        """
        Initialize error response.

        Args:
            error_code: Standard error code from DashboardError
            message: Human-readable error message
            details: Additional error details (field-specific errors, etc.)
            status_code: HTTP status code
        """
        self.error_code = error_code
        self.message = message
        self.details = details
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        response = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response

    def to_http_exception(self) -> HTTPException:
        """Convert to FastAPI HTTPException."""
        return HTTPException(
            status_code=self.status_code,
            detail=self.to_dict(),
        )


def create_validation_error_response(errors: list[dict[str, Any]]) -> ErrorResponse:
    """
    Create standardized validation error response from Pydantic validation errors.

    Args:
        errors: List of validation errors from Pydantic

    Returns:
        ErrorResponse with field-specific validation errors
    """
    field_errors = {}
    for error in errors:
        field_path = ".".join(str(loc) for loc in error["loc"])
        field_errors[field_path] = error["msg"]

    return ErrorResponse(
        error_code=DashboardError.VALIDATION_ERROR,
        message="Validation failed for one or more fields",
        details=field_errors,
        status_code=status.HTTP_400_BAD_REQUEST,
    )


def create_internal_error(message: str = "An unexpected error occurred") -> ErrorResponse:
    return ErrorResponse(
        error_code=DashboardError.INTERNAL_ERROR,
        message=message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors with the standardized format.

    Args:
        request: FastAPI request object
        exc: RequestValidationError exception

    Returns:
        JSONResponse with standardized error format
    """
    error_response = create_validation_error_response(exc.errors())
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.to_dict(),
    )


def handle_service_error(error: Exception, context: str = "operation") -> ErrorResponse:
    """
    Convert service layer errors to error responses.

    Args:
        error: Exception from service layer
        context: Operation that failed ("quote", "search", "pricing", ...)

    Returns:
        ErrorResponse with appropriate error code and message
    """
    error_message = str(error)

    if isinstance(error, (MarketDataUnavailableError, QuoteDataUnavailableError)):
        return ErrorResponse(
            error_code=DashboardError.DATA_UNAVAILABLE,
            message=error_message,
            status_code=status.HTTP_404_NOT_FOUND,
        )

    if isinstance(error, MarketDataProviderError):
        return ErrorResponse(
            error_code=DashboardError.UPSTREAM_ERROR,
            message="Market data provider request failed",
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    if isinstance(error, ValueError):
        if context == "quote" and "time range" in error_message.lower():
            error_code = DashboardError.INVALID_TIME_RANGE
        else:
            error_code = DashboardError.VALIDATION_ERROR
        return ErrorResponse(
            error_code=error_code,
            message=error_message,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    return create_internal_error()
