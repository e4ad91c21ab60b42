# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
#
# Every error leaves the gateway as JSON with a "message" key so clients can
# render failures without caring which layer produced them.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CodeBuddyException(Exception):
    """
    Base exception for the CodeBuddy API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "CODEBUDDY_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Resource Exceptions
# =============================================================================

class NotFoundError(CodeBuddyException):
    """Raised when a row doesn't exist."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            message=f"{resource.capitalize()} not found: {resource_id}",
            code=f"{resource.upper().replace(' ', '_')}_NOT_FOUND",
            status_code=404,
            suggestion=f"Check that the {resource} id is correct",
            details={"id": resource_id},
        )


class ConflictError(CodeBuddyException):
    """Raised when a write would violate a uniqueness or state rule."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details,
        )


# =============================================================================
# Request Exceptions
# =============================================================================

class PayloadTooLargeError(CodeBuddyException):
    """Raised when a request body exceeds the parser limit."""

    def __init__(self, limit_bytes: int):
        super().__init__(
            message="Request entity too large",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            suggestion=f"Send a body smaller than {limit_bytes} bytes",
            details={"limit_bytes": limit_bytes},
        )


class MalformedBodyError(CodeBuddyException):
    """Raised when a request body cannot be decoded."""

    def __init__(self, error: str):
        super().__init__(
            message="Malformed JSON body",
            code="MALFORMED_BODY",
            status_code=400,
            suggestion="Check that the body is valid JSON and Content-Type matches",
            details={"error": error},
        )


class AuthenticationError(CodeBuddyException):
    """Raised when credentials are rejected by Supabase Auth."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_FAILED",
            status_code=401,
        )


# =============================================================================
# Database Exceptions
# =============================================================================

class DatabaseConnectionError(CodeBuddyException):
    """Raised when the database cannot be reached at startup."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Database connection failed: {error}",
            code="DATABASE_CONNECTION_FAILED",
            status_code=503,
            suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file",
            details={"error": error},
        )


class DatabaseNotConnectedError(CodeBuddyException):
    """Raised when a handler needs the database before it is connected."""

    def __init__(self):
        super().__init__(
            message="Database is not connected",
            code="DATABASE_NOT_CONNECTED",
            status_code=503,
            suggestion="Try again shortly; the API is still connecting to the database",
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def codebuddy_exception_handler(
    request: Request,
    exc: CodeBuddyException
) -> JSONResponse:
    """Convert CodeBuddyException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Render HTTPExceptions raised by route handlers as {"message": ...}."""
    detail = exc.detail
    if isinstance(detail, dict):
        content: dict[str, Any] = detail
    else:
        content = {"message": str(detail) if detail else "Request failed"}
    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Undecodable JSON is a client error of its own (400); everything else is
    reported field by field (422).
    """
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return await codebuddy_exception_handler(
            request, MalformedBodyError(str(errors[0].get("msg", "")))
        )
    return JSONResponse(
        status_code=422,
        content={
            "message": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                for error in errors
            ],
        }
    )


def build_unhandled_exception_handler(expose_details: bool):
    """
    Build the catch-all handler for errors nothing else claimed.

    Args:
        expose_details: Include the exception message in the response body.
            Off in production.
    """

    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
        content: dict[str, Any] = {"message": "Internal server error"}
        if expose_details:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return unhandled_exception_handler
