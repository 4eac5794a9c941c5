# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the server as {"error": <message>, "code": <CODE>}, with
# "field" added for field-level validation failures.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ContactManagerException(Exception):
    """
    Base exception for the contact manager API.

    All custom exceptions inherit from this class.
    Provides structured error responses with a machine-readable code.
    """

    def __init__(
        self,
        message: str,
        code: str = "CONTACT_MANAGER_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "error": self.message,
            "code": self.code,
        }
        if "field" in self.details:
            result["field"] = self.details["field"]
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class ContactValidationError(ContactManagerException):
    """Base for input problems detected before any mutation."""

    def __init__(self, message: str, code: str, field: str):
        super().__init__(
            message=message,
            code=code,
            status_code=400,
            details={"field": field},
        )
        self.field = field


class MissingFieldError(ContactValidationError):
    """Raised when a required contact field is empty."""

    def __init__(self, field: str, message: str | None = None):
        super().__init__(
            message=message or f"{field} is required",
            code="MISSING_FIELD",
            field=field,
        )


class InvalidEmailFormatError(ContactValidationError):
    """Raised when the email does not look like an email address."""

    def __init__(self, message: str = "Invalid email format"):
        super().__init__(message=message, code="INVALID_EMAIL", field="email")


class InvalidPhoneFormatError(ContactValidationError):
    """Raised when the phone number fails the digit-count rule."""

    def __init__(self, message: str = "Invalid phone number format"):
        super().__init__(message=message, code="INVALID_PHONE", field="phone")


class DuplicateEmailError(ContactManagerException):
    """Raised when another contact already uses the email."""

    def __init__(self, email: str):
        super().__init__(
            message="Email already exists",
            code="DUPLICATE_EMAIL",
            status_code=400,
            details={"email": email},
        )


# =============================================================================
# Lookup / Storage Exceptions
# =============================================================================

class ContactNotFoundError(ContactManagerException):
    """Raised when a contact ID doesn't exist."""

    def __init__(self, contact_id: int | str):
        super().__init__(
            message="Contact not found",
            code="CONTACT_NOT_FOUND",
            status_code=404,
            details={"contact_id": contact_id},
        )


class StorageFailureError(ContactManagerException):
    """Raised when the database fails for a reason we don't classify."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="STORAGE_ERROR",
            status_code=500,
            details={"error": error},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def contact_manager_exception_handler(
    request: Request,
    exc: ContactManagerException
) -> JSONResponse:
    """Convert ContactManagerException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    A path id that isn't an integer can't name a contact, so it is reported
    as not found. Anything wrong with the body (bad JSON, non-string values)
    is a 400 in the same shape as the field rules.
    """
    errors = exc.errors()

    if any(err.get("loc", ())[:1] == ("path",) for err in errors):
        return JSONResponse(
            status_code=404,
            content={"error": "Contact not found", "code": "CONTACT_NOT_FOUND"},
        )

    message = "Invalid request body"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))

    return JSONResponse(
        status_code=400,
        content={"error": message, "code": "INVALID_REQUEST"},
    )
