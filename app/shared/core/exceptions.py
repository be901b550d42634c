# 📄 File: app/shared/core/exceptions.py
# 🧭 Purpose (Layman Explanation):
# This file defines the error types the storefront uses to say what went wrong
# (bad input, wrong password, email already taken, or a server problem).
# 🧪 Purpose (Technical Summary):
# Outcome exception hierarchy. Each class fixes its HTTP status and error code; keyword
# context is collected into a details dict rendered by the API exception handlers.
# 🔗 Dependencies:
# FastAPI HTTP status constants, typing
# 🔄 Connected Modules / Calls From:
# Domain services, query helpers, credential service, API exception handlers

from typing import Any, Dict, Optional

from fastapi import status


def _collect(details: Optional[Dict[str, Any]], **context: Any) -> Dict[str, Any]:
    """Merge non-empty context values into a copy of details."""
    merged = dict(details or {})
    merged.update({key: value for key, value in context.items() if value not in (None, "")})
    return merged


class StorefrontException(Exception):
    """
    Base exception class for the storefront backend.

    Subclasses set status_code and error_code; the HTTP layer renders
    message, error_code and details as the error envelope.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, details={self.details!r})"


# =============================================================================
# CALLER-FACING OUTCOMES
# =============================================================================

class BadRequestError(StorefrontException):
    """Invalid caller input, or an id that matches no row."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "BAD_REQUEST"

    def __init__(
        self,
        message: str = "Bad request",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            _collect(details, field=field, value=None if value is None else str(value)),
        )


class UnauthorizedError(StorefrontException):
    """
    Bad credentials, unknown identities during sign-in, and invalid or
    expired session tokens.
    """

    status_code = status.HTTP_401_UNAUTHORIZED
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class ConflictError(StorefrontException):
    """A unique value (an email address) is already taken."""

    status_code = status.HTTP_409_CONFLICT
    error_code = "CONFLICT"

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        field: Optional[str] = None,
        value: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, _collect(details, resource_type=resource_type, field=field, value=value))


class InternalServerError(StorefrontException):
    """
    Every failure that is not one of the caller-facing outcomes, including
    all persistence-layer faults. entity and operation say what was attempted.
    """

    def __init__(
        self,
        message: str = "Internal server error, please try again later",
        entity: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, _collect(details, entity=entity, operation=operation))


# =============================================================================
# INFRASTRUCTURE EXCEPTIONS
# =============================================================================

class DatabaseError(InternalServerError):
    """The database layer could not be initialized or reached."""

    error_code = "DATABASE_ERROR"

    def __init__(self, message: str = "Database error", operation: Optional[str] = None):
        super().__init__(message, entity="database", operation=operation)


class ExternalServiceError(StorefrontException):
    """An outbound call (the mail provider) failed."""

    status_code = status.HTTP_502_BAD_GATEWAY
    error_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(
        self,
        message: str = "External service error",
        service: Optional[str] = None,
        service_response: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, _collect(details, service=service, service_response=service_response))


# Outcomes that pass through the translation wrappers unchanged.
KNOWN_OUTCOMES = (BadRequestError, UnauthorizedError, ConflictError, InternalServerError)


__all__ = [
    "StorefrontException",
    "BadRequestError",
    "UnauthorizedError",
    "ConflictError",
    "InternalServerError",
    "DatabaseError",
    "ExternalServiceError",
    "KNOWN_OUTCOMES",
]
