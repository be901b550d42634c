"""
Core utilities package for the storefront.
Provides the outcome exception hierarchy and security primitives.
"""

from .security import SecurityManager, get_security_manager

from .exceptions import (
    StorefrontException,
    BadRequestError,
    UnauthorizedError,
    ConflictError,
    InternalServerError,
    DatabaseError,
    ExternalServiceError,
    KNOWN_OUTCOMES
)

__all__ = [
    # Security
    "SecurityManager",
    "get_security_manager",

    # Exceptions
    "StorefrontException",
    "BadRequestError",
    "UnauthorizedError",
    "ConflictError",
    "InternalServerError",
    "DatabaseError",
    "ExternalServiceError",
    "KNOWN_OUTCOMES",
]
