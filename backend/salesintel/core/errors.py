# backend/salesintel/core/errors.py

from typing import Any, Optional


class DomainError(Exception):
    """Base error carrying the HTTP status and a machine-readable code."""

    status_code = 500
    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, *, details: Optional[Any] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(DomainError):
    status_code = 400
    error_code = "VALIDATION_ERROR"


class AuthenticationError(DomainError):
    status_code = 401
    error_code = "NOT_AUTHENTICATED"


class AuthorizationError(DomainError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFoundError(DomainError):
    status_code = 404
    error_code = "NOT_FOUND"


class StorageError(DomainError):
    status_code = 500
    error_code = "STORAGE_ERROR"
