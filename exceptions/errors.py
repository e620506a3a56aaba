"""
Custom exception classes for the application.

Every error rendered by the API is an AppError subclass and serializes
to the standard {"error": {...}} body via to_dict().
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "SESSION_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource or running operation (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# SESSION ERRORS
# ===================

class SessionNotFoundError(NotFoundError):
    """Shop session not found."""

    def __init__(self, session_id: str):
        super().__init__(
            resource="Session",
            identifier=session_id,
            code="SESSION_NOT_FOUND"
        )


class MissingFieldsError(ValidationError):
    """Mandatory fields are empty."""

    def __init__(self, fields: list[str], details: Optional[dict] = None):
        super().__init__(
            code="MISSING_MANDATORY_FIELDS",
            message="Missing mandatory information",
            details={"fields": fields, **(details or {})}
        )


# ===================
# SOURCE CATALOG (AKENEO) ERRORS
# ===================

class UpstreamUnavailableError(ExternalServiceError):
    """
    Akeneo could not serve the request.

    Terminal for the request: no partial content, no retry.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        code: str = "UPSTREAM_UNAVAILABLE"
    ):
        super().__init__(
            service="akeneo",
            message=message,
            details=details,
            code=code
        )


class CatalogNotConfiguredError(UpstreamUnavailableError):
    """Akeneo credentials are missing for the session."""

    def __init__(self, missing: list[str]):
        super().__init__(
            code="AKENEO_NOT_CONFIGURED",
            message="Akeneo connection settings are incomplete",
            details={"missing": missing, "redirect": "/app/settings"}
        )


class CatalogAuthError(UpstreamUnavailableError):
    """Akeneo rejected the stored credentials."""

    def __init__(self, message: str):
        super().__init__(
            code="AKENEO_AUTH_ERROR",
            message=message,
            details={"redirect": "/app/akeneo-auth-error"}
        )


# ===================
# TARGET REGISTRY (SHOPIFY) ERRORS
# ===================

class RemoteRejectedError(AppError):
    """Shopify reported a user error for a create mutation (400)."""

    def __init__(
        self,
        message: str,
        code: str = "REMOTE_REJECTED",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=400,
            details=details
        )


# ===================
# IMPORT ERRORS
# ===================

class EmptySelectionError(ValidationError):
    """Bulk import submitted without items."""

    def __init__(self, resource: str):
        super().__init__(
            code="EMPTY_SELECTION",
            message=f"No {resource} selected",
            details={"resource": resource}
        )


class DuplicateSelectionError(ValidationError):
    """Bulk import contains the same code twice."""

    def __init__(self, resource: str, codes: list[str]):
        super().__init__(
            code="DUPLICATE_SELECTION",
            message=f"Selected {resource} contain duplicate codes",
            details={"resource": resource, "codes": codes}
        )


class ImportInProgressError(ConflictError):
    """A bulk import for the same session and resource is still running."""

    def __init__(self, resource: str):
        super().__init__(
            code="IMPORT_IN_PROGRESS",
            message=f"An import of {resource} is already running",
            details={"resource": resource}
        )
