"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    DatabaseError,

    # Sessions
    SessionNotFoundError,
    MissingFieldsError,

    # Akeneo
    UpstreamUnavailableError,
    CatalogNotConfiguredError,
    CatalogAuthError,

    # Shopify
    RemoteRejectedError,

    # Imports
    EmptySelectionError,
    DuplicateSelectionError,
    ImportInProgressError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "DatabaseError",

    # Sessions
    "SessionNotFoundError",
    "MissingFieldsError",

    # Akeneo
    "UpstreamUnavailableError",
    "CatalogNotConfiguredError",
    "CatalogAuthError",

    # Shopify
    "RemoteRejectedError",

    # Imports
    "EmptySelectionError",
    "DuplicateSelectionError",
    "ImportInProgressError",
]
