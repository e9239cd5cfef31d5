"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ExternalServiceError,

    # Notion
    NotionNotConfiguredError,
    NotionAPIError,

    # Catalog
    CourseNotFoundError,
    ProjectNotFoundError,
    InvalidDatabaseIdError,
    UnknownThemeError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ExternalServiceError",

    # Notion
    "NotionNotConfiguredError",
    "NotionAPIError",

    # Catalog
    "CourseNotFoundError",
    "ProjectNotFoundError",
    "InvalidDatabaseIdError",
    "UnknownThemeError",
]
