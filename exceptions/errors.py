"""
Custom exception classes for the application.

Core inference functions never raise; these are used by the Notion
client, the catalog service and the HTTP layer.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "COURSE_NOT_FOUND")
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


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


# ===================
# NOTION ERRORS
# ===================

class NotionNotConfiguredError(AppError):
    """Notion token missing (500)."""

    def __init__(self, setting: str = "NOTION_API_KEY"):
        super().__init__(
            code="NOTION_NOT_CONFIGURED",
            message=f"Missing env var: {setting}",
            status_code=500,
            details={"setting": setting}
        )


class NotionAPIError(ExternalServiceError):
    """Notion responded with a non-2xx status or could not be reached."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None
    ):
        super().__init__(
            service="notion",
            message=message,
            details={"status": status, "body": body}
        )
        self.status = status
        self.body = body


# ===================
# CATALOG ERRORS
# ===================

class CourseNotFoundError(NotFoundError):
    """Published course not found."""

    def __init__(self, slug: str):
        super().__init__(
            resource="Course",
            identifier=slug,
            code="COURSE_NOT_FOUND"
        )


class ProjectNotFoundError(NotFoundError):
    """Published project not found."""

    def __init__(self, project_id: str):
        super().__init__(
            resource="Project",
            identifier=project_id,
            code="PROJECT_NOT_FOUND"
        )


class InvalidDatabaseIdError(ValidationError):
    """No 32-character hex id could be extracted."""

    def __init__(self, raw: str):
        super().__init__(
            code="INVALID_DATABASE_ID",
            message="Could not find a Notion database id in the given value",
            details={"provided": raw}
        )


class UnknownThemeError(ValidationError):
    """Legacy theme proxy called with an unknown theme."""

    def __init__(self, theme: Optional[str]):
        super().__init__(
            code="INVALID_THEME",
            message="Invalid or missing theme. Use /api/notion?theme=1 or theme=2",
            details={"provided": theme, "valid": ["1", "2"]}
        )
