"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.courses import router as courses_router
from routes.projects import router as projects_router

__all__ = [
    "courses_router",
    "projects_router",
]
