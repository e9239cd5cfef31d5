"""
Course API routes.

Read-only course listing and detail, plus CourseLink write-back.
"""

from fastapi import APIRouter
import structlog

from models.catalog import Course, CourseDetail, CourseLinkResponse
from services.catalog_service import get_catalog_service
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/courses", tags=["Courses"])


@router.get("", response_model=list[Course])
def list_courses():
    """
    Get all published courses.

    Only Status=published rows are returned.
    """
    try:
        return get_catalog_service().list_courses()
    except Exception as e:
        return handle_error(e)


@router.get("/{slug}", response_model=CourseDetail)
def get_course(slug: str):
    """
    Get a course page: the course and one view per project.

    Each project view carries its resolved pattern, mapped items and
    the detected source fields. A failed source database shows up as
    that project's error; it does not fail the request.

    Raises:
        404: Course not found
    """
    try:
        return get_catalog_service().get_course_detail(slug)
    except Exception as e:
        return handle_error(e)


@router.post("/{slug}/course-link", response_model=CourseLinkResponse)
def write_course_link(slug: str):
    """
    Write the public course URL back into Notion's CourseLink.

    Raises:
        404: Course not found
        503: Notion update failed
    """
    try:
        return get_catalog_service().write_course_link(slug)
    except Exception as e:
        return handle_error(e)
