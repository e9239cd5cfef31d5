"""
Course and Project schemas.

Both are read from Notion; the site never creates them.
"""

from typing import Optional
from pydantic import Field

from models.base import BaseSchema
from models.mapping import MappedItem
from models.pattern import Pattern
from models.source import DatabaseProperty


PUBLISHED_STATUS = "published"


class Course(BaseSchema):
    """Course entry from the Courses database."""

    id: str = Field(..., description="Notion page id")
    slug: str = Field(..., description="URL slug")
    name: str = Field(..., description="CourseName")
    summary: str = Field("", description="CourseSummary")
    cover_image: Optional[str] = Field(None, description="First CoverImage file")
    status: str = Field("", description="Publish status")
    project_ids: list[str] = Field(default_factory=list, description="Projects relation")
    course_link: Optional[str] = Field(None, description="Published site link")

    @property
    def is_published(self) -> bool:
        return self.status.lower() == PUBLISHED_STATUS


class Project(BaseSchema):
    """Project entry from the Projects database."""

    id: str = Field(..., description="Notion page id")
    name: str = Field(..., description="ProjectName")
    tab_name: str = Field("", description="Tab label on the course page")
    order: Optional[float] = Field(None, description="Sort position within the course")
    status: str = Field("", description="Publish status")
    course_ids: list[str] = Field(default_factory=list, description="Course relation")
    source_database_id: Optional[str] = Field(
        None,
        description="Clean 32-hex source database id"
    )
    raw_source_database_id: str = Field("", description="SourceDatabaseId as typed")
    ui_pattern: str = Field("", description="Manual UiPattern hint")
    field_mapping: str = Field("", description="Raw FieldMapping override")

    @property
    def is_published(self) -> bool:
        return self.status.lower() == PUBLISHED_STATUS

    @property
    def label(self) -> str:
        return self.tab_name or self.name


class ProjectView(BaseSchema):
    """Everything the renderer needs for one project tab."""

    project: Project
    pattern: Pattern
    class_name: str = Field("", description="CSS class of the pattern view")
    component: str = Field("", description="Renderer component for the pattern")
    items: list[MappedItem] = Field(default_factory=list)
    properties: list[DatabaseProperty] = Field(default_factory=list)
    source_title: Optional[str] = None
    error: Optional[str] = None


class CourseDetail(BaseSchema):
    """Course page payload: the course plus its ordered project views."""

    course: Course
    projects: list[ProjectView] = Field(default_factory=list)


class CourseLinkResponse(BaseSchema):
    """Result of writing CourseLink back to Notion."""

    course_id: str
    slug: str
    course_link: str


class PreviewRequest(BaseSchema):
    """Raw rows plus overrides to run through the inference core."""

    rows: list[dict] = Field(default_factory=list, description="Notion page dicts")
    ui_pattern: str = Field("", description="Manual UiPattern hint")
    field_mapping: str = Field("", description="Raw FieldMapping override")
    database_id: str = Field("preview", description="Id used for rows without one")


class PreviewResponse(BaseSchema):
    """Core output for a preview request."""

    pattern: Pattern
    class_name: str = ""
    component: str = ""
    mapping: dict[str, str] = Field(default_factory=dict)
    items: list[MappedItem] = Field(default_factory=list)
