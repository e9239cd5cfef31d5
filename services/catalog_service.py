"""
Catalog service.

Loads published Courses and Projects from Notion, fetches each
project's source database, and runs the inference core to produce
the per-project views the site renders.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Optional
import structlog

from config import get_notion_client, settings
from exceptions import (
    AppError,
    CourseNotFoundError,
    InvalidDatabaseIdError,
    NotionNotConfiguredError,
    ProjectNotFoundError,
    UnknownThemeError,
)
from integrations.notion import NotionClient
from models.catalog import (
    Course,
    CourseDetail,
    CourseLinkResponse,
    Project,
    ProjectView,
)
from models.pattern import pattern_view
from models.source import SourceSnapshot
from services import snapshot_cache_service
from services.mapped_item_resolver import resolve_mapped_items
from services.mapping_parser import parse_field_mapping
from services.pattern_resolver import resolve_pattern
from services.property_reader import read_files, read_relation_ids, read_text
from services.record_normalizer import (
    error_snapshot,
    normalize_source_database,
    pick_title,
)
from utils.notion_ids import extract_database_id, same_notion_id
from utils.text_utils import clean_text, slugify

logger = structlog.get_logger(__name__)

COURSE_LINK_PROPERTY = "CourseLink"


# ===================
# PAGE → MODEL
# ===================

def _props(page: dict) -> dict:
    properties = page.get("properties")
    return properties if isinstance(properties, dict) else {}


def course_from_page(page: dict) -> Course:
    """Build a Course from a Courses database page."""
    props = _props(page)
    name = pick_title(props) or "Untitled Course"
    covers = read_files(props.get("CoverImage"))

    return Course(
        id=page.get("id") or "",
        slug=slugify(read_text(props.get("Slug"))) or slugify(name) or (page.get("id") or ""),
        name=name,
        summary=clean_text(read_text(props.get("CourseSummary"))),
        cover_image=covers[0] if covers else None,
        status=read_text(props.get("Status")),
        project_ids=read_relation_ids(props.get("Projects")),
        course_link=read_text(props.get(COURSE_LINK_PROPERTY)) or None,
    )


def project_from_page(page: dict) -> Project:
    """Build a Project from a Projects database page."""
    props = _props(page)
    raw_source = read_text(props.get("SourceDatabaseId")).strip()
    order_text = read_text(props.get("Order"))

    try:
        order = float(order_text) if order_text else None
    except ValueError:
        order = None

    return Project(
        id=page.get("id") or "",
        name=pick_title(props) or "Untitled Project",
        tab_name=read_text(props.get("TabName")),
        order=order,
        status=read_text(props.get("Status")),
        course_ids=read_relation_ids(props.get("Course")),
        source_database_id=extract_database_id(raw_source),
        raw_source_database_id=raw_source,
        ui_pattern=read_text(props.get("UiPattern")),
        field_mapping=read_text(props.get("FieldMapping")),
    )


def _project_sort_key(project: Project) -> tuple:
    return (project.order is None, project.order or 0, project.name.lower())


class CatalogService:
    """
    Course catalog service.

    Every Notion read goes through the client; source database fetch
    failures are captured per database as error snapshots.
    """

    def __init__(self, client: Optional[NotionClient] = None):
        self.client = client or get_notion_client()

    # ===================
    # COURSES & PROJECTS
    # ===================

    def _require(self, value: Optional[str], setting: str) -> str:
        if not value:
            raise NotionNotConfiguredError(setting)
        return value

    def list_courses(self) -> list[Course]:
        """
        Get published courses.

        Returns:
            Courses whose Status is "published", in Notion order
        """
        database_id = self._require(
            settings.notion_courses_database_id,
            "NOTION_COURSES_DATABASE_ID"
        )
        pages = self.client.query_database(database_id)
        courses = [course_from_page(page) for page in pages]
        published = [course for course in courses if course.is_published]

        logger.info("courses_listed", total=len(courses), published=len(published))
        return published

    def get_course(self, slug: str) -> Course:
        """
        Get one published course by slug.

        Raises:
            CourseNotFoundError: If no published course has this slug
        """
        wanted = slug.strip().lower()
        for course in self.list_courses():
            if course.slug == wanted:
                return course
        raise CourseNotFoundError(slug)

    def list_projects(self) -> list[Project]:
        """Get published projects, ordered by Order then name."""
        database_id = self._require(
            settings.notion_projects_database_id,
            "NOTION_PROJECTS_DATABASE_ID"
        )
        pages = self.client.query_database(database_id)
        projects = [project_from_page(page) for page in pages]
        published = [project for project in projects if project.is_published]

        logger.info("projects_listed", total=len(projects), published=len(published))
        return sorted(published, key=_project_sort_key)

    def projects_for_course(
        self,
        course: Course,
        projects: Optional[list[Project]] = None
    ) -> list[Project]:
        """
        Published projects linked to a course.

        Either side of the relation is enough: the course's Projects
        column or the project's Course column.
        """
        if projects is None:
            projects = self.list_projects()

        linked = [
            project for project in projects
            if any(same_notion_id(project.id, pid) for pid in course.project_ids)
            or any(same_notion_id(course.id, cid) for cid in project.course_ids)
        ]
        return sorted(linked, key=_project_sort_key)

    # ===================
    # SOURCE DATABASES
    # ===================

    def fetch_source_snapshot(self, database_id: str) -> SourceSnapshot:
        """
        Fetch and normalize one source database.

        Never raises: a failed fetch becomes an error snapshot.
        """
        try:
            database = self.client.retrieve_database(database_id)
            rows = self.client.query_database(database_id)
        except AppError as e:
            logger.warning(
                "source_database_fetch_failed",
                database_id=database_id,
                error=e.message,
                error_code=e.code
            )
            return error_snapshot(database_id, e.message)
        except Exception as e:
            logger.error(
                "source_database_fetch_failed",
                database_id=database_id,
                error=str(e),
                error_type=type(e).__name__
            )
            return error_snapshot(database_id, str(e))

        return normalize_source_database(database_id, database, rows)

    def load_source_snapshots(self, database_ids: list[str]) -> dict[str, SourceSnapshot]:
        """
        Fetch several source databases concurrently.

        Ids are deduplicated so a database shared by several projects is
        fetched once. Results are merged only after every fetch has
        resolved, successful or not.

        Args:
            database_ids: Clean source database ids (duplicates allowed)

        Returns:
            dict: database id → snapshot (error snapshots included)
        """
        unique_ids = list(dict.fromkeys(i for i in database_ids if i))
        snapshots: dict[str, SourceSnapshot] = {}
        missing: list[str] = []

        for database_id in unique_ids:
            cached = snapshot_cache_service.retrieve_snapshot(database_id)
            if cached is not None:
                snapshots[database_id] = cached
            else:
                missing.append(database_id)

        if missing:
            workers = min(settings.source_fetch_workers, len(missing))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                fetched = list(executor.map(self.fetch_source_snapshot, missing))

            results = dict(zip(missing, fetched))
            snapshot_cache_service.store_snapshots(results, settings.source_cache_ttl_seconds)
            snapshots.update(results)

        logger.info(
            "source_databases_loaded",
            requested=len(unique_ids),
            fetched=len(missing),
            failed=sum(1 for s in snapshots.values() if s.error)
        )

        return snapshots

    def get_source_snapshot(self, raw_id: str) -> SourceSnapshot:
        """
        Snapshot for a raw id, share URL or id list.

        Raises:
            InvalidDatabaseIdError: If no Notion id can be extracted
        """
        database_id = extract_database_id(raw_id)
        if not database_id:
            raise InvalidDatabaseIdError(raw_id)
        return self.load_source_snapshots([database_id])[database_id]

    # ===================
    # VIEWS
    # ===================

    def build_project_view(
        self,
        project: Project,
        snapshot: Optional[SourceSnapshot]
    ) -> ProjectView:
        """
        Run the inference core for one project.

        Args:
            project: Project with its manual overrides
            snapshot: Its source database snapshot, None if not loaded

        Returns:
            ProjectView with pattern, mapped items and diagnostics
        """
        error = None
        if snapshot is None and project.raw_source_database_id and not project.source_database_id:
            error = f"Invalid SourceDatabaseId: {project.raw_source_database_id}"
        elif snapshot is not None and snapshot.error:
            error = f"source DB load failed: {snapshot.error}"

        pattern = resolve_pattern(project.ui_pattern, snapshot)
        mapping = parse_field_mapping(project.field_mapping)
        items = resolve_mapped_items(snapshot, mapping, limit=settings.project_item_limit)

        logger.debug(
            "project_view_built",
            project_id=project.id,
            pattern=pattern.value,
            items=len(items),
            mapped_slots=sorted(mapping.as_dict())
        )

        return ProjectView(
            project=project,
            pattern=pattern,
            **pattern_view(pattern),
            items=items,
            properties=snapshot.properties if snapshot else [],
            source_title=snapshot.title if snapshot and not snapshot.error else None,
            error=error,
        )

    def get_course_detail(self, slug: str) -> CourseDetail:
        """
        Course page: the course and one view per linked project.

        Raises:
            CourseNotFoundError: If no published course has this slug
        """
        course = self.get_course(slug)
        projects = self.projects_for_course(course)
        snapshots = self.load_source_snapshots(
            [p.source_database_id for p in projects if p.source_database_id]
        )

        views = [
            self.build_project_view(
                project,
                snapshots.get(project.source_database_id) if project.source_database_id else None
            )
            for project in projects
        ]

        return CourseDetail(course=course, projects=views)

    def get_project_view(self, project_id: str) -> ProjectView:
        """
        View for a single published project.

        Raises:
            ProjectNotFoundError: If no published project has this id
        """
        project = next(
            (p for p in self.list_projects() if same_notion_id(p.id, project_id)),
            None
        )
        if project is None:
            raise ProjectNotFoundError(project_id)

        snapshot = None
        if project.source_database_id:
            snapshot = self.load_source_snapshots([project.source_database_id])[project.source_database_id]

        return self.build_project_view(project, snapshot)

    # ===================
    # WRITE-BACK & LEGACY
    # ===================

    def write_course_link(self, slug: str) -> CourseLinkResponse:
        """
        Write the course's public URL into its CourseLink property.

        Raises:
            CourseNotFoundError: If no published course has this slug
            NotionAPIError: If the page update fails
        """
        course = self.get_course(slug)
        link = f"{settings.site_base_url.rstrip('/')}/courses/{course.slug}"

        self.client.update_page(course.id, {COURSE_LINK_PROPERTY: {"url": link}})

        logger.info("course_link_written", course_id=course.id, slug=course.slug, link=link)

        return CourseLinkResponse(course_id=course.id, slug=course.slug, course_link=link)

    def fetch_theme_database(self, theme: Optional[str]) -> dict:
        """
        Raw rows of a legacy theme gallery database.

        Raises:
            UnknownThemeError: If theme is not "1" or "2" or is unconfigured
        """
        database_id = settings.theme_database_map.get((theme or "").strip())
        if not database_id:
            raise UnknownThemeError(theme)

        rows = self.client.query_database(database_id)
        return {"object": "list", "results": rows}


# Singleton instance
_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get or create CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService()
    return _catalog_service
