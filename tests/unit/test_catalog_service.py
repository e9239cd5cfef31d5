"""
Unit tests for CatalogService.

Run: pytest tests/unit/test_catalog_service.py -v
"""

import pytest
from unittest.mock import patch

from exceptions import (
    CourseNotFoundError,
    InvalidDatabaseIdError,
    NotionAPIError,
    NotionNotConfiguredError,
    ProjectNotFoundError,
    UnknownThemeError,
)
from models.pattern import Pattern
from services import snapshot_cache_service
from services.catalog_service import (
    CatalogService,
    course_from_page,
    get_catalog_service,
    project_from_page,
)
from tests.factories import (
    COURSES_DB,
    PROJECTS_DB,
    CatalogFactory,
    PageFactory,
    PropertyFactory,
)

SOURCE_A = "a" * 32
SOURCE_B = "b" * 32
SOURCE_C = "c" * 32


def gallery_row(title: str = "Photo") -> dict:
    return PageFactory.create({
        "Name": PropertyFactory.title(title),
        "Photos": PropertyFactory.files("https://img/1", "https://img/2"),
    })


# ===================
# PAGE CONVERSION
# ===================

class TestCourseFromPage:
    """Tests for course_from_page()"""

    def test_reads_course_columns(self):
        page = CatalogFactory.course(
            id="course-1",
            name="Data-Enabled Creative Design",
            slug="Data Design",
            project_ids=("p1", "p2"),
            cover="https://img/cover.png",
        )

        course = course_from_page(page)

        assert course.id == "course-1"
        assert course.name == "Data-Enabled Creative Design"
        assert course.slug == "data-design"
        assert course.summary == "Design with data"
        assert course.cover_image == "https://img/cover.png"
        assert course.project_ids == ["p1", "p2"]
        assert course.course_link is None
        assert course.is_published

    def test_slug_falls_back_to_name(self):
        course = course_from_page(CatalogFactory.course(name="Diseño Crítico", slug=None))

        assert course.slug == "diseno-critico"

    def test_draft_not_published(self):
        assert not course_from_page(CatalogFactory.course(status="Draft")).is_published


class TestProjectFromPage:
    """Tests for project_from_page()"""

    def test_reads_project_columns(self):
        page = CatalogFactory.project(
            id="p1",
            name="Sound Diary",
            source=f"https://www.notion.so/ws/Gallery-{SOURCE_A}?v=123",
            order=2,
            tab_name="Sound",
            ui_pattern="swatch",
            field_mapping="image: Cover",
        )

        project = project_from_page(page)

        assert project.source_database_id == SOURCE_A
        assert project.order == 2
        assert project.label == "Sound"
        assert project.ui_pattern == "swatch"
        assert project.field_mapping == "image: Cover"
        assert project.course_ids == ["course-1"]

    def test_first_id_of_a_list(self):
        project = project_from_page(CatalogFactory.project(source=f"{SOURCE_B}, {SOURCE_A}"))

        assert project.source_database_id == SOURCE_B

    def test_garbage_source_id(self):
        project = project_from_page(CatalogFactory.project(source="ask the TA"))

        assert project.source_database_id is None
        assert project.raw_source_database_id == "ask the TA"


# ===================
# LISTING
# ===================

class TestListing:
    """Tests for list_courses(), get_course() and list_projects()"""

    def test_only_published_courses(self, catalog_service, mock_notion):
        mock_notion.set_database(COURSES_DB, [
            CatalogFactory.course(id="c1", slug="one"),
            CatalogFactory.course(id="c2", slug="two", status="draft"),
            CatalogFactory.course(id="c3", slug="three", status="Published"),
        ])

        courses = catalog_service.list_courses()

        assert [c.id for c in courses] == ["c1", "c3"]

    def test_get_course_by_slug(self, catalog_service, mock_notion):
        mock_notion.set_database(COURSES_DB, [CatalogFactory.course(id="c1", slug="one")])

        assert catalog_service.get_course("One").id == "c1"

    def test_get_course_not_found(self, catalog_service, mock_notion):
        mock_notion.set_database(COURSES_DB, [CatalogFactory.course(slug="one", status="draft")])

        with pytest.raises(CourseNotFoundError):
            catalog_service.get_course("one")

    def test_projects_ordered(self, catalog_service, mock_notion):
        mock_notion.set_database(PROJECTS_DB, [
            CatalogFactory.project(id="p-none", name="Zeta"),
            CatalogFactory.project(id="p2", name="B", order=2),
            CatalogFactory.project(id="p1", name="A", order=1),
            CatalogFactory.project(id="p-draft", status="draft", order=0),
        ])

        projects = catalog_service.list_projects()

        assert [p.id for p in projects] == ["p1", "p2", "p-none"]

    def test_missing_database_setting(self, catalog_service, catalog_settings, monkeypatch):
        monkeypatch.setattr(catalog_settings, "notion_courses_database_id", None)

        with pytest.raises(NotionNotConfiguredError):
            catalog_service.list_courses()

    def test_projects_for_course_either_side_of_relation(self, catalog_service, mock_notion):
        course = course_from_page(CatalogFactory.course(id="c1", project_ids=("p1",)))
        mock_notion.set_database(PROJECTS_DB, [
            CatalogFactory.project(id="p1", course_ids=()),
            CatalogFactory.project(id="p2", course_ids=("c1",)),
            CatalogFactory.project(id="p3", course_ids=("other",)),
        ])

        projects = catalog_service.projects_for_course(course)

        assert {p.id for p in projects} == {"p1", "p2"}


# ===================
# SOURCE DATABASES
# ===================

class TestLoadSourceSnapshots:
    """Tests for fetch_source_snapshot() and load_source_snapshots()"""

    def test_fetch_normalizes(self, catalog_service, mock_notion):
        mock_notion.set_database(SOURCE_A, [gallery_row()], title="Gallery")

        snapshot = catalog_service.fetch_source_snapshot(SOURCE_A)

        assert snapshot.title == "Gallery"
        assert snapshot.items[0].images == ["https://img/1", "https://img/2"]
        assert [p.name for p in snapshot.properties] == ["Name", "Photos"]

    def test_fetch_failure_becomes_error_snapshot(self, catalog_service, mock_notion):
        mock_notion.set_failure(SOURCE_A, NotionAPIError("Notion API 401: unauthorized", status=401))

        snapshot = catalog_service.fetch_source_snapshot(SOURCE_A)

        assert snapshot.error == "Notion API 401: unauthorized"
        assert snapshot.items == []

    def test_unexpected_exception_becomes_error_snapshot(self, catalog_service, mock_notion):
        mock_notion.set_failure(SOURCE_A, RuntimeError("boom"))

        assert catalog_service.fetch_source_snapshot(SOURCE_A).error == "boom"

    def test_deduplicates_and_isolates_failures(self, catalog_service, mock_notion):
        mock_notion.set_database(SOURCE_A, [gallery_row()])
        mock_notion.set_failure(SOURCE_B)
        mock_notion.set_database(SOURCE_C, [])

        snapshots = catalog_service.load_source_snapshots(
            [SOURCE_A, SOURCE_B, SOURCE_A, SOURCE_C, None]
        )

        assert set(snapshots) == {SOURCE_A, SOURCE_B, SOURCE_C}
        assert snapshots[SOURCE_A].error is None
        assert snapshots[SOURCE_B].error is not None
        assert snapshots[SOURCE_C].items == []
        assert mock_notion.queries.count(SOURCE_A) == 1

    def test_cache_reused_when_enabled(self, catalog_service, catalog_settings, mock_notion, monkeypatch):
        monkeypatch.setattr(catalog_settings, "source_cache_ttl_seconds", 60)
        mock_notion.set_database(SOURCE_A, [gallery_row()])
        mock_notion.set_failure(SOURCE_B)

        catalog_service.load_source_snapshots([SOURCE_A, SOURCE_B])
        catalog_service.load_source_snapshots([SOURCE_A, SOURCE_B])

        assert mock_notion.queries.count(SOURCE_A) == 1
        assert snapshot_cache_service.retrieve_snapshot(SOURCE_B) is None

    def test_get_source_snapshot_extracts_id(self, catalog_service, mock_notion):
        mock_notion.set_database(SOURCE_A, [])

        hyphenated = f"{SOURCE_A[:8]}-{SOURCE_A[8:12]}-{SOURCE_A[12:16]}-{SOURCE_A[16:20]}-{SOURCE_A[20:]}"
        snapshot = catalog_service.get_source_snapshot(hyphenated)

        assert snapshot.database_id == SOURCE_A

    def test_get_source_snapshot_invalid_id(self, catalog_service):
        with pytest.raises(InvalidDatabaseIdError):
            catalog_service.get_source_snapshot("not-an-id")


# ===================
# VIEWS
# ===================

class TestBuildProjectView:
    """Tests for build_project_view()"""

    def test_view_from_snapshot(self, catalog_service, mock_notion):
        mock_notion.set_database(SOURCE_A, [gallery_row("One"), gallery_row("Two")], title="Gallery")
        project = project_from_page(CatalogFactory.project(source=SOURCE_A))
        snapshot = catalog_service.fetch_source_snapshot(SOURCE_A)

        view = catalog_service.build_project_view(project, snapshot)

        assert view.pattern == Pattern.GALLERY_STORY
        assert [i.title for i in view.items] == ["One", "Two"]
        assert view.component == "GalleryStoryCard"
        assert view.source_title == "Gallery"
        assert view.error is None

    def test_error_snapshot_view(self, catalog_service):
        from services.record_normalizer import error_snapshot

        project = project_from_page(CatalogFactory.project(source=SOURCE_A))

        view = catalog_service.build_project_view(project, error_snapshot(SOURCE_A, "network fail"))

        assert view.pattern == Pattern.GENERIC_CARDS
        assert view.items == []
        assert view.error == "source DB load failed: network fail"

    def test_invalid_source_id_view(self, catalog_service):
        project = project_from_page(CatalogFactory.project(source="ask the TA", ui_pattern="links"))

        view = catalog_service.build_project_view(project, None)

        assert view.pattern == Pattern.LINK_CARDS
        assert view.error.startswith("Invalid SourceDatabaseId")

    def test_item_limit(self, catalog_service, catalog_settings, mock_notion, monkeypatch):
        monkeypatch.setattr(catalog_settings, "project_item_limit", 2)
        mock_notion.set_database(SOURCE_A, PageFactory.create_batch(5))
        project = project_from_page(CatalogFactory.project(source=SOURCE_A))

        view = catalog_service.build_project_view(project, catalog_service.fetch_source_snapshot(SOURCE_A))

        assert len(view.items) == 2


class TestCourseDetail:
    """Tests for get_course_detail()"""

    def test_one_failed_source_does_not_block_others(self, catalog_service, mock_notion):
        mock_notion.set_database(COURSES_DB, [CatalogFactory.course(id="c1", slug="one")])
        mock_notion.set_database(PROJECTS_DB, [
            CatalogFactory.project(id="p1", name="Good", course_ids=("c1",), order=1, source=SOURCE_A),
            CatalogFactory.project(id="p2", name="Bad", course_ids=("c1",), order=2, source=SOURCE_B),
            CatalogFactory.project(id="p3", name="Shared", course_ids=("c1",), order=3, source=SOURCE_A, ui_pattern="generic"),
        ])
        mock_notion.set_database(SOURCE_A, [gallery_row()])
        mock_notion.set_failure(SOURCE_B)

        detail = catalog_service.get_course_detail("one")

        assert [v.project.id for v in detail.projects] == ["p1", "p2", "p3"]
        assert detail.projects[0].pattern == Pattern.GALLERY_STORY
        assert detail.projects[1].error.startswith("source DB load failed")
        assert detail.projects[2].pattern == Pattern.GENERIC_CARDS
        assert mock_notion.queries.count(SOURCE_A) == 1


# ===================
# WRITE-BACK & LEGACY
# ===================

class TestWriteCourseLink:
    """Tests for write_course_link()"""

    def test_updates_course_link(self, catalog_service, mock_notion):
        mock_notion.set_database(COURSES_DB, [CatalogFactory.course(id="c1", slug="one")])

        result = catalog_service.write_course_link("one")

        assert result.course_link == "https://courses.example.com/courses/one"
        assert mock_notion.updates == [
            ("c1", {"CourseLink": {"url": "https://courses.example.com/courses/one"}})
        ]


class TestFetchThemeDatabase:
    """Tests for fetch_theme_database()"""

    def test_known_theme(self, catalog_service, catalog_settings, mock_notion, monkeypatch):
        monkeypatch.setattr(catalog_settings, "notion_database_id_theme_1", SOURCE_C)
        mock_notion.set_database(SOURCE_C, [gallery_row()])

        result = catalog_service.fetch_theme_database("1")

        assert len(result["results"]) == 1

    @pytest.mark.parametrize("theme", [None, "", "3"])
    def test_unknown_theme(self, catalog_service, theme):
        with pytest.raises(UnknownThemeError):
            catalog_service.fetch_theme_database(theme)


class TestGetCatalogService:
    """Tests for get_catalog_service() singleton."""

    def test_returns_same_instance(self, mock_notion):
        with patch("services.catalog_service._catalog_service", None):
            with patch("services.catalog_service.get_notion_client", return_value=mock_notion):
                first = get_catalog_service()
                second = get_catalog_service()

        assert first is second
        assert first.client is mock_notion

    def test_explicit_client(self, mock_notion):
        assert CatalogService(client=mock_notion).client is mock_notion


class TestGetProjectView:
    """Tests for get_project_view()"""

    def test_view_for_published_project(self, catalog_service, mock_notion):
        mock_notion.set_database(PROJECTS_DB, [CatalogFactory.project(id="p1", source=SOURCE_A)])
        mock_notion.set_database(SOURCE_A, [gallery_row()])

        view = catalog_service.get_project_view("p1")

        assert view.project.id == "p1"
        assert view.pattern == Pattern.GALLERY_STORY

    def test_project_without_source(self, catalog_service, mock_notion):
        mock_notion.set_database(PROJECTS_DB, [CatalogFactory.project(id="p1")])

        view = catalog_service.get_project_view("p1")

        assert view.items == []
        assert view.error is None

    def test_draft_project_not_found(self, catalog_service, mock_notion):
        mock_notion.set_database(PROJECTS_DB, [CatalogFactory.project(id="p1", status="draft")])

        with pytest.raises(ProjectNotFoundError):
            catalog_service.get_project_view("p1")
