"""
Test data factories.

Builds Notion property values and pages in the shape the API returns.
"""

from typing import Optional
from uuid import uuid4

COURSES_DB = "c0c0c0c0c0c0c0c0c0c0c0c0c0c0c0c0"
PROJECTS_DB = "d0d0d0d0d0d0d0d0d0d0d0d0d0d0d0d0"


class PropertyFactory:
    """
    Factory for Notion property values.

    Usage:
        PropertyFactory.title("Urban Sound Diary")
        PropertyFactory.files("https://a.png", "https://b.png")
        PropertyFactory.rich_text("#1a2b3c")
    """

    @staticmethod
    def _runs(text: str) -> list[dict]:
        return [{"type": "text", "plain_text": text, "text": {"content": text}}]

    @classmethod
    def title(cls, text: str) -> dict:
        return {"id": "title", "type": "title", "title": cls._runs(text) if text else []}

    @classmethod
    def rich_text(cls, text: str) -> dict:
        return {"type": "rich_text", "rich_text": cls._runs(text) if text else []}

    @staticmethod
    def select(name: Optional[str]) -> dict:
        return {"type": "select", "select": {"name": name} if name else None}

    @staticmethod
    def status(name: Optional[str]) -> dict:
        return {"type": "status", "status": {"name": name} if name else None}

    @staticmethod
    def url(value: Optional[str]) -> dict:
        return {"type": "url", "url": value}

    @staticmethod
    def email(value: Optional[str]) -> dict:
        return {"type": "email", "email": value}

    @staticmethod
    def number(value) -> dict:
        return {"type": "number", "number": value}

    @staticmethod
    def date(start: Optional[str]) -> dict:
        return {"type": "date", "date": {"start": start, "end": None} if start else None}

    @staticmethod
    def multi_select(*names: str) -> dict:
        return {"type": "multi_select", "multi_select": [{"name": n} for n in names]}

    @staticmethod
    def files(*urls: str, external: bool = False) -> dict:
        key = "external" if external else "file"
        return {
            "type": "files",
            "files": [{"name": f"file-{i}", "type": key, key: {"url": u}} for i, u in enumerate(urls)],
        }

    @staticmethod
    def relation(*ids: str) -> dict:
        return {"type": "relation", "relation": [{"id": i} for i in ids]}

    @staticmethod
    def checkbox(value: bool) -> dict:
        return {"type": "checkbox", "checkbox": value}


class PageFactory:
    """
    Factory for Notion pages (database rows).

    Usage:
        page = PageFactory.create({"Name": PropertyFactory.title("A")})
        pages = PageFactory.create_batch(3)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(cls, properties: Optional[dict] = None, id: Optional[str] = None) -> dict:
        counter = cls._next_counter()
        if properties is None:
            properties = {"Name": PropertyFactory.title(f"Row {counter}")}
        return {
            "object": "page",
            "id": id or str(uuid4()),
            "properties": properties,
        }

    @classmethod
    def create_batch(cls, count: int) -> list:
        return [cls.create() for _ in range(count)]


class CatalogFactory:
    """Factory for Courses and Projects database pages."""

    @staticmethod
    def course(
        id: str = "course-1",
        name: str = "Data-Enabled Creative Design",
        slug: Optional[str] = "data-design",
        status: str = "published",
        project_ids: tuple = (),
        summary: str = "Design with data",
        cover: Optional[str] = None,
    ) -> dict:
        properties = {
            "CourseName": PropertyFactory.title(name),
            "Slug": PropertyFactory.rich_text(slug or ""),
            "CourseSummary": PropertyFactory.rich_text(summary),
            "Status": PropertyFactory.status(status),
            "Projects": PropertyFactory.relation(*project_ids),
            "CourseLink": PropertyFactory.url(None),
            "CoverImage": PropertyFactory.files(cover) if cover else PropertyFactory.files(),
        }
        return PageFactory.create(properties, id=id)

    @staticmethod
    def project(
        id: str = "project-1",
        name: str = "Sound Diary",
        course_ids: tuple = ("course-1",),
        source: str = "",
        status: str = "published",
        order: Optional[float] = None,
        tab_name: str = "",
        ui_pattern: str = "",
        field_mapping: str = "",
    ) -> dict:
        properties = {
            "ProjectName": PropertyFactory.title(name),
            "Course": PropertyFactory.relation(*course_ids),
            "TabName": PropertyFactory.rich_text(tab_name),
            "Order": PropertyFactory.number(order),
            "SourceDatabaseId": PropertyFactory.rich_text(source),
            "Status": PropertyFactory.select(status),
            "UiPattern": PropertyFactory.select(ui_pattern or None),
            "FieldMapping": PropertyFactory.rich_text(field_mapping),
        }
        return PageFactory.create(properties, id=id)
