"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import pytest
from unittest.mock import patch
from typing import Generator

from exceptions import NotionAPIError
from tests.factories import COURSES_DB, PROJECTS_DB

# ===================
# MOCK NOTION CLIENT
# ===================

class MockNotionClient:
    """Mock NotionClient with configurable databases and failures."""

    def __init__(self):
        self._rows: dict[str, list] = {}
        self._metadata: dict[str, dict] = {}
        self._failures: dict[str, Exception] = {}
        self.queries: list[str] = []
        self.updates: list[tuple[str, dict]] = []

    def set_database(
        self,
        database_id: str,
        rows: list,
        title: str = "Source Database",
        properties: dict = None
    ):
        """Configure rows and metadata for a database."""
        if properties is None:
            properties = {}
            for row in rows:
                for name, prop in row.get("properties", {}).items():
                    properties.setdefault(name, {"id": name[:4], "type": prop.get("type")})
        self._rows[database_id] = rows
        self._metadata[database_id] = {
            "object": "database",
            "id": database_id,
            "title": [{"plain_text": title}] if title else [],
            "properties": properties,
        }

    def set_failure(self, database_id: str, error: Exception = None):
        """Make every call for a database raise."""
        self._failures[database_id] = error or NotionAPIError(
            "Notion API 404: object_not_found", status=404
        )

    def _check(self, database_id: str):
        if database_id in self._failures:
            raise self._failures[database_id]
        if database_id not in self._rows:
            raise NotionAPIError("Notion API 404: object_not_found", status=404)

    def query_database(self, database_id: str, filter=None, sorts=None) -> list:
        self.queries.append(database_id)
        self._check(database_id)
        return list(self._rows[database_id])

    def retrieve_database(self, database_id: str) -> dict:
        self._check(database_id)
        return self._metadata[database_id]

    def update_page(self, page_id: str, properties: dict) -> dict:
        self.updates.append((page_id, properties))
        return {"object": "page", "id": page_id, "properties": properties}


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_notion() -> MockNotionClient:
    """
    Create a mock Notion client.

    Usage:
        def test_something(mock_notion):
            mock_notion.set_database("abc...", [page, page])
    """
    return MockNotionClient()


@pytest.fixture(autouse=True)
def clear_snapshot_cache() -> Generator:
    """Every test starts with an empty snapshot cache."""
    from services import snapshot_cache_service

    snapshot_cache_service.clear_snapshots()
    yield
    snapshot_cache_service.clear_snapshots()


@pytest.fixture
def catalog_settings(monkeypatch):
    """Point the catalog at the mock Courses/Projects databases."""
    from config import settings

    monkeypatch.setattr(settings, "notion_courses_database_id", COURSES_DB)
    monkeypatch.setattr(settings, "notion_projects_database_id", PROJECTS_DB)
    monkeypatch.setattr(settings, "site_base_url", "https://courses.example.com/")
    monkeypatch.setattr(settings, "source_cache_ttl_seconds", 0)
    return settings


@pytest.fixture
def catalog_service(mock_notion, catalog_settings):
    """CatalogService wired to the mock client."""
    from services.catalog_service import CatalogService

    return CatalogService(client=mock_notion)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client_with_mock_notion(catalog_service) -> Generator:
    """
    Create FastAPI test client backed by the mock Notion client.

    Usage:
        def test_endpoint(test_client_with_mock_notion, mock_notion):
            mock_notion.set_database(COURSES_DB, [...])
            response = test_client_with_mock_notion.get("/api/courses")
    """
    from fastapi.testclient import TestClient
    from main import app

    with patch("routes.courses.get_catalog_service", return_value=catalog_service):
        with patch("routes.projects.get_catalog_service", return_value=catalog_service):
            yield TestClient(app)
