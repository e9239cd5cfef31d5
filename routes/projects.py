"""
Project and source database API routes.
"""

from typing import Optional
from fastapi import APIRouter, Query
import structlog

from config import settings
from models.catalog import PreviewRequest, PreviewResponse, Project, ProjectView
from models.pattern import pattern_view
from models.source import SourceSnapshot
from services.catalog_service import get_catalog_service
from services.mapped_item_resolver import resolve_mapped_items
from services.mapping_parser import parse_field_mapping
from services.pattern_resolver import resolve_pattern
from services.record_normalizer import normalize_record
from routes.errors import handle_error

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Projects"])


@router.get("/projects", response_model=list[Project])
def list_projects():
    """Get all published projects, ordered by Order."""
    try:
        return get_catalog_service().list_projects()
    except Exception as e:
        return handle_error(e)


@router.get("/projects/{project_id}", response_model=ProjectView)
def get_project(project_id: str):
    """
    Get one project's view (pattern, mapped items, source fields).

    Raises:
        404: Project not found
    """
    try:
        return get_catalog_service().get_project_view(project_id)
    except Exception as e:
        return handle_error(e)


@router.get("/source-database/{database_id}", response_model=SourceSnapshot)
def get_source_database(database_id: str):
    """
    Get the normalized snapshot of one source database.

    Accepts a raw id, a hyphenated UUID or a share URL fragment.
    A failed fetch returns 200 with the snapshot's error set.

    Raises:
        422: No Notion id found in the path
    """
    try:
        return get_catalog_service().get_source_snapshot(database_id)
    except Exception as e:
        return handle_error(e)


@router.get("/notion")
def legacy_theme_proxy(theme: Optional[str] = Query(None, description="Theme 1 or 2")):
    """
    Raw rows of a legacy theme gallery database.

    Raises:
        422: Unknown theme
        503: Notion query failed
    """
    try:
        return get_catalog_service().fetch_theme_database(theme)
    except Exception as e:
        return handle_error(e)


@router.post("/preview", response_model=PreviewResponse)
def preview(data: PreviewRequest):
    """
    Run the inference core over posted rows.

    Used by the style playground to try UiPattern and FieldMapping
    values without touching Notion.
    """
    try:
        items = [
            normalize_record(row, fallback_id=f"{data.database_id}-{index}")
            for index, row in enumerate(data.rows)
        ]
        mapping = parse_field_mapping(data.field_mapping)
        pattern = resolve_pattern(data.ui_pattern, items)

        return PreviewResponse(
            pattern=pattern,
            **pattern_view(pattern),
            mapping=mapping.as_dict(),
            items=resolve_mapped_items(items, mapping, limit=settings.project_item_limit),
        )
    except Exception as e:
        return handle_error(e)
