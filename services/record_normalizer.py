"""
Record normalizer.

Folds a Notion page with an unknown schema into an Item, and a whole
source database (metadata + rows) into a SourceSnapshot.
"""

from typing import Any, Optional
import structlog

from models.source import CanonicalField, DatabaseProperty, Item, SourceSnapshot
from services.property_reader import read_property, read_rich_text, read_text

logger = structlog.get_logger(__name__)

UNTITLED = "Untitled"
DEFAULT_SOURCE_TITLE = "Source Database"

# Conventional title columns, checked when no title-typed property resolves
TITLE_FALLBACK_NAMES = ("CourseName", "ProjectName", "Name", "Title")

TEXT_FIELD_LIMIT = 4
TEXT_SEPARATOR = " | "

# Item channel caps
ITEM_IMAGE_CAP = 6
ITEM_LINK_CAP = 6
ITEM_COLOR_CAP = 8


def pick_title(properties: dict[str, Any]) -> str:
    """
    Resolve a record's title.

    The title-typed property wins; conventional column names are tried
    next. Returns "" when nothing resolves.
    """
    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            title = read_text(prop).strip()
            if title:
                return title
            break

    for name in TITLE_FALLBACK_NAMES:
        title = read_text(properties.get(name)).strip()
        if title:
            return title

    return ""


def _title_property_name(properties: dict[str, Any]) -> Optional[str]:
    for name, prop in properties.items():
        if isinstance(prop, dict) and prop.get("type") == "title":
            return name
    return None


def normalize_record(record: Any, fallback_id: str = "") -> Item:
    """
    Normalize one Notion page into an Item.

    Args:
        record: Notion page dict ({"id": ..., "properties": {...}})
        fallback_id: Id used when the record carries none

    Returns:
        Item with capped channels and the per-field breakdown
    """
    record = record if isinstance(record, dict) else {}
    properties = record.get("properties")
    if not isinstance(properties, dict):
        properties = {}

    record_id = record.get("id")
    title_name = _title_property_name(properties)
    texts: list[str] = []
    images: list[str] = []
    links: list[str] = []
    colors: list[str] = []
    fields: dict[str, CanonicalField] = {}

    for name, prop in properties.items():
        field = read_property(prop)
        fields[name] = field

        if field.text and name != title_name:
            texts.append(field.text)
        images.extend(field.images)
        links.extend(field.links)
        colors.extend(field.colors)

    return Item(
        id=record_id if isinstance(record_id, str) and record_id else fallback_id,
        title=pick_title(properties) or UNTITLED,
        text=TEXT_SEPARATOR.join(texts[:TEXT_FIELD_LIMIT]),
        images=images[:ITEM_IMAGE_CAP],
        links=links[:ITEM_LINK_CAP],
        colors=colors[:ITEM_COLOR_CAP],
        fields=fields,
    )


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def read_database_properties(database: Any) -> list[DatabaseProperty]:
    """Schema listing (id, name, type) from database metadata."""
    database = database if isinstance(database, dict) else {}
    raw = database.get("properties")
    if not isinstance(raw, dict):
        return []

    properties = []
    for name, value in raw.items():
        value = value if isinstance(value, dict) else {}
        properties.append(DatabaseProperty(
            id=_as_text(value.get("id")) or name,
            name=name,
            type=_as_text(value.get("type")) or "unknown",
        ))
    return properties


def read_database_title(database: Any) -> str:
    """Plain title of a database, or the generic placeholder."""
    database = database if isinstance(database, dict) else {}
    title = database.get("title")
    if isinstance(title, str):
        text = title
    else:
        text = read_rich_text(title)
    return text.strip() or DEFAULT_SOURCE_TITLE


def normalize_source_database(
    database_id: str,
    database: Any,
    rows: Any
) -> SourceSnapshot:
    """
    Build the snapshot of one source database.

    Args:
        database_id: Clean Notion database id
        database: Database metadata (title + properties schema)
        rows: Pages returned by a database query

    Returns:
        SourceSnapshot with one Item per row, in query order
    """
    rows = rows if isinstance(rows, list) else []
    items = [
        normalize_record(row, fallback_id=f"{database_id}-{index}")
        for index, row in enumerate(rows)
    ]

    snapshot = SourceSnapshot(
        database_id=database_id,
        title=read_database_title(database),
        properties=read_database_properties(database),
        items=items,
    )

    logger.debug(
        "source_database_normalized",
        database_id=database_id,
        items=len(items),
        properties=len(snapshot.properties)
    )

    return snapshot


def error_snapshot(database_id: str, message: str) -> SourceSnapshot:
    """Snapshot standing in for a source database that failed to load."""
    return SourceSnapshot(database_id=database_id, error=message or "Unknown error")
