"""
Notion id helpers.

SourceDatabaseId is free text: a bare id, a hyphenated UUID, a share
URL, or a list whose first entry is the real id.
"""

import re
from typing import Optional

# 32 hex chars, optionally in 8-4-4-4-12 UUID form
NOTION_ID_PATTERN = re.compile(
    r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"
)


def extract_database_id(raw: Optional[str]) -> Optional[str]:
    """
    Find the first Notion id in a raw value.

    - "https://www.notion.so/ws/Gallery-0123...cdef?v=..." → "0123...cdef"
    - "0123-...; 89ab..." → first id only

    Args:
        raw: SourceDatabaseId as typed by an editor

    Returns:
        32-char lowercase hex id without hyphens, or None
    """
    if not raw:
        return None

    match = NOTION_ID_PATTERN.search(raw)
    if not match:
        return None

    return match.group(0).replace("-", "").lower()


def same_notion_id(a: Optional[str], b: Optional[str]) -> bool:
    """Compare two ids ignoring hyphens and case."""
    if not a or not b:
        return False
    return a.replace("-", "").lower() == b.replace("-", "").lower()
