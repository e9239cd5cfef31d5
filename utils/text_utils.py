"""
Text utilities for course names and slugs.

Course names are often bilingual (Chinese/English) and may carry accents.
"""

import re
import unicodedata
from typing import Optional


def slugify(name: Optional[str]) -> str:
    """
    Build a URL slug from a course name.

    - "Data-Enabled Creative Design" → "data-enabled-creative-design"
    - "Diseño Crítico 2024" → "diseno-critico-2024"
    - "資料設計 Data Design" → "data-design"

    Args:
        name: Original name (may have accents, mixed case)

    Returns:
        Lowercase ASCII slug, or "" if nothing usable remains
    """
    if not name:
        return ""

    # Normalize unicode (NFD decomposition separates base chars from accents)
    normalized = unicodedata.normalize('NFD', name)

    # Remove accent marks (combining characters in Unicode category 'Mn')
    ascii_name = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    lower = ascii_name.lower()
    lower = re.sub(r'[^a-z0-9]+', '-', lower)

    return lower.strip('-')


def clean_text(value: Optional[str], max_length: int = 2000) -> str:
    """
    Clean free text read from Notion for display.

    - Strips whitespace
    - Truncates to max length
    - Returns "" for empty/whitespace-only strings

    Args:
        value: Raw text
        max_length: Maximum characters to keep

    Returns:
        Cleaned text
    """
    if not value:
        return ""

    value = value.strip()

    if len(value) > max_length:
        value = value[:max_length]

    return value
