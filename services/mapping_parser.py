"""
FieldMapping parser.

Accepts either a JSON object ({"image": "Cover Photo"}) or lenient
"slot: Field" pairs separated by commas, semicolons or newlines.
Never raises; the worst case is an empty Mapping.
"""

import json
import re
from typing import Any, Optional
import structlog

from models.mapping import Mapping

logger = structlog.get_logger(__name__)

PAIR_SEPARATORS = re.compile(r"[,;\n]")


def _parse_json(raw: str) -> Optional[dict[str, str]]:
    try:
        data = json.loads(raw)
    except ValueError:
        return None

    if not isinstance(data, dict):
        return None

    return {
        str(key): value
        for key, value in data.items()
        if isinstance(value, str)
    }


def _parse_pairs(raw: str) -> dict[str, str]:
    pairs: dict[str, str] = {}

    for token in PAIR_SEPARATORS.split(raw):
        token = token.strip()
        if not token or ":" not in token:
            continue

        key, value = token.split(":", 1)
        key, value = key.strip(), value.strip()
        if key and value:
            pairs[key] = value

    return pairs


def parse_mapping_pairs(raw: Any) -> dict[str, str]:
    """
    Parse a raw override into key -> field name pairs.

    JSON is tried first; anything that is not a JSON object falls back
    to the delimited grammar. Unknown keys are kept here.
    """
    if not isinstance(raw, str):
        return {}

    raw = raw.strip()
    if not raw:
        return {}

    pairs = _parse_json(raw)
    if pairs is None:
        pairs = _parse_pairs(raw)

    return pairs


def parse_field_mapping(raw: Any) -> Mapping:
    """
    Parse a Project's FieldMapping into a Mapping.

    Args:
        raw: FieldMapping text as typed in Notion

    Returns:
        Mapping with the recognized slots; empty when nothing parses
    """
    pairs = parse_mapping_pairs(raw)
    mapping = Mapping(**pairs)

    if pairs and mapping.is_empty():
        logger.debug("field_mapping_without_known_slots", keys=sorted(pairs))

    return mapping
