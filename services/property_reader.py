"""
Property reader.

Turns one Notion property value of any type into a CanonicalField.
Every function here is total: unknown types and malformed payloads
read as empty.
"""

import re
from typing import Any, Optional

from models.source import CanonicalField

URL_PATTERN = re.compile(r"^https?://")
HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

LITERAL_TYPES = ("url", "email", "phone_number")


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return value
    return []


def _as_dict(value: Any) -> dict:
    if isinstance(value, dict):
        return value
    return {}


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    return ""


def read_rich_text(runs: Any) -> str:
    """Concatenate plain_text of rich text runs."""
    return "".join(
        _as_str(_as_dict(run).get("plain_text"))
        for run in _as_list(runs)
    )


def _format_number(value: Any) -> str:
    # bool is an int subclass but Notion never sends it as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _read_formula(formula: dict) -> str:
    kind = formula.get("type")
    if kind == "string":
        return _as_str(formula.get("string"))
    if kind == "number":
        return _format_number(formula.get("number"))
    if kind == "boolean":
        value = formula.get("boolean")
        return "" if value is None else str(value).lower()
    if kind == "date":
        return _as_str(_as_dict(formula.get("date")).get("start"))
    return ""


def read_text(prop: Any) -> str:
    """
    Resolve the display text of a property.

    Args:
        prop: Notion property value ({"type": ..., <type>: payload})

    Returns:
        Text for the property's declared type, "" when unsupported
    """
    prop = _as_dict(prop)
    kind = prop.get("type")

    if kind in ("title", "rich_text"):
        return read_rich_text(prop.get(kind))
    if kind in ("select", "status"):
        return _as_str(_as_dict(prop.get(kind)).get("name"))
    if kind in LITERAL_TYPES:
        return _as_str(prop.get(kind))
    if kind == "number":
        return _format_number(prop.get("number"))
    if kind == "date":
        return _as_str(_as_dict(prop.get("date")).get("start"))
    if kind == "multi_select":
        return ", ".join(
            _as_str(_as_dict(option).get("name"))
            for option in _as_list(prop.get("multi_select"))
        )
    if kind == "formula":
        return _read_formula(_as_dict(prop.get("formula")))
    if kind == "rollup":
        rollup = _as_dict(prop.get("rollup"))
        if rollup.get("type") == "array":
            texts = [read_text(entry) for entry in _as_list(rollup.get("array"))]
            return ", ".join(text for text in texts if text)
        return ""

    return ""


def read_files(prop: Any) -> list[str]:
    """
    Hosted URLs of a files property.

    Notion-hosted file.url wins over external.url; empty entries drop.
    """
    prop = _as_dict(prop)
    if prop.get("type") != "files":
        return []

    urls = []
    for entry in _as_list(prop.get("files")):
        entry = _as_dict(entry)
        url = (
            _as_str(_as_dict(entry.get("file")).get("url"))
            or _as_str(_as_dict(entry.get("external")).get("url"))
        )
        if url:
            urls.append(url)
    return urls


def read_relation_ids(prop: Any) -> list[str]:
    """Page ids of a relation property. Not a display channel."""
    prop = _as_dict(prop)
    if prop.get("type") != "relation":
        return []
    ids = (_as_str(_as_dict(entry).get("id")) for entry in _as_list(prop.get("relation")))
    return [page_id for page_id in ids if page_id]


def read_links(prop: Any, text: Optional[str] = None) -> list[str]:
    """URL-typed properties, or any text that is a bare http(s) URL."""
    prop = _as_dict(prop)
    if not isinstance(text, str):
        text = read_text(prop)
    if not text:
        return []
    if prop.get("type") == "url" or URL_PATTERN.match(text):
        return [text]
    return []


def read_colors(prop: Any, text: Optional[str] = None) -> list[str]:
    """Text that is exactly a #rgb or #rrggbb hex color."""
    if not isinstance(text, str):
        text = read_text(prop)
    text = text.strip()
    if text and HEX_COLOR_PATTERN.match(text):
        return [text]
    return []


def read_property(prop: Any) -> CanonicalField:
    """
    Read every channel of one property.

    Args:
        prop: Notion property value

    Returns:
        CanonicalField with text, images, links and colors
    """
    text = read_text(prop)
    return CanonicalField(
        text=text,
        images=read_files(prop),
        links=read_links(prop, text),
        colors=read_colors(prop, text),
    )
