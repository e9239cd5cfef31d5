"""
Normalized source database schemas.

A source database is any Notion database a Project points at. Its rows
are folded into Items with four canonical channels.
"""

from typing import Optional
from pydantic import Field

from models.base import FrozenSchema


class CanonicalField(FrozenSchema):
    """What one Notion property contributes to each channel."""

    text: str = ""
    images: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)


class Item(FrozenSchema):
    """
    One normalized source row.

    title is never empty. images/links/colors are the capped
    concatenation of every field's contribution in property order.
    fields keeps the per-property breakdown for mapping overrides.
    """

    id: str
    title: str = Field(..., min_length=1)
    text: str = ""
    images: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    fields: dict[str, CanonicalField] = Field(default_factory=dict)


class DatabaseProperty(FrozenSchema):
    """One column of a source database, for diagnostic display."""

    id: str
    name: str
    type: str = "unknown"


class SourceSnapshot(FrozenSchema):
    """
    In-memory view of one source database.

    When error is set the fetch failed and items is empty.
    """

    database_id: str
    title: str = "Source Database"
    properties: list[DatabaseProperty] = Field(default_factory=list)
    items: list[Item] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
