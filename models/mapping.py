"""
Field mapping and mapped item schemas.
"""

from typing import Optional
from pydantic import ConfigDict, Field

from models.base import FrozenSchema


# Canonical slots a source field can be redirected onto
MAPPING_SLOTS = ("title", "text", "image", "gallery", "link", "color")


class Mapping(FrozenSchema):
    """
    Caller-declared slot -> source field name redirection.

    Every slot is optional; an empty Mapping means "use the item's own
    channels". Unknown keys are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    text: Optional[str] = None
    image: Optional[str] = None
    gallery: Optional[str] = None
    link: Optional[str] = None
    color: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, slot) is None for slot in MAPPING_SLOTS)

    def as_dict(self) -> dict[str, str]:
        """Only the declared slots."""
        return self.model_dump(exclude_none=True)


class MappedItem(FrozenSchema):
    """Display-ready item consumed by the presentation layer."""

    title: str
    text: str = ""
    images: list[str] = Field(default_factory=list)
    links: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
