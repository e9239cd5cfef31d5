"""
Mapped-item resolver.

Projects a normalized Item through a Mapping into the MappedItem the
presentation layer renders. Mapped fields are placed ahead of the
item's own channels, so an override adds content without hiding what
the normalizer found.
"""

from typing import Optional, Sequence

from models.mapping import Mapping, MappedItem
from models.source import CanonicalField, Item
from services.pattern_resolver import SnapshotLike, snapshot_items

# MappedItem channel caps
MAPPED_IMAGE_CAP = 10
MAPPED_LINK_CAP = 8
MAPPED_COLOR_CAP = 10


def _mapped_field(item: Item, field_name: Optional[str]) -> Optional[CanonicalField]:
    if not field_name:
        return None
    return item.fields.get(field_name)


def _merge(*channels: Optional[Sequence[str]], cap: int) -> list[str]:
    # First occurrence wins, so a mapped field also present in the
    # item's own aggregate keeps its mapped position
    merged: list[str] = []
    for channel in channels:
        for value in channel or ():
            if value not in merged:
                merged.append(value)
    return merged[:cap]


def resolve_mapped_item(item: Item, mapping: Optional[Mapping] = None) -> MappedItem:
    """
    Apply a Mapping to one Item.

    Args:
        item: Normalized source row (not modified)
        mapping: Slot -> field name overrides; None means no overrides

    Returns:
        MappedItem with capped images, links and colors
    """
    mapping = mapping or Mapping()

    title_field = _mapped_field(item, mapping.title)
    text_field = _mapped_field(item, mapping.text)
    image_field = _mapped_field(item, mapping.image)
    gallery_field = _mapped_field(item, mapping.gallery)
    link_field = _mapped_field(item, mapping.link)
    color_field = _mapped_field(item, mapping.color)

    return MappedItem(
        title=(title_field.text if title_field and title_field.text else item.title),
        text=(text_field.text if text_field and text_field.text else item.text),
        images=_merge(
            gallery_field.images if gallery_field else None,
            image_field.images if image_field else None,
            item.images,
            cap=MAPPED_IMAGE_CAP,
        ),
        links=_merge(
            link_field.links if link_field else None,
            item.links,
            cap=MAPPED_LINK_CAP,
        ),
        colors=_merge(
            color_field.colors if color_field else None,
            item.colors,
            cap=MAPPED_COLOR_CAP,
        ),
    )


def resolve_mapped_items(
    snapshot: SnapshotLike,
    mapping: Optional[Mapping] = None,
    limit: Optional[int] = None
) -> list[MappedItem]:
    """
    Apply a Mapping to every item of a snapshot.

    Errored, empty or missing snapshots resolve to an empty list.
    """
    items = snapshot_items(snapshot)
    if limit is not None:
        items = items[:limit]
    return [resolve_mapped_item(item, mapping) for item in items]
