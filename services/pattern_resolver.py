"""
Pattern resolver.

Chooses how a Project's items are presented. A recognized manual hint
always wins; otherwise the snapshot's content decides, checked in a
fixed order: multi-image gallery, colors, links, generic fallback.
"""

from typing import Optional, Sequence, Union
import structlog

from models.pattern import Pattern, PATTERN_ALIASES
from models.source import Item, SourceSnapshot

logger = structlog.get_logger(__name__)

SnapshotLike = Union[SourceSnapshot, Sequence[Item], None]


def pattern_from_hint(hint: Optional[str]) -> Optional[Pattern]:
    """Pattern named by a UiPattern hint, or None if unrecognized."""
    if not isinstance(hint, str):
        return None
    return PATTERN_ALIASES.get(hint.strip().lower())


def snapshot_items(snapshot: SnapshotLike) -> list[Item]:
    """Items of a snapshot; an errored snapshot has none."""
    if snapshot is None:
        return []
    if isinstance(snapshot, SourceSnapshot):
        return [] if snapshot.error else list(snapshot.items)
    return list(snapshot)


def has_gallery(items: Sequence[Item]) -> bool:
    return any(len(item.images) > 1 for item in items)


def has_colors(items: Sequence[Item]) -> bool:
    return any(item.colors for item in items)


def has_links(items: Sequence[Item]) -> bool:
    return any(item.links for item in items)


# Inference order; first matching predicate wins
INFERENCE_CHAIN = (
    (has_gallery, Pattern.GALLERY_STORY),
    (has_colors, Pattern.COLOR_SWATCH),
    (has_links, Pattern.LINK_CARDS),
)


def infer_pattern(items: Sequence[Item]) -> Pattern:
    """Pick a pattern from content alone."""
    for predicate, pattern in INFERENCE_CHAIN:
        if predicate(items):
            return pattern
    return Pattern.GENERIC_CARDS


def resolve_pattern(manual_hint: Optional[str], snapshot: SnapshotLike = None) -> Pattern:
    """
    Resolve the presentation pattern for a Project.

    Args:
        manual_hint: UiPattern value (may be empty or unrecognized)
        snapshot: Normalized source database, a list of Items, or None
            while the source has not been fetched

    Returns:
        The chosen Pattern
    """
    manual = pattern_from_hint(manual_hint)
    if manual is not None:
        return manual

    if snapshot is None:
        return Pattern.GENERIC_CARDS

    pattern = infer_pattern(snapshot_items(snapshot))
    logger.debug("pattern_inferred", pattern=pattern.value)
    return pattern
