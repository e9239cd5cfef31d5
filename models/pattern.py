"""
Presentation patterns.

The renderer picks a view per Project from these four archetypes.
"""

from enum import Enum


class Pattern(str, Enum):
    """Presentation archetype chosen once per Project."""
    GALLERY_STORY = "gallery-story"
    COLOR_SWATCH = "color-swatch"
    LINK_CARDS = "link-cards"
    GENERIC_CARDS = "generic-cards"


# Manual UiPattern hints accepted per pattern (lowercase)
PATTERN_ALIASES: dict[str, Pattern] = {
    "gallery-story": Pattern.GALLERY_STORY,
    "gallery": Pattern.GALLERY_STORY,
    "color-swatch": Pattern.COLOR_SWATCH,
    "swatch": Pattern.COLOR_SWATCH,
    "link-cards": Pattern.LINK_CARDS,
    "links": Pattern.LINK_CARDS,
    "generic-cards": Pattern.GENERIC_CARDS,
    "generic": Pattern.GENERIC_CARDS,
}


# View metadata the renderer dispatches on
PATTERN_REGISTRY: dict[Pattern, dict] = {
    Pattern.GALLERY_STORY: {
        "class_name": "card--gallery-story",
        "component": "GalleryStoryCard",
    },
    Pattern.COLOR_SWATCH: {
        "class_name": "card--color-swatch",
        "component": "ColorSwatchCard",
    },
    Pattern.LINK_CARDS: {
        "class_name": "card--link-cards",
        "component": "LinkCardsCard",
    },
    Pattern.GENERIC_CARDS: {
        "class_name": "card--generic-cards",
        "component": "GenericCard",
    },
}


def pattern_view(pattern: Pattern) -> dict:
    """class_name and component for a pattern."""
    return dict(PATTERN_REGISTRY[pattern])
