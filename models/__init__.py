"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    FrozenSchema,
)
from models.source import (
    CanonicalField,
    Item,
    DatabaseProperty,
    SourceSnapshot,
)
from models.mapping import (
    MAPPING_SLOTS,
    Mapping,
    MappedItem,
)
from models.pattern import (
    Pattern,
    PATTERN_ALIASES,
    PATTERN_REGISTRY,
    pattern_view,
)
from models.catalog import (
    PUBLISHED_STATUS,
    Course,
    Project,
    ProjectView,
    CourseDetail,
    CourseLinkResponse,
    PreviewRequest,
    PreviewResponse,
)

__all__ = [
    # Base
    "BaseSchema",
    "FrozenSchema",

    # Source databases
    "CanonicalField",
    "Item",
    "DatabaseProperty",
    "SourceSnapshot",

    # Mapping
    "MAPPING_SLOTS",
    "Mapping",
    "MappedItem",

    # Pattern
    "Pattern",
    "PATTERN_ALIASES",
    "PATTERN_REGISTRY",
    "pattern_view",

    # Catalog
    "PUBLISHED_STATUS",
    "Course",
    "Project",
    "ProjectView",
    "CourseDetail",
    "CourseLinkResponse",
    "PreviewRequest",
    "PreviewResponse",
]
