"""
Business logic services.

The inference core (property reader, record normalizer, mapping parser,
pattern resolver, mapped-item resolver) is pure; the catalog service
wires it to Notion.
"""

from services.property_reader import read_property, read_text
from services.record_normalizer import normalize_record, normalize_source_database
from services.mapping_parser import parse_field_mapping
from services.pattern_resolver import resolve_pattern
from services.mapped_item_resolver import resolve_mapped_item, resolve_mapped_items
from services.catalog_service import CatalogService, get_catalog_service

__all__ = [
    "read_property",
    "read_text",
    "normalize_record",
    "normalize_source_database",
    "parse_field_mapping",
    "resolve_pattern",
    "resolve_mapped_item",
    "resolve_mapped_items",
    "CatalogService",
    "get_catalog_service",
]
