"""Column mapping: header auto-mapping, typed coercion, import templates."""

from prodops_ingestion.mapping.auto_map import auto_map_headers, normalize_header
from prodops_ingestion.mapping.engine import (
    apply_mappings,
    format_value,
    parse_value,
    transform_for,
    with_type_transforms,
)
from prodops_ingestion.mapping.template import generate_template

__all__ = [
    "apply_mappings",
    "auto_map_headers",
    "format_value",
    "generate_template",
    "normalize_header",
    "parse_value",
    "transform_for",
    "with_type_transforms",
]
