"""
prodops_ingestion -- CSV import and export.

The pure core (``codec``, ``domain``, ``mapping``) works on in-memory text
and records.  ``adapters`` read and write files; ``services`` composes the
pieces into an import preview.
"""

from prodops_ingestion.codec import encode_csv, generate_csv, parse_csv
from prodops_ingestion.domain import (
    CsvExportOptions,
    CsvFieldMapping,
    CsvFieldType,
    CsvParseError,
    CsvParseResult,
    EntityField,
    ExportField,
    validate_csv_rows,
)
from prodops_ingestion.mapping import (
    apply_mappings,
    auto_map_headers,
    format_value,
    generate_template,
    parse_value,
)

__all__ = [
    "CsvExportOptions",
    "CsvFieldMapping",
    "CsvFieldType",
    "CsvParseError",
    "CsvParseResult",
    "EntityField",
    "ExportField",
    "apply_mappings",
    "auto_map_headers",
    "encode_csv",
    "format_value",
    "generate_csv",
    "generate_template",
    "parse_csv",
    "parse_value",
    "validate_csv_rows",
]
