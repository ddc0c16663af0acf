"""CSV domain types and row validation (pure, no I/O)."""

from prodops_ingestion.domain.types import (
    CsvExportOptions,
    CsvFieldMapping,
    CsvFieldType,
    CsvParseError,
    CsvParseResult,
    EntityField,
    ExportField,
)
from prodops_ingestion.domain.validators import validate_csv_rows, validate_field_types

__all__ = [
    "CsvExportOptions",
    "CsvFieldMapping",
    "CsvFieldType",
    "CsvParseError",
    "CsvParseResult",
    "EntityField",
    "ExportField",
    "validate_csv_rows",
    "validate_field_types",
]
