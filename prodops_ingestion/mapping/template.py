"""Import templates: a header row of labels plus an optional example row."""

from __future__ import annotations

from typing import Sequence

from prodops_ingestion.codec.writer import generate_csv
from prodops_ingestion.domain.types import CsvExportOptions, CsvFieldType, EntityField, ExportField

EXAMPLE_VALUES: dict[CsvFieldType, str] = {
    CsvFieldType.STRING: "Example text",
    CsvFieldType.NUMBER: "42",
    CsvFieldType.CURRENCY: "1500.00",
    CsvFieldType.BOOLEAN: "Yes",
    CsvFieldType.DATE: "2026-01-15",
    CsvFieldType.DATETIME: "2026-01-15 09:00",
    CsvFieldType.EMAIL: "user@example.com",
    CsvFieldType.URL: "https://example.com",
    CsvFieldType.PHONE: "+1 (555) 123-4567",
    CsvFieldType.ENUM: "",
    CsvFieldType.TAGS: "tag1, tag2",
    CsvFieldType.UUID: "",
    CsvFieldType.JSON: "{}",
}


def example_for(field: EntityField) -> str:
    if field.example is not None:
        return field.example
    if field.field_type == CsvFieldType.ENUM and field.enum_values:
        return field.enum_values[0]
    return EXAMPLE_VALUES.get(field.field_type, "")


def generate_template(
    fields: Sequence[EntityField],
    include_example: bool = False,
    delimiter: str = ",",
) -> str:
    """CSV text a user can fill in and re-import; column order follows ``fields``."""
    data = [{f.key: example_for(f) for f in fields}] if include_example else []
    return generate_csv(CsvExportOptions(
        fields=tuple(ExportField(key=f.key, label=f.label) for f in fields),
        data=data,
        delimiter=delimiter,
    ))
