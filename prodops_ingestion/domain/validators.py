"""
Row validators for CSV imports.

Pure functions: take mapped rows, return ``CsvParseError`` records.
Callers decide whether errors block the import.

``validate_csv_rows`` checks presence; ``validate_field_types`` checks the
raw cell text of each mapped column against its entity field (format,
numeric coercion, allowed enum values, maximum length).  Blank cells are
left to the presence check.
"""

from __future__ import annotations

import json
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Sequence
from urllib.parse import urlsplit

from prodops_ingestion.domain.types import CsvFieldType, CsvParseError, EntityField

# Row 0 of the data is line 2 of the file (1-based, after the header).
HEADER_OFFSET = 2

# Currency symbols, thousands separators and spacing around a number.
CURRENCY_NOISE = re.compile(r"[$€£¥,\s]")
_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple)):
        return not value
    return False


def validate_csv_rows(
    rows: Sequence[Mapping[str, Any]],
    required_fields: Iterable[str],
) -> list[CsvParseError]:
    """
    Flag required fields that are absent or blank.

    Errors are ordered row by row, then by ``required_fields`` order within
    a row.
    """
    required = tuple(required_fields)
    errors: list[CsvParseError] = []
    for index, row in enumerate(rows):
        for field_name in required:
            if _is_blank(row.get(field_name)):
                errors.append(CsvParseError(
                    row=index + HEADER_OFFSET,
                    column=field_name,
                    message=f"{field_name} is required",
                ))
    return errors


def _is_number(text: str) -> bool:
    cleaned = CURRENCY_NOISE.sub("", text)
    try:
        return Decimal(cleaned).is_finite()
    except InvalidOperation:
        return False


def _is_url(text: str) -> bool:
    parts = urlsplit(text)
    return bool(parts.scheme and parts.netloc) and not any(c.isspace() for c in text)


def _is_json(text: str) -> bool:
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


def _type_problem(entity_field: EntityField, text: str) -> str | None:
    """Message describing why ``text`` does not fit ``entity_field``, or None."""
    name = entity_field.key
    field_type = entity_field.field_type

    if field_type == CsvFieldType.EMAIL and not _EMAIL.match(text):
        return f"{name} must be a valid email address"
    if field_type == CsvFieldType.URL and not _is_url(text):
        return f"{name} must be a valid URL"
    if field_type in (CsvFieldType.NUMBER, CsvFieldType.CURRENCY) and not _is_number(text):
        return f"{name} must be a number"
    if field_type == CsvFieldType.JSON and not _is_json(text):
        return f"{name} must be valid JSON"
    if field_type == CsvFieldType.ENUM and entity_field.enum_values:
        allowed = {value.lower() for value in entity_field.enum_values}
        if text.lower() not in allowed:
            return f"{name} must be one of: {', '.join(entity_field.enum_values)}"
    if entity_field.max_length is not None and len(text) > entity_field.max_length:
        return f"{name} must be at most {entity_field.max_length} characters"
    return None


def validate_field_types(
    rows: Sequence[Mapping[str, Any]],
    entity_fields: Sequence[EntityField],
) -> list[CsvParseError]:
    """
    Flag cell text that does not fit its entity field's type.

    ``rows`` are keyed by entity field and hold the raw cell text (before
    any transform).  Fields missing from a row and blank cells are skipped.
    At most one error per cell; ordering is row by row, then by
    ``entity_fields`` order.
    """
    errors: list[CsvParseError] = []
    for index, row in enumerate(rows):
        for entity_field in entity_fields:
            value = row.get(entity_field.key)
            if _is_blank(value):
                continue
            problem = _type_problem(entity_field, str(value).strip())
            if problem:
                errors.append(CsvParseError(
                    row=index + HEADER_OFFSET,
                    column=entity_field.key,
                    message=problem,
                ))
    return errors
