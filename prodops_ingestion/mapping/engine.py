"""
Mapping engine: CSV cell text <-> typed values, and column renaming.

Pure transformation, ZERO I/O.  ``parse_value`` turns cell text into the
value an entity field expects; ``format_value`` is its export-side
counterpart.  Neither raises: text that cannot be coerced comes back as
``None`` (numbers) or unchanged (dates, JSON).
"""

from __future__ import annotations

import json
import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from functools import partial
from typing import Any, Callable, Iterable, Mapping, Sequence

from prodops_ingestion.domain.types import CsvFieldMapping, CsvFieldType, EntityField
from prodops_ingestion.domain.validators import CURRENCY_NOISE

_PHONE_NOISE = re.compile(r"[^\d+\-() ]")
_TAG_SEPARATORS = re.compile(r"[,;|]")

TRUTHY = frozenset({"yes", "true", "1", "y", "on"})

_DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%m/%d/%Y", "%d/%m/%Y")
_DATETIME_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S", "%m/%d/%Y %H:%M")


# -----------------------------------------------------------------------------
# Date helpers
# -----------------------------------------------------------------------------


def _parse_datetime(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS + _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    return _parse_datetime(str(value).strip())


# -----------------------------------------------------------------------------
# Import side: text -> value
# -----------------------------------------------------------------------------


def parse_value(field_type: CsvFieldType, raw: str | None) -> Any:
    """Coerce one CSV cell to the Python value for ``field_type``."""
    text = (raw or "").strip()

    if field_type in (CsvFieldType.NUMBER, CsvFieldType.CURRENCY):
        cleaned = CURRENCY_NOISE.sub("", text)
        if not cleaned:
            return None
        try:
            number = Decimal(cleaned)
        except InvalidOperation:
            return None
        return number if number.is_finite() else None

    if field_type == CsvFieldType.BOOLEAN:
        return text.lower() in TRUTHY

    if field_type == CsvFieldType.DATE:
        if not text:
            return None
        parsed = _parse_datetime(text)
        return parsed.date().isoformat() if parsed else text

    if field_type == CsvFieldType.DATETIME:
        if not text:
            return None
        parsed = _parse_datetime(text)
        return parsed.isoformat() if parsed else text

    if field_type in (CsvFieldType.EMAIL, CsvFieldType.ENUM):
        return text.lower() or None

    if field_type == CsvFieldType.PHONE:
        return _PHONE_NOISE.sub("", text).strip() or None

    if field_type == CsvFieldType.TAGS:
        return [t.strip() for t in _TAG_SEPARATORS.split(text) if t.strip()]

    if field_type == CsvFieldType.JSON:
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text

    return text or None


def transform_for(field_type: CsvFieldType) -> Callable[[str], Any]:
    """A ``CsvFieldMapping.transform`` that applies ``parse_value`` for the type."""
    return partial(parse_value, field_type)


# -----------------------------------------------------------------------------
# Export side: value -> text
# -----------------------------------------------------------------------------


def format_value(field_type: CsvFieldType, value: Any) -> str:
    """Render a typed value as CSV cell text."""
    if field_type == CsvFieldType.BOOLEAN:
        return "Yes" if value else "No"

    if field_type == CsvFieldType.DATE:
        if not value:
            return ""
        parsed = _to_datetime(value)
        return parsed.date().isoformat() if parsed else str(value)

    if field_type == CsvFieldType.DATETIME:
        if not value:
            return ""
        parsed = _to_datetime(value)
        return parsed.strftime("%Y-%m-%d %H:%M") if parsed else str(value)

    if field_type == CsvFieldType.TAGS:
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return "" if value is None else str(value)

    if field_type == CsvFieldType.JSON and not isinstance(value, str) and value is not None:
        return json.dumps(value, default=str)

    return "" if value is None else str(value)


# -----------------------------------------------------------------------------
# Apply mappings (pure)
# -----------------------------------------------------------------------------


def with_type_transforms(
    mappings: Iterable[CsvFieldMapping],
    entity_fields: Sequence[EntityField],
) -> list[CsvFieldMapping]:
    """Fill each mapped column's ``transform`` from its entity field type."""
    by_key = {f.key: f for f in entity_fields}
    result: list[CsvFieldMapping] = []
    for m in mappings:
        target = by_key.get(m.entity_field)
        if target is None or m.transform is not None:
            result.append(m)
            continue
        result.append(CsvFieldMapping(
            csv_header=m.csv_header,
            entity_field=m.entity_field,
            transform=transform_for(target.field_type),
        ))
    return result


def apply_mappings(
    rows: Iterable[Mapping[str, str]],
    mappings: Sequence[CsvFieldMapping],
) -> list[dict[str, Any]]:
    """
    Re-key each row from CSV headers to entity fields.

    Unmapped columns are dropped; a missing cell becomes ``""`` before the
    mapping's transform (if any) is applied.
    """
    active = [m for m in mappings if m.is_mapped]
    mapped_rows: list[dict[str, Any]] = []
    for row in rows:
        mapped: dict[str, Any] = {}
        for m in active:
            raw = row.get(m.csv_header) or ""
            mapped[m.entity_field] = m.transform(raw) if m.transform else raw
        mapped_rows.append(mapped)
    return mapped_rows
