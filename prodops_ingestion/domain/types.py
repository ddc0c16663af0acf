"""
prodops_ingestion.domain.types -- Pure frozen dataclasses for CSV import/export.

ZERO I/O.  Everything the CSV engine returns is built from these shapes;
nothing here owns long-lived state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Sequence


# =============================================================================
# Parse results
# =============================================================================


@dataclass(frozen=True)
class CsvParseError:
    """
    A single parse or validation problem.

    ``row`` is the 1-based line number in the source (the header is line 1);
    file-level problems such as an empty file use row 0.
    """

    row: int
    message: str
    column: str | None = None


@dataclass(frozen=True)
class CsvParseResult:
    """Output of ``parse_csv``."""

    headers: tuple[str, ...] = ()
    rows: tuple[dict[str, str], ...] = ()  # every header present in every row
    errors: tuple[CsvParseError, ...] = ()
    total_rows: int = 0  # data rows, header excluded

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)


# =============================================================================
# Field typing and mapping
# =============================================================================


class CsvFieldType(str, Enum):
    """How a CSV cell is coerced into a Python value for an entity field."""

    STRING = "string"
    NUMBER = "number"
    CURRENCY = "currency"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    ENUM = "enum"
    TAGS = "tags"
    UUID = "uuid"
    JSON = "json"


@dataclass(frozen=True)
class EntityField:
    """A destination field that CSV columns can be mapped onto."""

    key: str
    label: str
    field_type: CsvFieldType = CsvFieldType.STRING
    required: bool = False
    example: str | None = None
    enum_values: tuple[str, ...] = ()  # allowed values for ENUM fields; empty allows any
    max_length: int | None = None


@dataclass(frozen=True)
class CsvFieldMapping:
    """
    Proposed association from a CSV column to an entity field.

    ``entity_field`` is ``""`` when nothing matched.  ``transform`` coerces
    the raw cell text; auto-mapping never fills it in.
    """

    csv_header: str
    entity_field: str = ""
    transform: Callable[[str], Any] | None = field(default=None, compare=False)

    @property
    def is_mapped(self) -> bool:
        return bool(self.entity_field)


# =============================================================================
# Export
# =============================================================================


@dataclass(frozen=True)
class ExportField:
    """One output column: record ``key`` rendered under header ``label``."""

    key: str
    label: str


@dataclass(frozen=True)
class CsvExportOptions:
    """Input to ``generate_csv``."""

    fields: tuple[ExportField, ...]
    data: Sequence[Mapping[str, Any]] = ()
    filename: str | None = None
    delimiter: str = ","
    include_headers: bool = True
