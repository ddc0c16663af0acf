"""
Import service: parse -> auto-map -> apply mapping -> validate.

Validation covers required values and per-type cell checks (email and URL
format, numbers, enum membership, maximum length) on the raw cell text.

Produces an ``ImportPreview`` the caller can show before committing rows
anywhere.  Nothing is persisted; every problem is reported as a
``CsvParseError`` rather than raised.  Uses structured logging
(LogContext, get_logger("ingestion.*")).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence
from uuid import uuid4

from prodops_config.schema import CsvConfig
from prodops_kernel.logging_config import LogContext, get_logger
from prodops_ingestion.adapters.csv_adapter import CsvSourceAdapter
from prodops_ingestion.codec.parser import parse_csv
from prodops_ingestion.domain.types import (
    CsvFieldMapping,
    CsvParseError,
    CsvParseResult,
    EntityField,
)
from prodops_ingestion.domain.validators import validate_csv_rows, validate_field_types
from prodops_ingestion.mapping.auto_map import auto_map_headers
from prodops_ingestion.mapping.engine import apply_mappings, with_type_transforms

logger = get_logger("ingestion.import_service")


@dataclass(frozen=True)
class ImportPreview:
    """Everything a caller needs to decide whether to proceed with an import."""

    batch_id: str
    parse_result: CsvParseResult
    mappings: tuple[CsvFieldMapping, ...]
    mapped_rows: tuple[dict[str, Any], ...]
    validation_errors: tuple[CsvParseError, ...]
    unmapped_required: tuple[str, ...] = ()  # required fields no column feeds

    @property
    def errors(self) -> tuple[CsvParseError, ...]:
        return self.parse_result.errors + self.validation_errors

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def unmapped_headers(self) -> tuple[str, ...]:
        return tuple(m.csv_header for m in self.mappings if not m.is_mapped)


class CsvImportService:
    """Builds import previews for a set of entity fields."""

    def __init__(self, config: CsvConfig | None = None, adapter: CsvSourceAdapter | None = None):
        self._config = config or CsvConfig()
        self._adapter = adapter or CsvSourceAdapter(self._config)

    def preview_file(
        self,
        source_path: Path,
        entity_fields: Sequence[EntityField],
        mappings: Sequence[CsvFieldMapping] | None = None,
    ) -> ImportPreview:
        """Read ``source_path`` and preview it (see ``preview``)."""
        return self._build(self._adapter.read(source_path), entity_fields, mappings)

    def preview(
        self,
        text: str,
        entity_fields: Sequence[EntityField],
        mappings: Sequence[CsvFieldMapping] | None = None,
    ) -> ImportPreview:
        """
        Preview raw CSV text.

        When ``mappings`` is None the headers are auto-mapped.  Mapped
        columns without a transform get one from the entity field's type.
        """
        return self._build(
            parse_csv(text, delimiter=self._config.delimiter),
            entity_fields,
            mappings,
        )

    def _build(
        self,
        parsed: CsvParseResult,
        entity_fields: Sequence[EntityField],
        mappings: Sequence[CsvFieldMapping] | None,
    ) -> ImportPreview:
        batch_id = str(uuid4())
        with LogContext.bind(batch_id=batch_id):
            parsed = self._enforce_row_limit(parsed)
            proposed = list(mappings) if mappings is not None else auto_map_headers(parsed.headers, entity_fields)
            typed = with_type_transforms(proposed, entity_fields)
            raw_rows = apply_mappings(
                parsed.rows,
                [CsvFieldMapping(csv_header=m.csv_header, entity_field=m.entity_field) for m in proposed],
            )
            mapped_rows = apply_mappings(parsed.rows, typed)

            mapped_targets = {m.entity_field for m in typed if m.is_mapped}
            required = [f.key for f in entity_fields if f.required]
            # Required fields with no mapped column are blank on every row.
            for row in mapped_rows:
                for key in required:
                    if key not in mapped_targets:
                        row[key] = None
            # A cell whose text is the wrong type is reported once, as a type error.
            type_errors = validate_field_types(raw_rows, entity_fields)
            flagged = {(e.row, e.column) for e in type_errors}
            presence_errors = [
                e for e in validate_csv_rows(mapped_rows, required)
                if (e.row, e.column) not in flagged
            ]
            validation_errors = sorted(presence_errors + type_errors, key=lambda error: error.row)

            preview = ImportPreview(
                batch_id=batch_id,
                parse_result=parsed,
                mappings=tuple(typed),
                mapped_rows=tuple(mapped_rows),
                validation_errors=tuple(validation_errors),
                unmapped_required=tuple(k for k in required if k not in mapped_targets),
            )
            logger.info(
                "import_preview_built",
                extra={
                    "total_rows": parsed.total_rows,
                    "parse_errors": len(parsed.errors),
                    "validation_errors": len(validation_errors),
                    "unmapped_headers": list(preview.unmapped_headers),
                },
            )
            return preview

    def _enforce_row_limit(self, parsed: CsvParseResult) -> CsvParseResult:
        limit = self._config.max_import_rows
        if parsed.total_rows <= limit:
            return parsed
        logger.warning(
            "import_row_limit_exceeded",
            extra={"total_rows": parsed.total_rows, "max_import_rows": limit},
        )
        return CsvParseResult(
            headers=parsed.headers,
            rows=parsed.rows[:limit],
            errors=parsed.errors + (CsvParseError(
                row=0,
                message=f"File has {parsed.total_rows} rows; only the first {limit} can be imported",
            ),),
            total_rows=limit,
        )
