"""
CSV file adapters.

``CsvSourceAdapter`` reads a CSV file into a ``CsvParseResult``; decoding
uses ``utf-8-sig`` when the configured encoding is UTF-8 so a BOM is
dropped.  ``CsvExportWriter`` is the file-system counterpart of a browser
download: it writes ``encode_csv`` output (BOM-prefixed when configured)
to disk.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from prodops_config.schema import CsvConfig
from prodops_kernel.exceptions import CsvDecodeError, CsvExportError
from prodops_kernel.logging_config import get_logger
from prodops_ingestion.adapters.base import SourceProbe
from prodops_ingestion.codec.parser import parse_csv
from prodops_ingestion.codec.writer import encode_csv
from prodops_ingestion.domain.types import CsvExportOptions, CsvParseResult

logger = get_logger("ingestion.adapters.csv")

SAMPLE_SIZE = 5


def _get_encoding(encoding: str) -> str:
    if encoding.lower().replace("_", "-") in ("utf-8", "utf8"):
        return "utf-8-sig"  # Strip BOM if present
    return encoding


class CsvSourceAdapter:
    """Read CSV files from disk into parse results."""

    def __init__(self, config: CsvConfig | None = None):
        self._config = config or CsvConfig()

    def read_text(self, source_path: Path) -> str:
        encoding = _get_encoding(self._config.encoding)
        try:
            # newline="" keeps \r\n inside quoted fields for the parser
            with Path(source_path).open("r", encoding=encoding, newline="") as f:
                return f.read()
        except UnicodeDecodeError as exc:
            raise CsvDecodeError(str(source_path), encoding, exc.reason) from exc

    def read(self, source_path: Path) -> CsvParseResult:
        result = parse_csv(self.read_text(source_path), delimiter=self._config.delimiter)
        logger.info(
            "csv_source_read",
            extra={
                "source_path": str(source_path),
                "total_rows": result.total_rows,
                "error_count": len(result.errors),
            },
        )
        return result

    def probe(self, source_path: Path) -> SourceProbe:
        result = self.read(source_path)
        return SourceProbe(
            row_count=result.total_rows,
            columns=result.headers,
            sample_rows=tuple(dict(r) for r in result.rows[:SAMPLE_SIZE]),
            errors=result.errors,
            encoding=_get_encoding(self._config.encoding),
            delimiter=self._config.delimiter,
        )


class CsvExportWriter:
    """Write CSV exports to a directory."""

    def __init__(self, config: CsvConfig | None = None):
        self._config = config or CsvConfig()

    def filename_for(self, options: CsvExportOptions) -> str:
        name = (options.filename or self._config.default_filename).strip() or self._config.default_filename
        if not name.lower().endswith(".csv"):
            name = f"{name}.csv"
        return name

    def write(self, options: CsvExportOptions, directory: Path) -> Path:
        """
        Write the export under ``directory`` and return the file path.

        The header line is written only when both the options and the
        configuration ask for it.
        """
        if len(options.data) > self._config.max_export_rows:
            raise CsvExportError(
                str(directory),
                f"{len(options.data)} rows exceeds the export limit of {self._config.max_export_rows}",
            )
        target = Path(directory) / self.filename_for(options)
        if not self._config.include_headers:
            options = replace(options, include_headers=False)
        payload = encode_csv(options, bom=self._config.write_bom, encoding=self._config.encoding)
        try:
            target.write_bytes(payload)
        except OSError as exc:
            raise CsvExportError(str(target), exc.strerror or str(exc)) from exc
        logger.info(
            "csv_export_written",
            extra={"target": str(target), "row_count": len(options.data), "bytes": len(payload)},
        )
        return target
