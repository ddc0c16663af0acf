"""
Source adapter protocol and probe DTO.

Contract:
    SourceAdapter.read() turns a source file into a ``CsvParseResult``.
    SourceAdapter.probe() returns a quick snapshot: row count, columns, sample rows.

Architecture: prodops_ingestion/adapters. File I/O only; parsing is delegated
to the pure codec.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from prodops_ingestion.domain.types import CsvParseError, CsvParseResult


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for reading structured source files."""

    def read(self, source_path: Path) -> CsvParseResult:
        ...

    def probe(self, source_path: Path) -> "SourceProbe":
        ...


@dataclass(frozen=True)
class SourceProbe:
    """Result of probing a source file (row count, columns, first N rows)."""

    row_count: int
    columns: tuple[str, ...]
    sample_rows: tuple[dict[str, str], ...]  # First 5 rows; do not mutate
    errors: tuple[CsvParseError, ...] = ()
    encoding: str | None = None
    delimiter: str | None = None
