"""
CSV parser: raw text -> ``CsvParseResult``.

Handles RFC-4180 style quoting by hand rather than through ``csv.reader``
because the result must report column-count mismatches per line and keep
the best-effort row instead of failing, and header/value whitespace is
trimmed.

Rules:
    * A leading BOM is dropped.
    * ``\\n``, ``\\r`` and ``\\r\\n`` end a line only outside quotes.
    * ``""`` inside quotes is a literal quote and does not close the field.
    * Blank lines (after trimming) are skipped but still count toward line
      numbers.

Never raises; problems are reported in ``CsvParseResult.errors``.
"""

from __future__ import annotations

from prodops_kernel.logging_config import get_logger
from prodops_ingestion.domain.types import CsvParseError, CsvParseResult

logger = get_logger("ingestion.codec.parser")

BOM = "\ufeff"
QUOTE = '"'


def split_lines(text: str) -> list[str]:
    """Split text into logical lines, keeping quoted newlines inside their line."""
    lines: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and text[i + 1] == QUOTE:
                current.append(QUOTE + QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
            current.append(ch)
        elif ch in ("\n", "\r") and not in_quotes:
            lines.append("".join(current))
            current = []
            if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
        else:
            current.append(ch)
        i += 1
    lines.append("".join(current))
    return lines


def parse_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one logical line into unquoted field values (not trimmed)."""
    values: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            values.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    values.append("".join(current))
    return values


def parse_csv(raw: str | None, delimiter: str = ",") -> CsvParseResult:
    """
    Parse delimited text whose first line is the header row.

    Every returned row has an entry for every header.  When a line has a
    different number of fields than the header, an error is recorded with
    the line's 1-based number and the row is kept anyway.
    """
    text = raw or ""
    if text.startswith(BOM):
        text = text[len(BOM):]

    if not text.strip():
        return CsvParseResult(errors=(CsvParseError(row=0, message="Empty file"),))

    lines = split_lines(text)
    headers = tuple(h.strip() for h in parse_line(lines[0], delimiter))
    rows: list[dict[str, str]] = []
    errors: list[CsvParseError] = []

    for index in range(1, len(lines)):
        line = lines[index]
        if not line.strip():
            continue
        values = parse_line(line, delimiter)
        if len(values) != len(headers):
            errors.append(CsvParseError(
                row=index + 1,
                message=f"Expected {len(headers)} columns, got {len(values)}",
            ))
        row: dict[str, str] = {}
        for position, header in enumerate(headers):
            row[header] = values[position].strip() if position < len(values) else ""
        rows.append(row)

    logger.debug(
        "csv_parsed",
        extra={"columns": len(headers), "total_rows": len(rows), "error_count": len(errors)},
    )
    return CsvParseResult(
        headers=headers,
        rows=tuple(rows),
        errors=tuple(errors),
        total_rows=len(rows),
    )
