"""
CSV writer: ``CsvExportOptions`` -> delimited text.

Pure and deterministic.  Lines are joined with ``\\n`` and there is no
trailing newline.  A field is quoted only when it contains the delimiter,
a double quote, or a line break; internal quotes are doubled.
"""

from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Any

from prodops_ingestion.codec.parser import BOM, QUOTE
from prodops_ingestion.domain.types import CsvExportOptions

_TERMINATOR = "\r\n"


def stringify(value: Any) -> str:
    """Render a record value as cell text (``None`` -> empty)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def escape_field(text: str, delimiter: str = ",") -> str:
    """
    Quote ``text`` if it would otherwise break the line structure.

    Quoting is ``csv.QUOTE_MINIMAL``; both CR and LF are in the writer's
    line terminator so either one forces quotes.  Each field is escaped on
    its own, so an empty cell stays empty even in a one-column row.
    """
    if not text:
        return text
    buffer = io.StringIO()
    writer = csv.writer(
        buffer,
        delimiter=delimiter,
        quotechar=QUOTE,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator=_TERMINATOR,
    )
    writer.writerow([text])
    return buffer.getvalue()[: -len(_TERMINATOR)]


def generate_csv(options: CsvExportOptions) -> str:
    """Render the header line (optional) plus one line per record."""
    delimiter = options.delimiter
    lines: list[str] = []
    if options.include_headers:
        lines.append(delimiter.join(escape_field(f.label, delimiter) for f in options.fields))
    for record in options.data:
        lines.append(delimiter.join(
            escape_field(stringify(record.get(f.key)), delimiter) for f in options.fields
        ))
    return "\n".join(lines)


def encode_csv(options: CsvExportOptions, bom: bool = True, encoding: str = "utf-8") -> bytes:
    """``generate_csv`` as bytes, BOM-prefixed so spreadsheet tools detect UTF-8."""
    text = generate_csv(options)
    if bom:
        text = BOM + text
    return text.encode(encoding)
