"""Text-level CSV codec: parse raw text, generate delimited text."""

from prodops_ingestion.codec.parser import parse_csv, parse_line, split_lines
from prodops_ingestion.codec.writer import encode_csv, escape_field, generate_csv, stringify

__all__ = [
    "encode_csv",
    "escape_field",
    "generate_csv",
    "parse_csv",
    "parse_line",
    "split_lines",
    "stringify",
]
