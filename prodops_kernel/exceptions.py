"""
Typed Exception Hierarchy for the prodops packages.

The calculation engines never raise for bad data: CSV anomalies come back
as ``CsvParseError`` records and the depreciation functions clamp and
zero-guard instead.  Exceptions are reserved for the boundaries around
them -- configuration files and file I/O.

Every exception carries a ``code`` class attribute (machine-readable,
API-safe) and stores its context as attributes rather than only in the
message.

    ProdOpsError (base)
    |
    +-- ConfigurationError
    |
    +-- CsvSourceError
    |   +-- CsvDecodeError
    |
    +-- CsvExportError

Category        | Code                  | When Raised
----------------|-----------------------|----------------------------------------
Configuration   | CONFIGURATION_ERROR   | Config file malformed or value invalid
CSV source      | CSV_SOURCE_ERROR      | Source file cannot be used
                | CSV_DECODE_FAILED     | Bytes are not valid in the encoding
CSV export      | CSV_EXPORT_FAILED     | Export target cannot be written
"""

from __future__ import annotations


class ProdOpsError(Exception):
    """
    Base exception for all prodops errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PRODOPS_ERROR"


class ConfigurationError(ProdOpsError):
    """Configuration file could not be turned into a valid configuration."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, message: str, key: str | None = None, source: str | None = None):
        self.key = key
        self.source = source
        super().__init__(message)


# CSV source exceptions


class CsvSourceError(ProdOpsError):
    """Base exception for CSV source problems."""

    code: str = "CSV_SOURCE_ERROR"

    def __init__(self, message: str, source_path: str | None = None):
        self.source_path = source_path
        super().__init__(message)


class CsvDecodeError(CsvSourceError):
    """CSV bytes could not be decoded with the configured encoding."""

    code: str = "CSV_DECODE_FAILED"

    def __init__(self, source_path: str, encoding: str, reason: str):
        self.encoding = encoding
        self.reason = reason
        super().__init__(
            f"Cannot decode {source_path} as {encoding}: {reason}",
            source_path=source_path,
        )


class CsvExportError(ProdOpsError):
    """CSV export could not be written."""

    code: str = "CSV_EXPORT_FAILED"

    def __init__(self, target: str, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot write CSV export to {target}: {reason}")
