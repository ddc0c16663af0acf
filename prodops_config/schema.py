"""
Configuration schema.

Frozen dataclasses the YAML loader produces.  Defaults mirror the packaged
``defaults.yaml`` so a partial file only has to name what it overrides.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

SCHEDULE_PERIODS = ("monthly", "annual")


@dataclass(frozen=True)
class CsvConfig:
    """CSV import/export defaults."""

    delimiter: str = ","
    encoding: str = "utf-8"
    include_headers: bool = True
    write_bom: bool = True  # spreadsheet tools need the BOM to detect UTF-8
    default_filename: str = "export.csv"
    max_import_rows: int = 10000
    max_export_rows: int = 50000


@dataclass(frozen=True)
class DepreciationConfig:
    """Depreciation engine defaults."""

    declining_balance_multiplier: Decimal = Decimal("2")
    default_schedule_period: str = "annual"


@dataclass(frozen=True)
class ProdOpsConfig:
    """Root configuration object returned by ``get_active_config()``."""

    csv: CsvConfig = field(default_factory=CsvConfig)
    depreciation: DepreciationConfig = field(default_factory=DepreciationConfig)
    source: str | None = None
    checksum: str = ""
