"""
Configuration Loader (``prodops_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen dataclasses
of ``prodops_config.schema``.  Callers use ``get_active_config()``; the
functions here are the building blocks it is assembled from.

Invariants enforced
-------------------
* Unknown sections or keys are rejected, so a typo never silently falls
  back to a default.
* Every parsed object is a frozen dataclass from ``schema.py``.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``ConfigurationError`` (wrapping ``yaml.YAMLError``).
* Invalid values  -> ``ConfigurationError`` naming the offending key.
"""

from __future__ import annotations

import codecs
import hashlib
import json
from dataclasses import fields
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from prodops_kernel.exceptions import ConfigurationError
from prodops_config.schema import (
    SCHEDULE_PERIODS,
    CsvConfig,
    DepreciationConfig,
    ProdOpsConfig,
)


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        ConfigurationError: if the file is not valid YAML or not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}", source=str(path)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {path} must be a mapping", source=str(path))
    return data


def _check_keys(section: str, data: dict[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) in {section}: {', '.join(unknown)}",
            key=f"{section}.{unknown[0]}",
        )


def _field_names(cls: type) -> set[str]:
    return {f.name for f in fields(cls)}


def _positive_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(
            f"{section}.{key} must be a positive integer, got {value!r}",
            key=f"{section}.{key}",
        )
    return value


def _boolean(section: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(
            f"{section}.{key} must be true or false, got {value!r}",
            key=f"{section}.{key}",
        )
    return value


def parse_csv_config(data: dict[str, Any]) -> CsvConfig:
    """Parse the ``csv`` section."""
    _check_keys("csv", data, _field_names(CsvConfig))
    defaults = CsvConfig()

    delimiter = str(data.get("delimiter", defaults.delimiter))
    if len(delimiter) != 1 or delimiter in ('"', "\n", "\r"):
        raise ConfigurationError(
            f"csv.delimiter must be a single character other than a quote or newline, got {delimiter!r}",
            key="csv.delimiter",
        )

    encoding = str(data.get("encoding", defaults.encoding))
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigurationError(f"csv.encoding {encoding!r} is not a known codec", key="csv.encoding") from exc

    default_filename = str(data.get("default_filename", defaults.default_filename)).strip()
    if not default_filename:
        raise ConfigurationError("csv.default_filename must not be empty", key="csv.default_filename")

    return CsvConfig(
        delimiter=delimiter,
        encoding=encoding,
        include_headers=_boolean("csv", "include_headers", data.get("include_headers", defaults.include_headers)),
        write_bom=_boolean("csv", "write_bom", data.get("write_bom", defaults.write_bom)),
        default_filename=default_filename,
        max_import_rows=_positive_int("csv", "max_import_rows", data.get("max_import_rows", defaults.max_import_rows)),
        max_export_rows=_positive_int("csv", "max_export_rows", data.get("max_export_rows", defaults.max_export_rows)),
    )


def parse_depreciation_config(data: dict[str, Any]) -> DepreciationConfig:
    """Parse the ``depreciation`` section."""
    _check_keys("depreciation", data, _field_names(DepreciationConfig))
    defaults = DepreciationConfig()

    raw_multiplier = data.get("declining_balance_multiplier", defaults.declining_balance_multiplier)
    try:
        multiplier = Decimal(str(raw_multiplier))
    except InvalidOperation as exc:
        raise ConfigurationError(
            f"depreciation.declining_balance_multiplier must be a number, got {raw_multiplier!r}",
            key="depreciation.declining_balance_multiplier",
        ) from exc
    if not multiplier.is_finite() or multiplier <= 0:
        raise ConfigurationError(
            f"depreciation.declining_balance_multiplier must be positive, got {raw_multiplier!r}",
            key="depreciation.declining_balance_multiplier",
        )

    period = str(data.get("default_schedule_period", defaults.default_schedule_period)).strip().lower()
    if period not in SCHEDULE_PERIODS:
        raise ConfigurationError(
            f"depreciation.default_schedule_period must be one of {SCHEDULE_PERIODS}, got {period!r}",
            key="depreciation.default_schedule_period",
        )

    return DepreciationConfig(
        declining_balance_multiplier=multiplier,
        default_schedule_period=period,
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of the raw configuration mapping."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def parse_config(data: dict[str, Any], source: str | None = None) -> ProdOpsConfig:
    """
    Parse a whole configuration mapping.

    Missing sections fall back to the schema defaults.
    """
    _check_keys("config", data, {"csv", "depreciation"})
    sections = {}
    for name in ("csv", "depreciation"):
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigurationError(f"Section {name!r} must be a mapping", key=name, source=source)
        sections[name] = section

    return ProdOpsConfig(
        csv=parse_csv_config(sections["csv"]),
        depreciation=parse_depreciation_config(sections["depreciation"]),
        source=source,
        checksum=compute_checksum(data),
    )
