"""
prodops_config -- single public entrypoint for runtime configuration.

Responsibility:
    ``get_active_config()`` is the only way services obtain configuration.
    It loads a YAML file (the packaged ``defaults.yaml`` when no path is
    given) and returns a frozen ``ProdOpsConfig``.

Architecture position:
    Sits above ``prodops_kernel`` and below the ingestion and asset
    services.  The pure engine functions never import it; services pass
    configured values into them.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``ConfigurationError`` -- malformed YAML or invalid values.
"""

from __future__ import annotations

from pathlib import Path

from prodops_kernel.logging_config import get_logger
from prodops_config.loader import load_yaml_file, parse_config
from prodops_config.schema import CsvConfig, DepreciationConfig, ProdOpsConfig

__all__ = [
    "CsvConfig",
    "DepreciationConfig",
    "ProdOpsConfig",
    "DEFAULT_CONFIG_PATH",
    "get_active_config",
]

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(path: Path | str | None = None) -> ProdOpsConfig:
    """Load and validate the configuration at ``path`` (packaged defaults if None)."""
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data = load_yaml_file(config_path)
    config = parse_config(data, source=str(config_path))
    _logger.info(
        "config_loaded",
        extra={
            "config_source": config.source,
            "checksum": config.checksum,
            "delimiter": config.csv.delimiter,
            "max_import_rows": config.csv.max_import_rows,
        },
    )
    return config
