"""CSV file adapters (file I/O only; parsing lives in the codec)."""

from prodops_ingestion.adapters.base import SourceAdapter, SourceProbe
from prodops_ingestion.adapters.csv_adapter import CsvExportWriter, CsvSourceAdapter

__all__ = [
    "CsvExportWriter",
    "CsvSourceAdapter",
    "SourceAdapter",
    "SourceProbe",
]
