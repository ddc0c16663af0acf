"""Import orchestration over the pure CSV engine."""

from prodops_ingestion.services.import_service import CsvImportService, ImportPreview

__all__ = ["CsvImportService", "ImportPreview"]
