"""
Header auto-mapping: propose which entity field each CSV column feeds.

Matching is case- and separator-insensitive but otherwise exact or
substring only -- there is no edit-distance scoring.  Rules are tried in
priority order and the first entity field (in the caller's order) that
satisfies a rule wins:

    1. normalized header == normalized field key
    2. normalized header == normalized field label
    3. normalized header contains, or is contained in, normalized field key
"""

from __future__ import annotations

import re
from typing import Iterable, Sequence

from prodops_kernel.logging_config import get_logger
from prodops_ingestion.domain.types import CsvFieldMapping, EntityField

logger = get_logger("ingestion.mapping.auto_map")

_SEPARATORS = re.compile(r"[_\-\s]+")


def normalize_header(name: str) -> str:
    """Lower-case and drop underscores, hyphens and whitespace."""
    return _SEPARATORS.sub("", name.lower())


def _match_field(header: str, entity_fields: Sequence[EntityField]) -> str:
    norm = normalize_header(header)
    if not norm:
        return ""

    keys = [normalize_header(f.key) for f in entity_fields]
    labels = [normalize_header(f.label) for f in entity_fields]

    for field, key in zip(entity_fields, keys):
        if key == norm:
            return field.key
    for field, label in zip(entity_fields, labels):
        if label == norm:
            return field.key
    for field, key in zip(entity_fields, keys):
        if key and (key in norm or norm in key):
            return field.key
    return ""


def auto_map_headers(
    csv_headers: Iterable[str],
    entity_fields: Sequence[EntityField],
) -> list[CsvFieldMapping]:
    """Return one mapping per header, ``entity_field=""`` where nothing matched."""
    mappings = [
        CsvFieldMapping(csv_header=header, entity_field=_match_field(header, entity_fields))
        for header in csv_headers
    ]
    logger.debug(
        "headers_auto_mapped",
        extra={
            "header_count": len(mappings),
            "unmapped": [m.csv_header for m in mappings if not m.is_mapped],
        },
    )
    return mappings
