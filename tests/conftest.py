"""
Pytest fixtures for the prodops test suite.

Provides:
- Deterministic clocks pinned to a fixed "now"
- A helper for writing CSV source files into tmp_path
- Logging state reset between tests
"""

from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Callable

import pytest

from prodops_kernel.domain.clock import DeterministicClock
from prodops_kernel.logging_config import LogContext, reset_logging
from prodops_modules.assets.models import DepreciationMethod, DepreciationParams


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging configuration and context between tests."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()


@pytest.fixture
def deterministic_clock() -> DeterministicClock:
    """Clock pinned to 2025-01-15 12:00 UTC."""
    return DeterministicClock(datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def clock_months_after() -> Callable[[int], DeterministicClock]:
    """Factory: a clock N calendar months after the standard 2024-01-10 purchase date."""
    def _make(months: int) -> DeterministicClock:
        years, month_index = divmod(months, 12)
        return DeterministicClock(datetime(2024 + years, month_index + 1, 20, tzinfo=timezone.utc))
    return _make


@pytest.fixture
def standard_asset() -> Callable[..., DepreciationParams]:
    """Factory for the $10,000 / $1,000 salvage / 60-month asset bought 2024-01-10."""
    def _make(method: DepreciationMethod = DepreciationMethod.STRAIGHT_LINE, **overrides) -> DepreciationParams:
        values = dict(
            purchase_price=Decimal("10000"),
            salvage_value=Decimal("1000"),
            useful_life_months=60,
            purchase_date="2024-01-10",
            depreciation_method=method,
        )
        values.update(overrides)
        return DepreciationParams(**values)
    return _make


@pytest.fixture
def write_csv(tmp_path) -> Callable[..., Path]:
    """Write text (or bytes) to a CSV file under tmp_path and return its path."""
    def _write(content: str | bytes, name: str = "source.csv") -> Path:
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8", newline="")
        return path
    return _write
