"""
Asset Valuation Service.

Binds the pure depreciation helpers to an injected clock and the
configured defaults (declining-balance multiplier, default schedule
period), and logs each valuation.  Holds no state beyond those two
collaborators; every call recomputes from the params it is given.
"""

from __future__ import annotations

from typing import Mapping

from prodops_config.schema import DepreciationConfig
from prodops_kernel.domain.clock import Clock, SystemClock
from prodops_kernel.logging_config import LogContext, get_logger
from prodops_modules.assets.helpers import (
    calculate_depreciation,
    coerce_method,
    generate_depreciation_schedule,
)
from prodops_modules.assets.models import (
    DepreciationParams,
    DepreciationResult,
    DepreciationScheduleEntry,
    SchedulePeriod,
)

logger = get_logger("modules.assets.service")


class AssetValuationService:
    """Values assets and projects their depreciation schedules."""

    def __init__(self, clock: Clock | None = None, config: DepreciationConfig | None = None):
        self._clock = clock or SystemClock()
        self._config = config or DepreciationConfig()

    def value(self, params: DepreciationParams) -> DepreciationResult:
        """Current book value and depreciation figures as of the service clock."""
        result = calculate_depreciation(
            params,
            clock=self._clock,
            declining_rate=self._config.declining_balance_multiplier,
        )
        logger.info(
            "asset_valued",
            extra={
                "method": coerce_method(params.depreciation_method).value,
                "book_value": result.book_value,
                "accumulated_depreciation": result.accumulated_depreciation,
                "months_elapsed": result.months_elapsed,
                "is_fully_depreciated": result.is_fully_depreciated,
            },
        )
        return result

    def schedule(
        self,
        params: DepreciationParams,
        period_type: SchedulePeriod | str | None = None,
    ) -> list[DepreciationScheduleEntry]:
        """Projected schedule; ``period_type`` defaults to the configured period."""
        entries = generate_depreciation_schedule(
            params,
            period_type=period_type or self._config.default_schedule_period,
            clock=self._clock,
            declining_rate=self._config.declining_balance_multiplier,
        )
        logger.info(
            "asset_schedule_projected",
            extra={
                "method": coerce_method(params.depreciation_method).value,
                "periods": len(entries),
                "final_value": entries[-1].ending_value if entries else None,
            },
        )
        return entries

    def value_assets(
        self,
        assets: Mapping[str, DepreciationParams],
    ) -> dict[str, DepreciationResult]:
        """Value a batch of assets keyed by asset id, preserving key order."""
        results: dict[str, DepreciationResult] = {}
        for asset_id, params in assets.items():
            with LogContext.bind(asset_id=asset_id):
                results[asset_id] = self.value(params)
        return results
