"""Fixed asset depreciation: models, pure helpers, valuation service."""

from prodops_modules.assets.helpers import (
    calculate_declining_balance,
    calculate_depreciation,
    calculate_straight_line,
    calculate_sum_of_years,
    calculate_units_of_production,
    generate_depreciation_schedule,
    get_months_elapsed,
)
from prodops_modules.assets.models import (
    DepreciationMethod,
    DepreciationParams,
    DepreciationResult,
    DepreciationScheduleEntry,
    SchedulePeriod,
)
from prodops_modules.assets.service import AssetValuationService

__all__ = [
    "AssetValuationService",
    "DepreciationMethod",
    "DepreciationParams",
    "DepreciationResult",
    "DepreciationScheduleEntry",
    "SchedulePeriod",
    "calculate_declining_balance",
    "calculate_depreciation",
    "calculate_straight_line",
    "calculate_sum_of_years",
    "calculate_units_of_production",
    "generate_depreciation_schedule",
    "get_months_elapsed",
]
