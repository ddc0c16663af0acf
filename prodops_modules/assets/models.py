"""
Fixed Assets Domain Models.

The nouns of asset depreciation: methods, parameters, results and
schedule rows.  All monetary values are ``Decimal``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

from prodops_kernel.domain.values import to_decimal


class DepreciationMethod(str, Enum):
    """Supported depreciation methods."""
    STRAIGHT_LINE = "straight_line"
    DECLINING_BALANCE = "declining_balance"
    SUM_OF_YEARS = "sum_of_years"
    UNITS_OF_PRODUCTION = "units_of_production"


class SchedulePeriod(str, Enum):
    """Granularity of a projected depreciation schedule."""
    MONTHLY = "monthly"
    ANNUAL = "annual"


@dataclass(frozen=True)
class DepreciationParams:
    """
    Inputs for a depreciation calculation.

    ``salvage_value <= purchase_price`` is the caller's responsibility.
    ``purchase_date`` may be a ``date``, ``datetime`` or ISO-8601 string.
    """
    purchase_price: Decimal
    salvage_value: Decimal
    useful_life_months: int
    purchase_date: date | datetime | str
    depreciation_method: DepreciationMethod | str = DepreciationMethod.STRAIGHT_LINE
    units_produced: Decimal | None = None
    total_units_expected: Decimal | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DepreciationParams":
        """Build params from a loosely typed asset record (e.g. an imported CSV row)."""
        def optional(key: str) -> Decimal | None:
            value = record.get(key)
            if value is None or (isinstance(value, str) and not value.strip()):
                return None
            return to_decimal(value)

        method = record.get("depreciation_method") or DepreciationMethod.STRAIGHT_LINE
        return cls(
            purchase_price=to_decimal(record.get("purchase_price")),
            salvage_value=to_decimal(record.get("salvage_value")),
            useful_life_months=int(to_decimal(record.get("useful_life_months"))),
            purchase_date=record.get("purchase_date") or "",
            depreciation_method=method,
            units_produced=optional("units_produced"),
            total_units_expected=optional("total_units_expected"),
        )


@dataclass(frozen=True)
class DepreciationResult:
    """Point-in-time valuation; monetary fields are rounded to cents."""
    book_value: Decimal
    accumulated_depreciation: Decimal
    monthly_depreciation: Decimal
    annual_depreciation: Decimal
    depreciation_rate: Decimal
    months_elapsed: int
    remaining_life_months: int
    is_fully_depreciated: bool


@dataclass(frozen=True)
class DepreciationScheduleEntry:
    """One projected period of a depreciation schedule."""
    period: int
    period_label: str
    beginning_value: Decimal
    depreciation_expense: Decimal
    accumulated_depreciation: Decimal
    ending_value: Decimal
