"""
Fixed Assets Helpers (``prodops_modules.assets.helpers``).

Responsibility
--------------
Pure calculation functions for depreciation (straight-line, declining
balance, sum-of-years'-digits, units-of-production) and schedule
projection.  Textbook fixed-asset formulas with no side effects.

Architecture position
---------------------
**Modules layer** -- pure helper functions.  No I/O, no configuration,
no database access.  Time enters only through an injected ``Clock``;
called by ``AssetValuationService`` or from tests.

Invariants enforced
-------------------
* All monetary arithmetic uses ``Decimal`` -- NEVER ``float``.
* Division-by-zero cases (zero useful life, zero expected units, zero
  elapsed months) yield ``Decimal("0")`` instead of raising.
* Book value never drops below salvage value.
* Monetary results are rounded to 2 decimal places, half-up.

Failure modes
-------------
* None raised.  An unparseable purchase date counts as zero months
  elapsed; an unknown method falls back to straight-line.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from prodops_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from prodops_kernel.domain.values import ZERO, round_cents, to_decimal
from prodops_kernel.logging_config import get_logger
from prodops_modules.assets.models import (
    DepreciationMethod,
    DepreciationParams,
    DepreciationResult,
    DepreciationScheduleEntry,
    SchedulePeriod,
)

logger = get_logger("modules.assets.helpers")

DEFAULT_DECLINING_RATE = Decimal("2")  # double-declining
MONTHS_PER_YEAR = 12


# =============================================================================
# Input normalization
# =============================================================================


def to_date(value: date | datetime | str | None) -> date | None:
    """Coerce a purchase date; ``None`` when it cannot be read."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
        except ValueError:
            pass
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.debug("unreadable_purchase_date", extra={"purchase_date": text})
    return None


def coerce_method(value: DepreciationMethod | str | None) -> DepreciationMethod:
    """Resolve a method name; unknown values fall back to straight-line."""
    if isinstance(value, DepreciationMethod):
        return value
    try:
        return DepreciationMethod(str(value).strip().lower())
    except ValueError:
        logger.warning(
            "unknown_depreciation_method",
            extra={"depreciation_method": value, "fallback": DepreciationMethod.STRAIGHT_LINE.value},
        )
        return DepreciationMethod.STRAIGHT_LINE


def coerce_period(value: SchedulePeriod | str | None) -> SchedulePeriod:
    """Resolve a schedule period; unknown values fall back to annual."""
    if isinstance(value, SchedulePeriod):
        return value
    try:
        return SchedulePeriod(str(value).strip().lower())
    except ValueError:
        logger.warning(
            "unknown_schedule_period",
            extra={"period_type": value, "fallback": SchedulePeriod.ANNUAL.value},
        )
        return SchedulePeriod.ANNUAL


def _life_months(params: DepreciationParams) -> int:
    return max(0, int(params.useful_life_months or 0))


def _life_years_whole(life_months: int) -> int:
    """Useful life in whole years, rounded up."""
    return -(-life_months // MONTHS_PER_YEAR)


# =============================================================================
# Elapsed time
# =============================================================================


def get_months_elapsed(
    purchase_date: date | datetime | str | None,
    clock: Clock | None = None,
) -> int:
    """
    Whole calendar months from purchase to now.

    Postconditions:
        - ``(now.year - purchase.year) * 12 + (now.month - purchase.month)``;
          day of month is ignored.
        - Floored at 0 (future purchase dates count as 0).
        - 0 when the purchase date cannot be read.
    """
    purchase = to_date(purchase_date)
    if purchase is None:
        return 0
    now = (clock or SystemClock()).today()
    months = (now.year - purchase.year) * MONTHS_PER_YEAR + (now.month - purchase.month)
    return max(0, months)


def add_months(start: date, months: int) -> date:
    """First day of the month ``months`` after ``start``'s month."""
    years, month_index = divmod(start.month - 1 + months, MONTHS_PER_YEAR)
    return date(start.year + years, month_index + 1, 1)


# =============================================================================
# Methods
# =============================================================================


def calculate_straight_line(
    params: DepreciationParams,
    clock: Clock | None = None,
) -> DepreciationResult:
    """
    Straight-line depreciation: equal expense every month.

    Postconditions:
        - monthly = (price - salvage) / useful_life_months (0 if life is 0).
        - Accumulated stops growing once the useful life has elapsed.
        - ``is_fully_depreciated`` once months elapsed >= useful life.
    """
    price = to_decimal(params.purchase_price)
    salvage = to_decimal(params.salvage_value)
    life = _life_months(params)

    depreciable = price - salvage
    monthly = depreciable / life if life > 0 else ZERO
    months_elapsed = get_months_elapsed(params.purchase_date, clock)
    effective_months = min(months_elapsed, life)

    accumulated = monthly * effective_months
    book_value = max(salvage, price - accumulated)

    return DepreciationResult(
        book_value=round_cents(book_value),
        accumulated_depreciation=round_cents(accumulated),
        monthly_depreciation=round_cents(monthly),
        annual_depreciation=round_cents(monthly * MONTHS_PER_YEAR),
        depreciation_rate=Decimal(MONTHS_PER_YEAR) / life if life > 0 else ZERO,
        months_elapsed=months_elapsed,
        remaining_life_months=max(0, life - months_elapsed),
        is_fully_depreciated=months_elapsed >= life,
    )


def calculate_declining_balance(
    params: DepreciationParams,
    rate: Decimal = DEFAULT_DECLINING_RATE,
    clock: Clock | None = None,
) -> DepreciationResult:
    """
    Declining-balance depreciation: higher expense in early years.

    Simulated a year at a time: each whole elapsed year takes
    ``book * annual_rate`` (capped at ``book - salvage``) and the loop stops
    once salvage is reached; the partial year in progress takes a pro-rated
    share of the same rate.

    Postconditions:
        - annual_rate = rate / (useful_life_months / 12).
        - ``monthly_depreciation`` is the current instantaneous rate,
          ``book * annual_rate / 12``, or 0 once at salvage.
    """
    price = to_decimal(params.purchase_price)
    salvage = to_decimal(params.salvage_value)
    life = _life_months(params)

    annual_rate = to_decimal(rate) / (Decimal(life) / MONTHS_PER_YEAR) if life > 0 else ZERO
    months_elapsed = get_months_elapsed(params.purchase_date, clock)
    whole_years, partial_months = divmod(months_elapsed, MONTHS_PER_YEAR)

    book_value = price
    accumulated = ZERO

    for _ in range(whole_years):
        year_depreciation = max(ZERO, min(book_value * annual_rate, book_value - salvage))
        accumulated += year_depreciation
        book_value -= year_depreciation
        if book_value <= salvage:
            break

    partial_year = Decimal(partial_months) / MONTHS_PER_YEAR
    if partial_year > 0 and book_value > salvage:
        partial_depreciation = min(book_value * annual_rate * partial_year, book_value - salvage)
        accumulated += partial_depreciation
        book_value -= partial_depreciation

    book_value = max(salvage, book_value)
    current_monthly = book_value * annual_rate / MONTHS_PER_YEAR if book_value > salvage else ZERO

    return DepreciationResult(
        book_value=round_cents(book_value),
        accumulated_depreciation=round_cents(accumulated),
        monthly_depreciation=round_cents(current_monthly),
        annual_depreciation=round_cents(current_monthly * MONTHS_PER_YEAR),
        depreciation_rate=annual_rate,
        months_elapsed=months_elapsed,
        remaining_life_months=max(0, life - months_elapsed),
        is_fully_depreciated=book_value <= salvage,
    )


def calculate_sum_of_years(
    params: DepreciationParams,
    clock: Clock | None = None,
) -> DepreciationResult:
    """
    Sum-of-years'-digits depreciation.

    Year ``y`` (1-based) of an ``n``-year life takes ``(n - y + 1) / SYD``
    of the depreciable amount, where ``SYD = n(n+1)/2`` and ``n`` is the
    useful life rounded up to whole years.  The year in progress is
    pro-rated by elapsed months; the total is capped at the depreciable
    amount.
    """
    price = to_decimal(params.purchase_price)
    salvage = to_decimal(params.salvage_value)
    life = _life_months(params)

    life_years = _life_years_whole(life)
    depreciable = price - salvage
    sum_of_years = life_years * (life_years + 1) // 2

    months_elapsed = get_months_elapsed(params.purchase_date, clock)
    years_elapsed, partial_months = divmod(months_elapsed, MONTHS_PER_YEAR)

    accumulated = ZERO
    if sum_of_years > 0:
        # Sum the digits of completed years first so a finished life lands
        # exactly on the depreciable amount.
        completed_digits = sum(
            life_years - year + 1
            for year in range(1, min(years_elapsed, life_years) + 1)
        )
        accumulated = depreciable * completed_digits / sum_of_years

        if partial_months > 0 and years_elapsed < life_years:
            remaining_life = life_years - years_elapsed
            year_depreciation = depreciable * remaining_life / sum_of_years
            accumulated += year_depreciation * partial_months / MONTHS_PER_YEAR

    accumulated = min(accumulated, depreciable)
    book_value = max(salvage, price - accumulated)

    current_year = min(years_elapsed + 1, life_years)
    current_remaining = life_years - current_year + 1
    if sum_of_years > 0:
        current_year_depreciation = depreciable * current_remaining / sum_of_years
        rate = Decimal(current_remaining) / sum_of_years
    else:
        current_year_depreciation = ZERO
        rate = ZERO

    return DepreciationResult(
        book_value=round_cents(book_value),
        accumulated_depreciation=round_cents(accumulated),
        monthly_depreciation=round_cents(current_year_depreciation / MONTHS_PER_YEAR),
        annual_depreciation=round_cents(current_year_depreciation),
        depreciation_rate=rate,
        months_elapsed=months_elapsed,
        remaining_life_months=max(0, life - months_elapsed),
        is_fully_depreciated=accumulated >= depreciable,
    )


def calculate_units_of_production(
    params: DepreciationParams,
    clock: Clock | None = None,
) -> DepreciationResult:
    """
    Units-of-production depreciation: expense follows actual usage.

    Postconditions:
        - per_unit = (price - salvage) / total_units_expected (0 if no units
          expected); ``total_units_expected`` defaults to 1 and
          ``units_produced`` to 0.
        - ``monthly_depreciation`` is the historical average,
          ``per_unit * units_produced / months_elapsed`` (0 in month 0).
    """
    price = to_decimal(params.purchase_price)
    salvage = to_decimal(params.salvage_value)
    life = _life_months(params)
    units = to_decimal(params.units_produced) if params.units_produced is not None else ZERO
    total_units = (
        to_decimal(params.total_units_expected)
        if params.total_units_expected is not None else Decimal("1")
    )

    depreciable = price - salvage
    per_unit = depreciable / total_units if total_units > 0 else ZERO
    accumulated = min(per_unit * units, depreciable)
    book_value = max(salvage, price - accumulated)

    months_elapsed = get_months_elapsed(params.purchase_date, clock)
    units_per_month = units / months_elapsed if months_elapsed > 0 else ZERO
    monthly = per_unit * units_per_month

    return DepreciationResult(
        book_value=round_cents(book_value),
        accumulated_depreciation=round_cents(accumulated),
        monthly_depreciation=round_cents(monthly),
        annual_depreciation=round_cents(monthly * MONTHS_PER_YEAR),
        depreciation_rate=units / total_units if total_units > 0 else ZERO,
        months_elapsed=months_elapsed,
        remaining_life_months=max(0, life - months_elapsed),
        is_fully_depreciated=units >= total_units,
    )


def calculate_depreciation(
    params: DepreciationParams,
    clock: Clock | None = None,
    declining_rate: Decimal = DEFAULT_DECLINING_RATE,
) -> DepreciationResult:
    """Dispatch on ``params.depreciation_method``."""
    method = coerce_method(params.depreciation_method)
    if method is DepreciationMethod.DECLINING_BALANCE:
        return calculate_declining_balance(params, rate=declining_rate, clock=clock)
    if method is DepreciationMethod.SUM_OF_YEARS:
        return calculate_sum_of_years(params, clock=clock)
    if method is DepreciationMethod.UNITS_OF_PRODUCTION:
        return calculate_units_of_production(params, clock=clock)
    return calculate_straight_line(params, clock=clock)


# =============================================================================
# Schedule projection
# =============================================================================


def generate_depreciation_schedule(
    params: DepreciationParams,
    period_type: SchedulePeriod | str = SchedulePeriod.ANNUAL,
    clock: Clock | None = None,
    declining_rate: Decimal = DEFAULT_DECLINING_RATE,
) -> list[DepreciationScheduleEntry]:
    """
    Project depreciation period by period over the useful life.

    Per-period expense:
        - straight-line: the constant monthly or annual rate.
        - declining balance: ``beginning * rate / life_years`` (/12 monthly).
        - sum-of-years: the method evaluated as of the period's start date.
        - units-of-production: the currently observed average rate
          (evaluated with ``clock``), projected forward.  ``units_produced``
          is a single cumulative count with no per-period history, so
          re-dating it would only change the divisor of that average; the
          observed rate is the one figure the inputs actually support.

    Postconditions:
        - ``useful_life_months`` periods (monthly) or ``ceil(months / 12)``
          periods (annual), fewer if salvage is reached early.
        - Expense is clamped to ``[0, beginning - salvage]``, so every
          ``ending_value >= salvage_value``.
        - ``beginning_value`` of period N+1 equals ``ending_value`` of N.
    """
    period = coerce_period(period_type)
    monthly = period is SchedulePeriod.MONTHLY
    method = coerce_method(params.depreciation_method)

    price = to_decimal(params.purchase_price)
    salvage = to_decimal(params.salvage_value)
    life = _life_months(params)
    periods = life if monthly else _life_years_whole(life)
    life_years = Decimal(life) / MONTHS_PER_YEAR

    # Closed-form per-period rates; usage-based assets repeat the observed rate.
    constant_expense = ZERO
    if method in (DepreciationMethod.STRAIGHT_LINE, DepreciationMethod.UNITS_OF_PRODUCTION):
        current = calculate_depreciation(params, clock=clock)
        constant_expense = current.monthly_depreciation if monthly else current.annual_depreciation

    purchase = to_date(params.purchase_date)
    schedule: list[DepreciationScheduleEntry] = []
    beginning = price
    total_accumulated = ZERO

    for number in range(1, periods + 1):
        if method is DepreciationMethod.DECLINING_BALANCE:
            expense = beginning * (to_decimal(declining_rate) / life_years)
            if monthly:
                expense /= MONTHS_PER_YEAR
        elif method is DepreciationMethod.SUM_OF_YEARS:
            offset = (number - 1) if monthly else (number - 1) * MONTHS_PER_YEAR
            as_of = DeterministicClock(add_months(purchase, offset)) if purchase else clock
            result = calculate_sum_of_years(params, clock=as_of)
            expense = result.monthly_depreciation if monthly else result.annual_depreciation
        else:
            expense = constant_expense

        # Don't depreciate below salvage value
        expense = max(ZERO, min(expense, beginning - salvage))
        total_accumulated += expense
        ending = beginning - expense

        schedule.append(DepreciationScheduleEntry(
            period=number,
            period_label=f"Month {number}" if monthly else f"Year {number}",
            beginning_value=round_cents(beginning),
            depreciation_expense=round_cents(expense),
            accumulated_depreciation=round_cents(total_accumulated),
            ending_value=round_cents(ending),
        ))

        beginning = ending
        if beginning <= salvage:
            break

    logger.debug(
        "depreciation_schedule_generated",
        extra={"method": method.value, "period_type": period.value, "periods": len(schedule)},
    )
    return schedule
