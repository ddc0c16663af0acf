"""
Values -- Decimal helpers for cent-precision money arithmetic.

Invariants enforced:
    * Monetary arithmetic uses ``Decimal`` -- NEVER ``float``.
    * Rounding to cents is half-up (0.005 -> 0.01), matching how the
      application has always displayed currency.
    * ``round_cents`` never raises for a value ``to_decimal`` accepted,
      however many integer digits it has.

Failure modes:
    * Unparseable, non-finite or out-of-range input to ``to_decimal``
      returns ``Decimal("0")`` rather than raising; the calculation engines
      treat bad numbers as zero.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0")

# Largest accepted magnitude is 10**MAX_EXPONENT; keeps derived figures
# (x12, x rate) far from the context's Emax.
MAX_EXPONENT = 1000


def to_decimal(value: Any) -> Decimal:
    """Convert int/float/str/Decimal to ``Decimal`` via ``str`` (no binary float noise)."""
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        return Decimal(int(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return ZERO
    if not result.is_finite() or abs(result.adjusted()) > MAX_EXPONENT:
        return ZERO
    return result


def round_cents(value: Decimal) -> Decimal:
    """Quantize to two decimal places, half-up."""
    with localcontext() as ctx:
        # Enough digits for every integer digit plus the two cents places.
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
