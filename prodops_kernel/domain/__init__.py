"""Pure domain primitives shared by the CSV and depreciation engines."""

from prodops_kernel.domain.clock import (
    Clock,
    DeterministicClock,
    SystemClock,
)
from prodops_kernel.domain.values import round_cents, to_decimal

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "round_cents",
    "to_decimal",
]
