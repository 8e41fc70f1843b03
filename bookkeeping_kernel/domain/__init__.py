"""
Pure domain layer.

No dependencies on the ORM, the database or I/O. The only time source is
an injected ``Clock``.
"""

from bookkeeping_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from bookkeeping_kernel.domain.values import (
    ZERO,
    minor_unit,
    percentage_to_fraction,
    round_money,
    to_decimal,
)

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "ZERO",
    "minor_unit",
    "percentage_to_fraction",
    "round_money",
    "to_decimal",
]
