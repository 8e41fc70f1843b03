"""
Values -- Decimal coercion and minor-unit rounding.

Responsibility:
    The single place where raw monetary inputs become ``Decimal`` and where
    computed amounts are rounded for display.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary amounts are always ``Decimal``; ``float`` is rejected at the
      boundary, never converted.
    - Rounding is half-up at the currency minor unit and only happens when
      a caller asks for it. Computation paths keep full context precision.

Failure modes:
    - TypeError for ``float`` or other non-numeric input.
    - ValueError for strings that are not decimal literals, NaN or infinity.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
ONE_HUNDRED = Decimal("100")
MONTHS_PER_YEAR = 12


def to_decimal(value: Decimal | str | int, *, field: str = "amount") -> Decimal:
    """
    Coerce a monetary input to ``Decimal``.

    Preconditions:
        - ``value`` is a ``Decimal``, ``int`` or decimal string.
    Postconditions:
        - Returns a finite ``Decimal``.
    Raises:
        TypeError: for ``float``, ``bool`` or unsupported types.
        ValueError: for unparseable strings and non-finite values.
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise TypeError(
            f"{field} must be Decimal, int or str, got {type(value).__name__}"
        )
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"{field} is not a decimal number: {value!r}") from e
    else:
        raise TypeError(
            f"{field} must be Decimal, int or str, got {type(value).__name__}"
        )
    if not result.is_finite():
        raise ValueError(f"{field} must be finite, got {value!r}")
    return result


def minor_unit(decimal_places: int) -> Decimal:
    """Return the quantum for a currency with ``decimal_places`` digits."""
    if decimal_places <= 0:
        return Decimal("1")
    return Decimal("0." + "0" * (decimal_places - 1) + "1")


def round_money(amount: Decimal, decimal_places: int = 2) -> Decimal:
    """Round half-up to the currency minor unit."""
    return amount.quantize(minor_unit(decimal_places), rounding=ROUND_HALF_UP)


def percentage_to_fraction(percentage: Decimal) -> Decimal:
    """Convert a 0-100 percentage to a 0-1 fraction."""
    return percentage / ONE_HUNDRED
