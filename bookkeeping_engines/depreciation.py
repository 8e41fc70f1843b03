"""
bookkeeping_engines.depreciation -- Straight-line depreciation with monthly proration.

Responsibility:
    Compute, for a single asset, the annual depreciation, the amount booked
    in a given calendar year, cumulative depreciation as of a date, the book
    value, and the derived lifecycle flags (years in use, fully
    depreciated).  Also builds the display schedule and the disposal
    gain/loss.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends only on ``bookkeeping_kernel.domain``.  Assets are read through
    the ``DepreciableAsset`` protocol, so any object with the right fields
    (the ``AssetRecord`` dataclass, an ORM row) can be passed in.

Invariants enforced:
    - Exact ``Decimal`` arithmetic; every figure is computed with a single
      final division so year amounts and cumulative totals carry full
      context precision.  Rounding happens only in ``round_money`` and in
      the display schedule.
    - Cumulative depreciation never exceeds
      ``(purchase - residual) * business_use / 100``.
    - Book value never drops below ``residual * business_use / 100``.
    - Nothing accrues after the disposal date; no year after the disposal
      year carries depreciation.
    - No caching: every call reads the asset's current fields.

Failure modes:
    - None for valid records.  Records are validated when they are built.

Schedule layout:
    The term is ``depreciation_years * 12`` monthly slots starting with the
    in-service month (which counts in full).  A year's amount is the
    annual figure times the slots falling in that year divided by 12:
    ``13 - m`` slots in the first year, 12 in interior years and ``m - 1``
    in the trailing year when the in-service month ``m`` is not January.
    A one-year term is booked in full in the in-service year.

Usage:
    calculator = DepreciationCalculator()
    calculator.depreciation_for_year(asset, 2025)      # Decimal('540')
    calculator.book_value(asset, date(2026, 12, 31))   # Decimal('1605')
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from bookkeeping_kernel.domain.values import (
    MONTHS_PER_YEAR,
    ONE_HUNDRED,
    ZERO,
    percentage_to_fraction,
    round_money,
)
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("engines.depreciation")


class DepreciableAsset(Protocol):
    """The fields the calculator reads from an asset."""

    purchase_value: Decimal
    residual_value: Decimal
    business_use_percentage: Decimal
    depreciation_years: int
    in_service_date: date
    disposal_date: date | None
    disposal_value: Decimal | None


@dataclass(frozen=True)
class ScheduleLine:
    """One calendar year of a display-rounded depreciation schedule."""

    year: int
    amount: Decimal
    accumulated: Decimal
    book_value: Decimal


@dataclass(frozen=True)
class DisposalResult:
    """Outcome of disposing an asset, rounded for display."""

    disposal_date: date
    book_value_at_disposal: Decimal
    proceeds: Decimal
    gain_loss: Decimal

    @property
    def is_gain(self) -> bool:
        return self.gain_loss >= ZERO


class DepreciationCalculator:
    """
    Pure function calculator for linear depreciation.

    Contract:
        No I/O, no clock access, no caching.  Every method is a function of
        the asset's current fields and the explicit year / as-of date.
    Guarantees:
        - ``annual_depreciation`` = (purchase - residual) / years * business_use / 100.
        - The per-year amounts over the whole schedule sum to the business
          depreciable amount.
        - ``depreciation_to_date`` is non-decreasing in ``as_of`` and frozen
          from the disposal date on.
    Non-goals:
        - Declining-balance or pool methods.
        - Persisting anything.
    """

    def __init__(self, decimal_places: int = 2):
        self.decimal_places = decimal_places

    # ------------------------------------------------------------------
    # Base amounts
    # ------------------------------------------------------------------

    def depreciable_amount(self, asset: DepreciableAsset) -> Decimal:
        """Purchase value minus residual value."""
        return asset.purchase_value - asset.residual_value

    def business_fraction(self, asset: DepreciableAsset) -> Decimal:
        return percentage_to_fraction(asset.business_use_percentage)

    def business_depreciable_amount(self, asset: DepreciableAsset) -> Decimal:
        """The most that can ever be depreciated for this asset."""
        return self.depreciable_amount(asset) * asset.business_use_percentage / ONE_HUNDRED

    def residual_floor(self, asset: DepreciableAsset) -> Decimal:
        """Business share of the residual value; book value never goes below it."""
        return asset.residual_value * asset.business_use_percentage / ONE_HUNDRED

    def business_purchase_value(self, asset: DepreciableAsset) -> Decimal:
        return asset.purchase_value * asset.business_use_percentage / ONE_HUNDRED

    def annual_depreciation(self, asset: DepreciableAsset) -> Decimal:
        """Steady-state depreciation for a full year, business portion only."""
        return self._prorate(asset, MONTHS_PER_YEAR)

    # ------------------------------------------------------------------
    # Per-year schedule
    # ------------------------------------------------------------------

    def schedule_years(self, asset: DepreciableAsset) -> tuple[int, int]:
        """
        First and last calendar year that carry depreciation.

        Disposal is not applied here; see ``depreciation_for_year``.
        """
        start_year = asset.in_service_date.year
        if asset.depreciation_years == 1 or asset.in_service_date.month == 1:
            return start_year, start_year + asset.depreciation_years - 1
        return start_year, start_year + asset.depreciation_years

    def depreciation_for_year(self, asset: DepreciableAsset, year: int) -> Decimal:
        """
        Depreciation booked in calendar ``year``.

        Zero outside the schedule and for every year after the disposal
        year.  The disposal year itself keeps its scheduled amount.
        """
        if asset.disposal_date is not None and year > asset.disposal_date.year:
            return ZERO
        return self._prorate(asset, self._slots_in_year(asset, year))

    def _slots_in_year(self, asset: DepreciableAsset, year: int) -> int:
        start_year, end_year = self.schedule_years(asset)
        if year < start_year or year > end_year:
            return 0
        if start_year == end_year:
            return MONTHS_PER_YEAR
        month = asset.in_service_date.month
        if year == start_year:
            return 13 - month
        if year == end_year and month != 1:
            return month - 1
        return MONTHS_PER_YEAR

    def _prorate(self, asset: DepreciableAsset, months: int) -> Decimal:
        # Single division keeps each figure exact to context precision.
        if months <= 0:
            return ZERO
        numerator = self.depreciable_amount(asset) * asset.business_use_percentage * months
        return numerator / (ONE_HUNDRED * MONTHS_PER_YEAR * asset.depreciation_years)

    # ------------------------------------------------------------------
    # As-of figures
    # ------------------------------------------------------------------

    def effective_date(self, asset: DepreciableAsset, as_of: date) -> date:
        """``as_of``, clamped to the disposal date for disposed assets."""
        if asset.disposal_date is not None and asset.disposal_date < as_of:
            return asset.disposal_date
        return as_of

    def months_accrued(self, asset: DepreciableAsset, as_of: date) -> int:
        """
        Completed schedule slots at the end of ``as_of``.

        The in-service month counts in full once it has ended.  The count
        is capped at the length of the term.
        """
        end = self.effective_date(asset, as_of)
        if end < asset.in_service_date:
            return 0
        start = asset.in_service_date
        months = (end.year - start.year) * MONTHS_PER_YEAR + (end.month - start.month)
        if end.day == calendar.monthrange(end.year, end.month)[1]:
            months += 1
        return max(0, min(months, asset.depreciation_years * MONTHS_PER_YEAR))

    def depreciation_to_date(self, asset: DepreciableAsset, as_of: date) -> Decimal:
        """
        Cumulative depreciation at the end of ``as_of``.

        Full-precision value, capped at the business depreciable amount.
        """
        accrued = self._prorate(asset, self.months_accrued(asset, as_of))
        return min(accrued, self.business_depreciable_amount(asset))

    def book_value(self, asset: DepreciableAsset, as_of: date) -> Decimal:
        """Business portion of the purchase value less depreciation, floored at residual."""
        remaining = self.business_purchase_value(asset) - self.depreciation_to_date(asset, as_of)
        return max(self.residual_floor(asset), remaining)

    def years_in_use(self, asset: DepreciableAsset, as_of: date) -> int:
        """Whole years between the in-service date and min(disposal, as_of)."""
        end = self.effective_date(asset, as_of)
        start = asset.in_service_date
        years = end.year - start.year
        if (end.month, end.day) < (start.month, start.day):
            years -= 1
        return max(0, years)

    def is_fully_depreciated(self, asset: DepreciableAsset, as_of: date) -> bool:
        return self.years_in_use(asset, as_of) >= asset.depreciation_years

    def remaining_years(self, asset: DepreciableAsset, as_of: date) -> int:
        return max(0, asset.depreciation_years - self.years_in_use(asset, as_of))

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------

    def round_money(self, amount: Decimal) -> Decimal:
        """Round half-up to the configured minor unit."""
        return round_money(amount, self.decimal_places)

    def depreciation_schedule(self, asset: DepreciableAsset) -> list[ScheduleLine]:
        """
        Year-by-year schedule rounded for display.

        Each line's amount is the difference of rounded cumulative totals,
        so the displayed amounts always add up to the displayed
        accumulated figure without a stray cent.  The disposal year shows
        what accrued up to the disposal date, so its book value matches
        ``disposal_result``.  Years after the disposal year are omitted.
        """
        start_year, end_year = self.schedule_years(asset)
        if asset.disposal_date is not None:
            end_year = min(end_year, asset.disposal_date.year)

        cap = self.business_depreciable_amount(asset)
        floor = self.residual_floor(asset)
        business_purchase = self.business_purchase_value(asset)

        lines: list[ScheduleLine] = []
        cumulative = ZERO
        shown = ZERO
        for year in range(start_year, end_year + 1):
            if asset.disposal_date is not None and year == asset.disposal_date.year:
                cumulative = self.depreciation_to_date(asset, asset.disposal_date)
            else:
                cumulative = min(cumulative + self.depreciation_for_year(asset, year), cap)
            accumulated = self.round_money(cumulative)
            lines.append(
                ScheduleLine(
                    year=year,
                    amount=accumulated - shown,
                    accumulated=accumulated,
                    book_value=self.round_money(max(floor, business_purchase - cumulative)),
                )
            )
            shown = accumulated
        return lines

    def disposal_result(self, asset: DepreciableAsset) -> DisposalResult | None:
        """Gain or loss on disposal; ``None`` while the asset is active."""
        if asset.disposal_date is None:
            return None
        book_value = self.round_money(self.book_value(asset, asset.disposal_date))
        proceeds = self.round_money(asset.disposal_value or ZERO)
        result = DisposalResult(
            disposal_date=asset.disposal_date,
            book_value_at_disposal=book_value,
            proceeds=proceeds,
            gain_loss=proceeds - book_value,
        )
        logger.debug(
            "disposal_result_calculated",
            extra={
                "book_value_at_disposal": str(result.book_value_at_disposal),
                "proceeds": str(result.proceeds),
                "gain_loss": str(result.gain_loss),
            },
        )
        return result
