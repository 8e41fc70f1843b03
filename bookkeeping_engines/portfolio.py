"""
bookkeeping_engines.portfolio -- Aggregate depreciation figures over many assets.

Responsibility:
    Totals and partitions over a collection of assets: book value, annual
    and per-year depreciation, grouping by category, fully-depreciated and
    purchase-year filters, and the year summary consumed by the annual tax
    report.

Architecture position:
    Engines -- pure calculation layer, zero I/O.  Per-asset math is
    delegated to ``DepreciationCalculator``.

Invariants enforced:
    - Sums are commutative, so totals do not depend on input order.
    - Filters and groupings are stable: they keep the caller's order.
    - No filtering is implied by the totals; callers choose active or
      disposed subsets explicitly.
    - Inputs are never mutated.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, TypeVar

from bookkeeping_engines.depreciation import DepreciationCalculator
from bookkeeping_engines.tracer import traced_engine
from bookkeeping_kernel.domain.values import ZERO
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("engines.portfolio")

A = TypeVar("A")


@dataclass(frozen=True)
class AnnualDepreciationSummary:
    """
    Year-scoped figures for the depreciation and investment sections of
    the annual report.  Amounts are rounded for display.
    """

    year: int
    asset_count: int
    total_depreciation: Decimal
    book_value_at_year_end: Decimal
    investments: Decimal
    investment_count: int
    disposal_count: int
    fully_depreciated_count: int


class AssetPortfolio:
    """
    Pure reductions over a collection of assets.

    Contract:
        Accepts any iterable of objects satisfying ``DepreciableAsset``
        plus ``category``, ``purchase_date`` and ``is_active``.  Returns
        full-precision ``Decimal`` totals; ``annual_summary`` is the only
        method that rounds.
    """

    def __init__(self, calculator: DepreciationCalculator | None = None):
        self.calculator = calculator or DepreciationCalculator()

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    @traced_engine("portfolio", "1.0", fingerprint_fields=("assets", "as_of"))
    def total_book_value(self, assets: Iterable[Any], as_of: date) -> Decimal:
        return sum(
            (self.calculator.book_value(asset, as_of) for asset in assets),
            ZERO,
        )

    @traced_engine("portfolio", "1.0", fingerprint_fields=("assets",))
    def total_annual_depreciation(self, assets: Iterable[Any]) -> Decimal:
        return sum(
            (self.calculator.annual_depreciation(asset) for asset in assets),
            ZERO,
        )

    @traced_engine("portfolio", "1.0", fingerprint_fields=("assets", "year"))
    def total_depreciation_for_year(self, assets: Iterable[Any], year: int) -> Decimal:
        """Depreciation line of the tax-year report."""
        return sum(
            (self.calculator.depreciation_for_year(asset, year) for asset in assets),
            ZERO,
        )

    # ------------------------------------------------------------------
    # Partitions and filters
    # ------------------------------------------------------------------

    def grouped_by_category(self, assets: Iterable[A]) -> dict[Any, list[A]]:
        groups: dict[Any, list[A]] = {}
        for asset in assets:
            groups.setdefault(asset.category, []).append(asset)
        return groups

    def fully_depreciated(self, assets: Iterable[A], as_of: date) -> list[A]:
        """Assets due for review or disposal."""
        return [a for a in assets if self.calculator.is_fully_depreciated(a, as_of)]

    def filter_by_purchase_year(self, assets: Iterable[A], year: int) -> list[A]:
        return [a for a in assets if a.purchase_date.year == year]

    def active(self, assets: Iterable[A]) -> list[A]:
        return [a for a in assets if a.is_active]

    def disposed(self, assets: Iterable[A]) -> list[A]:
        return [a for a in assets if a.disposal_date is not None]

    def sorted_by_purchase_date(self, assets: Iterable[A]) -> list[A]:
        """Newest purchase first."""
        return sorted(assets, key=lambda a: a.purchase_date, reverse=True)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @traced_engine("portfolio", "1.0", fingerprint_fields=("assets", "year"))
    def annual_summary(self, assets: Iterable[Any], year: int) -> AnnualDepreciationSummary:
        """
        Figures for the annual report of ``year``.

        Book value and the fully-depreciated count are taken at
        31 December.  Assets disposed before the year started still
        contribute zero depreciation and their frozen book value, so
        callers normally pass the assets still held at the start of the
        year plus those bought during it.
        """
        items = list(assets)
        year_end = date(year, 12, 31)
        purchased = self.filter_by_purchase_year(items, year)
        disposed_in_year = [
            a for a in items
            if a.disposal_date is not None and a.disposal_date.year == year
        ]
        round_money = self.calculator.round_money

        summary = AnnualDepreciationSummary(
            year=year,
            asset_count=len(items),
            total_depreciation=round_money(self.total_depreciation_for_year(items, year)),
            book_value_at_year_end=round_money(self.total_book_value(items, year_end)),
            investments=round_money(sum((a.purchase_value for a in purchased), ZERO)),
            investment_count=len(purchased),
            disposal_count=len(disposed_in_year),
            fully_depreciated_count=len(self.fully_depreciated(items, year_end)),
        )
        logger.info(
            "annual_summary_built",
            extra={
                "year": year,
                "asset_count": summary.asset_count,
                "total_depreciation": str(summary.total_depreciation),
                "book_value_at_year_end": str(summary.book_value_at_year_end),
            },
        )
        return summary
