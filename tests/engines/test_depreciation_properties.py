"""
Property-style tests for DepreciationCalculator.

Each property is checked over a grid of in-service months, terms, residual
values and business-use percentages:
- year amounts add up to the business depreciable amount
- book value never drops below the residual floor
- book value never increases over time
- disposal freezes book value and zeroes later years
"""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from bookkeeping_engines.depreciation import DepreciationCalculator

calculator = DepreciationCalculator()

MONTHS = [1, 2, 6, 11, 12]
TERMS = [1, 3, 5, 7]
SHAPES = [
    (Decimal("3000"), Decimal("300"), Decimal("100")),
    (Decimal("1234.56"), Decimal("0"), Decimal("60")),
    (Decimal("999.99"), Decimal("99.99"), Decimal("33.3")),
    (Decimal("450"), Decimal("450"), Decimal("100")),
]


def _year_end_dates(asset):
    start_year, end_year = calculator.schedule_years(asset)
    return [date(y, 12, 31) for y in range(start_year - 1, end_year + 2)]


@pytest.mark.parametrize("month", MONTHS)
@pytest.mark.parametrize("years", TERMS)
@pytest.mark.parametrize("purchase, residual, pct", SHAPES)
class TestScheduleProperties:

    @pytest.fixture
    def asset(self, make_asset, month, years, purchase, residual, pct):
        return make_asset(
            purchase_date=date(2024, month, 10),
            depreciation_years=years,
            purchase_value=purchase,
            residual_value=residual,
            business_use_percentage=pct,
        )

    def test_completeness(self, asset):
        start_year, end_year = calculator.schedule_years(asset)
        total = sum(
            calculator.depreciation_for_year(asset, y)
            for y in range(start_year, end_year + 1)
        )
        expected = calculator.business_depreciable_amount(asset)
        assert abs(total - expected) <= Decimal("0.01")

    def test_no_amount_outside_schedule(self, asset):
        start_year, end_year = calculator.schedule_years(asset)
        assert calculator.depreciation_for_year(asset, start_year - 1) == 0
        assert calculator.depreciation_for_year(asset, end_year + 1) == 0

    def test_residual_floor(self, asset):
        floor = calculator.residual_floor(asset)
        for as_of in _year_end_dates(asset):
            assert calculator.book_value(asset, as_of) >= floor

    def test_book_value_monotonic(self, asset):
        previous = None
        as_of = asset.in_service_date - timedelta(days=1)
        for _ in range(0, 12 * (asset.depreciation_years + 2)):
            as_of += timedelta(days=31)
            value = calculator.book_value(asset, as_of)
            if previous is not None:
                assert value <= previous
            previous = value

    def test_display_schedule_adds_up(self, asset):
        lines = calculator.depreciation_schedule(asset)
        assert sum(line.amount for line in lines) == lines[-1].accumulated
        assert lines[-1].accumulated == calculator.round_money(
            calculator.business_depreciable_amount(asset)
        )


@pytest.mark.parametrize("month", [1, 6, 12])
@pytest.mark.parametrize("disposal", [date(2025, 3, 15), date(2026, 12, 31)])
def test_disposal_freeze(make_asset, month, disposal):
    asset = make_asset(
        purchase_date=date(2024, month, 1),
        disposal_date=disposal,
        is_active=False,
    )
    frozen = calculator.book_value(asset, disposal)
    for as_of in (disposal + timedelta(days=1), date(2030, 1, 1), date(2045, 6, 30)):
        assert calculator.book_value(asset, as_of) == frozen
    for year in range(disposal.year + 1, disposal.year + 8):
        assert calculator.depreciation_for_year(asset, year) == 0


@pytest.mark.parametrize("years", TERMS)
def test_fully_depreciated_after_term(make_asset, years):
    asset = make_asset(depreciation_years=years)
    end = date(2024 + years, 6, 1)
    assert calculator.is_fully_depreciated(asset, end)
    assert not calculator.is_fully_depreciated(asset, end - timedelta(days=1))
    assert calculator.book_value(asset, end) == calculator.residual_floor(asset)
