"""
Tests for DepreciationCalculator (bookkeeping_engines/depreciation.py).

Covers the reference purchase (EUR 3,000 laptop, 5 years, EUR 300 residual,
in service 1 June 2024) and its disposal, partial business use, January
starts and one-year terms.
"""

from datetime import date
from decimal import Decimal

import pytest

from bookkeeping_engines.depreciation import DepreciationCalculator, ScheduleLine


# =============================================================================
# Reference purchase
# =============================================================================


class TestReferencePurchase:

    def test_annual_depreciation(self, calculator, make_asset):
        assert calculator.annual_depreciation(make_asset()) == Decimal("540")

    def test_depreciable_amounts(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.depreciable_amount(asset) == Decimal("2700")
        assert calculator.business_depreciable_amount(asset) == Decimal("2700")
        assert calculator.residual_floor(asset) == Decimal("300")

    @pytest.mark.parametrize(
        "year, expected",
        [
            (2023, Decimal("0")),
            (2024, Decimal("315")),
            (2025, Decimal("540")),
            (2026, Decimal("540")),
            (2027, Decimal("540")),
            (2028, Decimal("540")),
            (2029, Decimal("225")),
            (2030, Decimal("0")),
        ],
    )
    def test_depreciation_for_year(self, calculator, make_asset, year, expected):
        assert calculator.depreciation_for_year(make_asset(), year) == expected

    def test_year_amounts_sum_to_depreciable_amount(self, calculator, make_asset):
        asset = make_asset()
        total = sum(calculator.depreciation_for_year(asset, y) for y in range(2024, 2030))
        assert total == Decimal("2700")

    def test_schedule_years(self, calculator, make_asset):
        assert calculator.schedule_years(make_asset()) == (2024, 2029)

    def test_book_value_on_in_service_date(self, calculator, make_asset):
        assert calculator.book_value(make_asset(), date(2024, 6, 1)) == Decimal("3000")

    def test_book_value_before_in_service_date(self, calculator, make_asset):
        assert calculator.book_value(make_asset(), date(2024, 1, 15)) == Decimal("3000")

    def test_in_service_month_counts_once_ended(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.months_accrued(asset, date(2024, 6, 29)) == 0
        assert calculator.months_accrued(asset, date(2024, 6, 30)) == 1
        assert calculator.depreciation_to_date(asset, date(2024, 6, 30)) == Decimal("45")

    def test_book_value_at_year_ends(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.book_value(asset, date(2024, 12, 31)) == Decimal("2685")
        assert calculator.book_value(asset, date(2025, 12, 31)) == Decimal("2145")
        assert calculator.book_value(asset, date(2026, 12, 31)) == Decimal("1605")

    def test_book_value_reaches_residual_at_end_of_term(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.book_value(asset, date(2029, 5, 31)) == Decimal("300")
        assert calculator.book_value(asset, date(2035, 1, 1)) == Decimal("300")

    def test_depreciation_to_date_capped(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.months_accrued(asset, date(2040, 1, 1)) == 60
        assert calculator.depreciation_to_date(asset, date(2040, 1, 1)) == Decimal("2700")

    def test_latest_representable_date(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.months_accrued(asset, date.max) == 60
        assert calculator.book_value(asset, date.max) == Decimal("300")

    def test_years_in_use_uses_anniversaries(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.years_in_use(asset, date(2024, 5, 1)) == 0
        assert calculator.years_in_use(asset, date(2025, 5, 31)) == 0
        assert calculator.years_in_use(asset, date(2025, 6, 1)) == 1
        assert calculator.years_in_use(asset, date(2029, 6, 1)) == 5

    def test_fully_depreciated_flag(self, calculator, make_asset):
        asset = make_asset()
        assert not calculator.is_fully_depreciated(asset, date(2029, 5, 31))
        assert calculator.is_fully_depreciated(asset, date(2029, 6, 1))
        assert calculator.remaining_years(asset, date(2026, 6, 1)) == 3
        assert calculator.remaining_years(asset, date(2031, 1, 1)) == 0


# =============================================================================
# Disposal
# =============================================================================


class TestDisposedAsset:

    @pytest.fixture
    def disposed(self, make_asset):
        return make_asset(disposal_date=date(2026, 12, 31), is_active=False)

    def test_no_depreciation_after_disposal_year(self, calculator, disposed):
        assert calculator.depreciation_for_year(disposed, 2027) == Decimal("0")
        assert calculator.depreciation_for_year(disposed, 2029) == Decimal("0")

    def test_disposal_year_keeps_scheduled_amount(self, calculator, disposed):
        assert calculator.depreciation_for_year(disposed, 2026) == Decimal("540")

    @pytest.mark.parametrize(
        "as_of",
        [date(2026, 12, 31), date(2027, 1, 1), date(2027, 6, 30), date(2031, 12, 31)],
    )
    def test_book_value_frozen(self, calculator, disposed, as_of):
        assert calculator.book_value(disposed, as_of) == Decimal("1605")
        assert calculator.depreciation_to_date(disposed, as_of) == Decimal("1395")

    def test_years_in_use_stops_at_disposal(self, calculator, disposed):
        assert calculator.years_in_use(disposed, date(2035, 1, 1)) == 2
        assert not calculator.is_fully_depreciated(disposed, date(2035, 1, 1))

    def test_disposal_result_without_proceeds(self, calculator, disposed):
        result = calculator.disposal_result(disposed)
        assert result.book_value_at_disposal == Decimal("1605.00")
        assert result.proceeds == Decimal("0.00")
        assert result.gain_loss == Decimal("-1605.00")
        assert not result.is_gain

    def test_disposal_result_with_gain(self, calculator, make_asset):
        asset = make_asset(
            disposal_date=date(2026, 12, 31),
            disposal_value=Decimal("1800"),
            is_active=False,
        )
        result = calculator.disposal_result(asset)
        assert result.gain_loss == Decimal("195.00")
        assert result.is_gain

    def test_disposal_result_for_active_asset(self, calculator, make_asset):
        assert calculator.disposal_result(make_asset()) is None


# =============================================================================
# Business use
# =============================================================================


class TestBusinessUse:

    def test_zero_business_use(self, calculator, make_asset):
        asset = make_asset(business_use_percentage=Decimal("0"))
        assert calculator.annual_depreciation(asset) == Decimal("0")
        for as_of in (date(2024, 6, 1), date(2026, 1, 1), date(2040, 1, 1)):
            assert calculator.book_value(asset, as_of) == Decimal("0")

    def test_partial_business_use(self, calculator, make_asset):
        asset = make_asset(business_use_percentage=Decimal("80"))
        assert calculator.annual_depreciation(asset) == Decimal("432")
        assert calculator.depreciation_for_year(asset, 2024) == Decimal("252")
        assert calculator.book_value(asset, date(2024, 6, 1)) == Decimal("2400")
        assert calculator.book_value(asset, date(2040, 1, 1)) == Decimal("240")


# =============================================================================
# Schedule shapes
# =============================================================================


class TestScheduleShapes:

    def test_january_start_has_no_trailing_year(self, calculator, make_asset):
        asset = make_asset(purchase_date=date(2024, 1, 1))
        assert calculator.schedule_years(asset) == (2024, 2028)
        amounts = [calculator.depreciation_for_year(asset, y) for y in range(2024, 2030)]
        assert amounts == [Decimal("540")] * 5 + [Decimal("0")]

    def test_december_start(self, calculator, make_asset):
        asset = make_asset(purchase_date=date(2024, 12, 15))
        assert calculator.depreciation_for_year(asset, 2024) == Decimal("45")
        assert calculator.depreciation_for_year(asset, 2029) == Decimal("495")

    def test_one_year_term_booked_in_service_year(self, calculator, make_asset):
        asset = make_asset(depreciation_years=1)
        assert calculator.schedule_years(asset) == (2024, 2024)
        assert calculator.depreciation_for_year(asset, 2024) == Decimal("2700")
        assert calculator.depreciation_for_year(asset, 2025) == Decimal("0")

    def test_in_service_date_drives_schedule(self, calculator, make_asset):
        asset = make_asset(purchase_date=date(2024, 5, 20), in_service_date=date(2024, 6, 1))
        assert calculator.depreciation_for_year(asset, 2024) == Decimal("315")

    def test_zero_depreciable_amount(self, calculator, make_asset):
        asset = make_asset(residual_value=Decimal("3000"))
        assert calculator.annual_depreciation(asset) == Decimal("0")
        assert calculator.book_value(asset, date(2030, 1, 1)) == Decimal("3000")


# =============================================================================
# Display schedule
# =============================================================================


class TestDepreciationSchedule:

    def test_reference_schedule(self, calculator, make_asset):
        lines = calculator.depreciation_schedule(make_asset())
        assert [line.year for line in lines] == list(range(2024, 2030))
        assert lines[0] == ScheduleLine(
            year=2024,
            amount=Decimal("315.00"),
            accumulated=Decimal("315.00"),
            book_value=Decimal("2685.00"),
        )
        assert lines[-1].accumulated == Decimal("2700.00")
        assert lines[-1].book_value == Decimal("300.00")

    def test_rounded_amounts_add_up(self, calculator, make_asset):
        asset = make_asset(
            purchase_date=date(2024, 1, 1),
            purchase_value=Decimal("1000"),
            residual_value=Decimal("0"),
            depreciation_years=3,
        )
        lines = calculator.depreciation_schedule(asset)
        assert [line.amount for line in lines] == [
            Decimal("333.33"),
            Decimal("333.34"),
            Decimal("333.33"),
        ]
        assert sum(line.amount for line in lines) == Decimal("1000.00")

    def test_schedule_truncated_at_disposal(self, calculator, make_asset):
        asset = make_asset(disposal_date=date(2026, 12, 31), is_active=False)
        lines = calculator.depreciation_schedule(asset)
        assert [line.year for line in lines] == [2024, 2025, 2026]
        assert lines[-1].book_value == Decimal("1605.00")

    def test_mid_year_disposal_line_matches_disposal_result(self, calculator, make_asset):
        asset = make_asset(disposal_date=date(2025, 3, 15), is_active=False)
        lines = calculator.depreciation_schedule(asset)
        assert lines == [
            ScheduleLine(2024, Decimal("315.00"), Decimal("315.00"), Decimal("2685.00")),
            ScheduleLine(2025, Decimal("90.00"), Decimal("405.00"), Decimal("2595.00")),
        ]
        assert lines[-1].book_value == calculator.disposal_result(asset).book_value_at_disposal

    def test_currency_without_minor_unit(self, make_asset):
        calculator = DepreciationCalculator(decimal_places=0)
        asset = make_asset(
            purchase_date=date(2024, 1, 1),
            purchase_value=Decimal("1000"),
            residual_value=Decimal("0"),
            depreciation_years=3,
        )
        assert calculator.round_money(calculator.annual_depreciation(asset)) == Decimal("333")


class TestNoCaching:

    def test_edits_are_reflected_immediately(self, calculator, make_asset):
        asset = make_asset()
        assert calculator.annual_depreciation(asset) == Decimal("540")
        asset.update(residual_value=Decimal("0"))
        assert calculator.annual_depreciation(asset) == Decimal("600")
