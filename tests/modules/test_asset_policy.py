"""Tests for EligibilityPolicy (bookkeeping_modules/assets/policy.py)."""

from decimal import Decimal

import pytest

from bookkeeping_modules.assets.config import DepreciationConfig
from bookkeeping_modules.assets.models import AssetCategory
from bookkeeping_modules.assets.policy import EligibilityPolicy


@pytest.fixture
def policy(config):
    return EligibilityPolicy(config)


class TestQualifiesForDepreciation:

    def test_below_threshold_is_expensed(self, policy):
        assert not policy.qualifies_for_depreciation(Decimal("400"), Decimal("450"))

    def test_threshold_is_inclusive(self, policy):
        assert policy.qualifies_for_depreciation(Decimal("450"))
        assert not policy.qualifies_for_depreciation(Decimal("449.99"))

    def test_explicit_threshold_overrides_config(self, policy):
        assert policy.qualifies_for_depreciation(Decimal("300"), Decimal("250"))

    def test_configured_threshold(self):
        policy = EligibilityPolicy(
            DepreciationConfig(capitalization_threshold=Decimal("1000"))
        )
        assert not policy.qualifies_for_depreciation(Decimal("999"))


class TestDefaults:

    @pytest.mark.parametrize(
        "purchase, expected",
        [
            (Decimal("3000"), Decimal("300.00")),
            (Decimal("1234.55"), Decimal("123.46")),
            (Decimal("0"), Decimal("0.00")),
        ],
    )
    def test_default_residual_value(self, policy, purchase, expected):
        assert policy.default_residual_value(purchase) == expected

    def test_validate_raises_short_terms(self, policy):
        assert policy.validate_depreciation_years(3) == 5

    def test_validate_keeps_longer_terms(self, policy):
        assert policy.validate_depreciation_years(8) == 8

    def test_validate_explicit_minimum(self, policy):
        assert policy.validate_depreciation_years(2, minimum_years=3) == 3

    def test_raise_is_logged(self, policy, captured_logs):
        policy.validate_depreciation_years(2)
        raised = [
            r for r in captured_logs()
            if r["message"] == "depreciation_years_raised_to_minimum"
        ]
        assert raised[0]["requested"] == 2
        assert raised[0]["minimum_years"] == 5

    def test_category_defaults(self, policy):
        assert policy.default_years_for(AssetCategory.COMPUTER) == 5
        assert policy.default_years_for(AssetCategory.OFFICE_FURNISHING) == 7

    def test_category_default_raised_to_minimum(self):
        policy = EligibilityPolicy(DepreciationConfig(minimum_depreciation_years=6))
        assert policy.default_years_for(AssetCategory.COMPUTER) == 6
        assert policy.default_years_for(AssetCategory.TOOLING) == 7
