"""
Eligibility Policy (``bookkeeping_modules.assets.policy``).

Responsibility
--------------
Decides whether a purchase is capitalised or direct-expensed and supplies
the defaults a new ``AssetRecord`` is seeded with: residual value and
depreciation term.

Architecture position
---------------------
**Modules layer** -- pure rules.  No I/O, no clock, no session.  All
thresholds come from an explicit ``DepreciationConfig``.

Invariants enforced
-------------------
* ``validate_depreciation_years`` only ever raises a term to the minimum;
  it never lowers a higher user-supplied value.
* Default residual value is rounded half-up to the currency minor unit.

Failure modes
-------------
* None.  Negative inputs are a caller contract violation.
"""

from __future__ import annotations

from decimal import Decimal

from bookkeeping_kernel.domain.values import round_money
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_modules.assets.config import DepreciationConfig
from bookkeeping_modules.assets.models import AssetCategory

logger = get_logger("modules.assets.policy")


class EligibilityPolicy:
    """
    Capitalisation and default rules for depreciable assets.

    Usage::

        policy = EligibilityPolicy(DepreciationConfig.with_defaults())
        if policy.qualifies_for_depreciation(Decimal("1200")):
            residual = policy.default_residual_value(Decimal("1200"))  # 120.00
    """

    def __init__(self, config: DepreciationConfig | None = None):
        self.config = config or DepreciationConfig.with_defaults()

    @property
    def minimum_years(self) -> int:
        """Effective minimum term, never below one year."""
        return max(1, self.config.minimum_depreciation_years)

    def qualifies_for_depreciation(
        self,
        amount: Decimal,
        threshold: Decimal | None = None,
    ) -> bool:
        """True iff ``amount`` is at or above the capitalisation threshold."""
        if threshold is None:
            threshold = self.config.capitalization_threshold
        return amount >= threshold

    def default_residual_value(self, purchase_value: Decimal) -> Decimal:
        """``purchase_value`` times the default residual fraction, rounded half-up."""
        return round_money(
            purchase_value * self.config.default_residual_fraction,
            self.config.currency_decimal_places,
        )

    def validate_depreciation_years(
        self,
        requested: int,
        minimum_years: int | None = None,
    ) -> int:
        """Raise ``requested`` to the minimum term if it falls short."""
        if minimum_years is None:
            minimum_years = self.minimum_years
        validated = max(requested, minimum_years)
        if validated != requested:
            logger.info(
                "depreciation_years_raised_to_minimum",
                extra={"requested": requested, "minimum_years": minimum_years},
            )
        return validated

    def default_years_for(self, category: AssetCategory) -> int:
        """Category default term, clamped to the minimum."""
        return self.validate_depreciation_years(AssetCategory(category).default_years)
