"""
Fixed Assets Module Service (``bookkeeping_modules.assets.service``).

Responsibility
--------------
Orchestrates the asset lifecycle for the UI and report collaborators:
capitalising a flagged purchase, manual registration, validated edits,
disposal, deletion with expense unlinking, and the year-scoped report
figures.  Pure computation is delegated to ``bookkeeping_engines``; storage
to an ``AssetRepository``.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``FixedAssetService`` is the public entry
point for asset operations.  It composes the stateless
``EligibilityPolicy``, ``DepreciationCalculator`` and ``AssetPortfolio``
and the one stateful ``DisposalHandler``.

Invariants enforced
-------------------
* Below-threshold purchases never become assets.
* VAT is never part of the depreciable base.
* Depreciation terms pass through ``validate_depreciation_years``.
* The expense back-reference is id-only; deleting an asset only returns the
  id so the expense collaborator can clear its own side.

Failure modes
-------------
* ``InvalidAssetDataError`` / ``AlreadyDisposedError`` from the domain,
  re-raised unchanged after logging.
* ``AssetNotFoundError`` from the repository.

Usage::

    service = FixedAssetService(InMemoryAssetRepository(), config, clock)
    asset = service.capitalize_purchase(purchase)
    summary = service.annual_report(2025)
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any
from uuid import UUID

from bookkeeping_engines.depreciation import DepreciationCalculator
from bookkeeping_engines.portfolio import AnnualDepreciationSummary, AssetPortfolio
from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.values import to_decimal
from bookkeeping_kernel.exceptions import AssetError
from bookkeeping_kernel.logging_config import LogContext, get_logger
from bookkeeping_modules.assets.config import DepreciationConfig
from bookkeeping_modules.assets.disposal import DisposalHandler
from bookkeeping_modules.assets.models import (
    AssetCategory,
    AssetRecord,
    DisposalReason,
    Purchase,
)
from bookkeeping_modules.assets.policy import EligibilityPolicy
from bookkeeping_modules.assets.repository import AssetRepository

logger = get_logger("modules.assets.service")


class FixedAssetService:
    """
    Facade over policy, calculator, portfolio, disposal and storage.

    Contract
    --------
    * Every mutating method persists through the repository before it
      returns.  Transaction boundaries belong to the caller (for the
      SQLAlchemy repository: the session scope).
    * Read methods are pure over the repository contents.

    Non-goals
    ---------
    * Does NOT own the expense record; it only reports ids to unlink.
    """

    def __init__(
        self,
        repository: AssetRepository,
        config: DepreciationConfig | None = None,
        clock: Clock | None = None,
    ):
        self._repository = repository
        self._config = config or DepreciationConfig.with_defaults()
        self._clock = clock or SystemClock()

        self.policy = EligibilityPolicy(self._config)
        self.calculator = DepreciationCalculator(self._config.currency_decimal_places)
        self.portfolio = AssetPortfolio(self.calculator)
        self._disposal = DisposalHandler(self._clock)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def capitalize_purchase(self, purchase: Purchase) -> AssetRecord | None:
        """
        Turn a flagged expense into an asset when it clears the threshold.

        Returns ``None`` for purchases that are direct-expensed.
        """
        amount = to_decimal(purchase.amount, field="amount")
        with LogContext.bind(expense_id=purchase.expense_id):
            if not self.policy.qualifies_for_depreciation(amount):
                logger.info(
                    "purchase_direct_expensed",
                    extra={
                        "amount": str(amount),
                        "threshold": str(self._config.capitalization_threshold),
                    },
                )
                return None

            asset = self._build(
                name=purchase.description,
                purchase_date=purchase.purchase_date,
                purchase_value=amount,
                vat_amount=purchase.vat_amount,
                residual_value=self.policy.default_residual_value(amount),
                depreciation_years=self.policy.default_years_for(purchase.category),
                category=purchase.category,
                supplier=purchase.supplier,
                supplier_invoice_number=purchase.invoice_number,
                business_use_percentage=purchase.business_use_percentage,
                document_path=purchase.document_path,
                expense_id=purchase.expense_id,
            )
            self._repository.add(asset)
            logger.info(
                "purchase_capitalized",
                extra={
                    "asset_id": str(asset.id),
                    "purchase_value": str(asset.purchase_value),
                    "residual_value": str(asset.residual_value),
                    "depreciation_years": asset.depreciation_years,
                },
            )
            return asset

    def register_asset(
        self,
        name: str,
        purchase_date: date,
        purchase_value: Decimal | str | int,
        *,
        residual_value: Decimal | str | int | None = None,
        depreciation_years: int | None = None,
        category: AssetCategory = AssetCategory.OTHER,
        **fields: Any,
    ) -> AssetRecord:
        """
        Manually enter an asset.

        Missing residual value and term are filled from the policy; a
        supplied term is raised to the minimum, never lowered.
        """
        value = to_decimal(purchase_value, field="purchase_value")
        if residual_value is None:
            residual_value = self.policy.default_residual_value(value)
        if depreciation_years is None:
            depreciation_years = self.policy.default_years_for(category)
        else:
            depreciation_years = self.policy.validate_depreciation_years(depreciation_years)

        asset = self._build(
            name=name,
            purchase_date=purchase_date,
            purchase_value=value,
            residual_value=residual_value,
            depreciation_years=depreciation_years,
            category=category,
            **fields,
        )
        self._repository.add(asset)
        logger.info(
            "asset_registered",
            extra={
                "asset_id": str(asset.id),
                "purchase_value": str(asset.purchase_value),
                "depreciation_years": asset.depreciation_years,
            },
        )
        return asset

    def _build(self, **fields: Any) -> AssetRecord:
        try:
            return AssetRecord(
                minimum_years=self.policy.minimum_years,
                clock=self._clock,
                **fields,
            )
        except AssetError as e:
            logger.warning(
                "asset_rejected",
                extra={"error_code": e.code, "reason": str(e)},
            )
            raise

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update_asset(self, asset_id: UUID, **changes: Any) -> AssetRecord:
        """Validated edit from the form layer."""
        asset = self._repository.get(asset_id)
        if "depreciation_years" in changes:
            changes["depreciation_years"] = self.policy.validate_depreciation_years(
                changes["depreciation_years"]
            )
        with LogContext.bind(asset_id=asset_id):
            try:
                asset.update(self._clock, **changes)
            except AssetError as e:
                logger.warning(
                    "asset_update_rejected",
                    extra={"error_code": e.code, "reason": str(e)},
                )
                raise
            self._repository.update(asset)
            logger.info("asset_updated", extra={"fields": sorted(changes)})
        return asset

    def dispose_asset(
        self,
        asset_id: UUID,
        disposal_date: date,
        sale_value: Decimal | str | int | None = None,
        reason: DisposalReason | str | None = None,
    ) -> AssetRecord:
        """Dispose a stored asset; the transition is terminal."""
        asset = self._repository.get(asset_id)
        with LogContext.bind(asset_id=asset_id):
            self._disposal.dispose(asset, disposal_date, sale_value, reason)
            self._repository.update(asset)
        return asset

    def unlink_expense(self, asset_id: UUID) -> UUID | None:
        """Clear the expense back-reference and return the old expense id."""
        asset = self._repository.get(asset_id)
        expense_id = asset.expense_id
        if expense_id is not None:
            asset.expense_id = None
            asset.touch(self._clock)
            self._repository.update(asset)
            logger.info(
                "asset_expense_unlinked",
                extra={"asset_id": str(asset_id), "expense_id": str(expense_id)},
            )
        return expense_id

    def delete_asset(self, asset_id: UUID) -> UUID | None:
        """
        Delete the asset record only.

        Returns the id of the originating expense (if any) so the expense
        collaborator can clear its own link; the expense is not deleted.
        """
        asset = self._repository.get(asset_id)
        self._repository.delete(asset_id)
        logger.info(
            "asset_deleted",
            extra={
                "asset_id": str(asset_id),
                "expense_id": str(asset.expense_id) if asset.expense_id else None,
            },
        )
        return asset.expense_id

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def get_asset(self, asset_id: UUID) -> AssetRecord:
        return self._repository.get(asset_id)

    def annual_report(self, year: int) -> AnnualDepreciationSummary:
        """
        Depreciation and investment figures for the tax year.

        Covers every asset in service during the year: those bought in or
        before ``year`` and not disposed before it started.
        """
        held = [
            a for a in self._repository.list_all()
            if a.purchase_date.year <= year
            and (a.disposal_date is None or a.disposal_date.year >= year)
        ]
        return self.portfolio.annual_summary(held, year)

    def assets_due_for_review(self, as_of: date | None = None) -> list[AssetRecord]:
        """Active assets whose term has fully elapsed."""
        as_of = as_of or self._clock.today()
        return self.portfolio.fully_depreciated(self._repository.list_active(), as_of)
