"""
Fixed Assets Domain Models.

The nouns of fixed assets: asset records, categories, disposals, and the
purchase data handed over by the expense collaborator.
"""

from __future__ import annotations

import dataclasses
from dataclasses import InitVar, dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.values import ONE_HUNDRED, ZERO, to_decimal
from bookkeeping_kernel.exceptions import InvalidAssetDataError
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("modules.assets.models")


class AssetCategory(str, Enum):
    """Closed set of asset categories."""
    COMPUTER = "computer"
    PHONE = "phone"
    OFFICE_FURNISHING = "office_furnishing"
    MEDICAL_EQUIPMENT = "medical_equipment"
    VEHICLE = "vehicle"
    SOFTWARE_LICENSE = "software_license"
    TOOLING = "tooling"
    OTHER = "other"

    @property
    def default_years(self) -> int:
        """Default depreciation term for the category."""
        return CATEGORY_DEFAULT_YEARS[self]

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self]


CATEGORY_DEFAULT_YEARS: dict[AssetCategory, int] = {
    AssetCategory.COMPUTER: 5,
    AssetCategory.PHONE: 5,
    AssetCategory.OFFICE_FURNISHING: 7,
    AssetCategory.MEDICAL_EQUIPMENT: 5,
    AssetCategory.VEHICLE: 5,
    AssetCategory.SOFTWARE_LICENSE: 5,
    AssetCategory.TOOLING: 7,
    AssetCategory.OTHER: 5,
}

CATEGORY_DISPLAY_NAMES: dict[AssetCategory, str] = {
    AssetCategory.COMPUTER: "Computer/Laptop",
    AssetCategory.PHONE: "Phone/Tablet",
    AssetCategory.OFFICE_FURNISHING: "Office furnishing",
    AssetCategory.MEDICAL_EQUIPMENT: "Medical equipment",
    AssetCategory.VEHICLE: "Vehicle",
    AssetCategory.SOFTWARE_LICENSE: "Software licenses",
    AssetCategory.TOOLING: "Tooling",
    AssetCategory.OTHER: "Other business assets",
}


class AssetStatus(str, Enum):
    """Asset lifecycle states. DISPOSED is terminal."""
    ACTIVE = "active"
    DISPOSED = "disposed"


class DisposalReason(str, Enum):
    """Why an asset left the books."""
    SOLD = "sold"
    SCRAPPED = "scrapped"
    PRIVATE_USE = "private_use"
    OTHER = "other"


# Only DisposalHandler may write these.
LIFECYCLE_FIELDS = frozenset(
    {"is_active", "disposal_date", "disposal_value", "disposal_reason"}
)
# minimum_years comes from the policy when the record is built or loaded.
IMMUTABLE_FIELDS = frozenset({"id", "created_at", "updated_at", "minimum_years"})

_MONETARY_FIELDS = ("purchase_value", "vat_amount", "residual_value", "business_use_percentage")


@dataclass(frozen=True)
class Purchase:
    """
    A business purchase as supplied by the expense collaborator.

    ``amount`` is VAT-exclusive; ``vat_amount`` is informational only.
    """
    expense_id: UUID | None
    description: str
    amount: Decimal
    purchase_date: date
    vat_amount: Decimal = ZERO
    supplier: str | None = None
    invoice_number: str | None = None
    business_use_percentage: Decimal = ONE_HUNDRED
    category: AssetCategory = AssetCategory.OTHER
    document_path: str | None = None


@dataclass
class AssetRecord:
    """
    One capitalised business purchase.

    Depreciation figures are never stored here; they are derived on demand
    by ``bookkeeping_engines.depreciation.DepreciationCalculator``.

    Invariants (checked on construction and on ``update``):
        - 0 <= residual_value <= purchase_value, vat_amount >= 0
        - depreciation_years >= max(1, minimum_years)
        - 0 <= business_use_percentage <= 100
        - disposal_date, if set, is on or after in_service_date
        - a disposed asset is never active
    """
    name: str
    purchase_date: date
    purchase_value: Decimal
    id: UUID = field(default_factory=uuid4)
    description: str | None = None
    category: AssetCategory = AssetCategory.OTHER
    supplier: str | None = None
    supplier_invoice_number: str | None = None
    document_path: str | None = None
    notes: str | None = None
    in_service_date: date | None = None
    vat_amount: Decimal = ZERO
    residual_value: Decimal = ZERO
    business_use_percentage: Decimal = ONE_HUNDRED
    depreciation_years: int = 5
    is_active: bool = True
    disposal_date: date | None = None
    disposal_value: Decimal | None = None
    disposal_reason: DisposalReason | None = None
    expense_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    minimum_years: int = field(default=1, repr=False, compare=False)
    clock: InitVar[Clock | None] = None

    def __post_init__(self, clock: Clock | None) -> None:
        if self.in_service_date is None:
            self.in_service_date = self.purchase_date
        self._coerce()
        self._validate()
        if self.created_at is None:
            self.created_at = (clock or SystemClock()).now()
        if self.updated_at is None:
            self.updated_at = self.created_at

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def status(self) -> AssetStatus:
        return AssetStatus.DISPOSED if self.is_disposed else AssetStatus.ACTIVE

    @property
    def is_disposed(self) -> bool:
        return self.disposal_date is not None

    @property
    def display_name(self) -> str:
        return f"{self.name} ({self.category.display_name})"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, clock: Clock | None = None, **changes: Any) -> AssetRecord:
        """
        Apply an edit from the form layer.

        All changes are validated together against a candidate copy before
        any of them is applied, so a rejected edit leaves the record
        untouched.  Lifecycle fields are owned by ``DisposalHandler``.

        Raises:
            InvalidAssetDataError: unknown or protected field, or any
                invariant violation.
        """
        known = {f.name for f in dataclasses.fields(self)}
        for name in changes:
            if name not in known:
                raise InvalidAssetDataError(name, "unknown field")
            if name in IMMUTABLE_FIELDS:
                raise InvalidAssetDataError(name, "field cannot be edited")
            if name in LIFECYCLE_FIELDS:
                raise InvalidAssetDataError(
                    name, "lifecycle fields change only through disposal",
                )

        candidate = dataclasses.replace(self, **changes)
        for name in known:
            setattr(self, name, getattr(candidate, name))
        self.touch(clock)

        logger.debug(
            "asset_updated",
            extra={"asset_id": str(self.id), "fields": sorted(changes)},
        )
        return self

    def touch(self, clock: Clock | None = None) -> None:
        """Refresh the audit timestamp."""
        self.updated_at = (clock or SystemClock()).now()

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def _coerce(self) -> None:
        for name in _MONETARY_FIELDS:
            try:
                setattr(self, name, to_decimal(getattr(self, name), field=name))
            except (TypeError, ValueError) as e:
                raise InvalidAssetDataError(name, str(e), getattr(self, name)) from e

        if self.disposal_value is not None:
            try:
                self.disposal_value = to_decimal(self.disposal_value, field="disposal_value")
            except (TypeError, ValueError) as e:
                raise InvalidAssetDataError("disposal_value", str(e), self.disposal_value) from e

        try:
            self.category = AssetCategory(self.category)
        except ValueError as e:
            raise InvalidAssetDataError("category", "unknown category", self.category) from e

        if self.disposal_reason is not None:
            try:
                self.disposal_reason = DisposalReason(self.disposal_reason)
            except ValueError as e:
                raise InvalidAssetDataError(
                    "disposal_reason", "unknown disposal reason", self.disposal_reason,
                ) from e

    def _validate(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidAssetDataError("name", "must not be empty", self.name)

        if self.purchase_value < ZERO:
            raise InvalidAssetDataError(
                "purchase_value", "must not be negative", self.purchase_value,
            )
        if self.vat_amount < ZERO:
            raise InvalidAssetDataError(
                "vat_amount", "must not be negative", self.vat_amount,
            )
        if self.residual_value < ZERO:
            raise InvalidAssetDataError(
                "residual_value", "must not be negative", self.residual_value,
            )
        if self.residual_value > self.purchase_value:
            raise InvalidAssetDataError(
                "residual_value", "must not exceed purchase_value", self.residual_value,
            )
        if not ZERO <= self.business_use_percentage <= ONE_HUNDRED:
            raise InvalidAssetDataError(
                "business_use_percentage",
                "must be between 0 and 100",
                self.business_use_percentage,
            )

        if isinstance(self.depreciation_years, bool) or not isinstance(
            self.depreciation_years, int
        ):
            raise InvalidAssetDataError(
                "depreciation_years", "must be an integer", self.depreciation_years,
            )
        required = max(1, self.minimum_years)
        if self.depreciation_years < required:
            raise InvalidAssetDataError(
                "depreciation_years",
                f"must be at least {required}",
                self.depreciation_years,
            )

        if self.disposal_date is not None:
            if self.disposal_date < self.in_service_date:
                raise InvalidAssetDataError(
                    "disposal_date",
                    "must not be before in_service_date",
                    self.disposal_date,
                )
            if self.is_active:
                raise InvalidAssetDataError(
                    "is_active", "a disposed asset cannot be active", self.is_active,
                )
        else:
            if not self.is_active:
                raise InvalidAssetDataError(
                    "is_active",
                    "only a disposed asset can be inactive",
                    self.is_active,
                )
            if self.disposal_value is not None:
                raise InvalidAssetDataError(
                    "disposal_value",
                    "requires a disposal_date",
                    self.disposal_value,
                )
            if self.disposal_reason is not None:
                raise InvalidAssetDataError(
                    "disposal_reason",
                    "requires a disposal_date",
                    self.disposal_reason,
                )
        if self.disposal_value is not None and self.disposal_value < ZERO:
            raise InvalidAssetDataError(
                "disposal_value", "must not be negative", self.disposal_value,
            )
