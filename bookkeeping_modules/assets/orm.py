"""
Fixed Assets ORM Models (``bookkeeping_modules.assets.orm``).

Responsibility
--------------
SQLAlchemy persistence model for ``AssetRecord``.  Maps the mutable domain
dataclass from ``models.py`` to a database table for the persistence
collaborator.

Architecture position
---------------------
**Modules layer** -- persistence.  Imports from ``bookkeeping_kernel.db.base``
and sibling ``models.py``.  MUST NOT be imported by the kernel or engines.

Invariants enforced
-------------------
* ``expense_id`` is a plain column: no foreign key, no relationship, no
  cascade.  Deleting either side never deletes the other.
* Monetary columns are stored losslessly (``DecimalString``).
* Depreciation figures are never stored; they are always derived.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookkeeping_kernel.db.base import TrackedBase


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo; audit timestamps are always written in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# AssetRecordModel
# ---------------------------------------------------------------------------

class AssetRecordModel(TrackedBase):
    """
    ORM model for ``AssetRecord`` -- one capitalised business purchase.

    Table: ``assets_records``
    """

    __tablename__ = "assets_records"

    name: Mapped[str] = mapped_column(String(300))
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(50), default="other")
    supplier: Mapped[str | None] = mapped_column(String(200), nullable=True)
    supplier_invoice_number: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    document_path: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    purchase_date: Mapped[date]
    in_service_date: Mapped[date]
    purchase_value: Mapped[Decimal]
    vat_amount: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    residual_value: Mapped[Decimal] = mapped_column(default=Decimal("0"))
    business_use_percentage: Mapped[Decimal] = mapped_column(default=Decimal("100"))
    depreciation_years: Mapped[int]

    is_active: Mapped[bool] = mapped_column(default=True)
    disposal_date: Mapped[date | None]
    disposal_value: Mapped[Decimal | None]
    disposal_reason: Mapped[str | None] = mapped_column(String(50), nullable=True)

    expense_id: Mapped[UUID | None]

    __table_args__ = (
        Index("idx_assets_records_category", "category"),
        Index("idx_assets_records_is_active", "is_active"),
        Index("idx_assets_records_purchase_date", "purchase_date"),
        Index("idx_assets_records_expense_id", "expense_id"),
    )

    def to_dto(self, minimum_years: int = 1):
        from bookkeeping_modules.assets.models import AssetCategory, AssetRecord, DisposalReason
        return AssetRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            category=AssetCategory(self.category),
            supplier=self.supplier,
            supplier_invoice_number=self.supplier_invoice_number,
            document_path=self.document_path,
            notes=self.notes,
            purchase_date=self.purchase_date,
            in_service_date=self.in_service_date,
            purchase_value=self.purchase_value,
            vat_amount=self.vat_amount,
            residual_value=self.residual_value,
            business_use_percentage=self.business_use_percentage,
            depreciation_years=self.depreciation_years,
            is_active=self.is_active,
            disposal_date=self.disposal_date,
            disposal_value=self.disposal_value,
            disposal_reason=(
                DisposalReason(self.disposal_reason) if self.disposal_reason else None
            ),
            expense_id=self.expense_id,
            created_at=_aware(self.created_at),
            updated_at=_aware(self.updated_at),
            minimum_years=minimum_years,
        )

    @classmethod
    def from_dto(cls, dto) -> "AssetRecordModel":
        model = cls(id=dto.id)
        model.apply_dto(dto)
        return model

    def apply_dto(self, dto) -> None:
        """Copy every persisted field from the domain record."""
        self.name = dto.name
        self.description = dto.description
        self.category = dto.category.value
        self.supplier = dto.supplier
        self.supplier_invoice_number = dto.supplier_invoice_number
        self.document_path = dto.document_path
        self.notes = dto.notes
        self.purchase_date = dto.purchase_date
        self.in_service_date = dto.in_service_date
        self.purchase_value = dto.purchase_value
        self.vat_amount = dto.vat_amount
        self.residual_value = dto.residual_value
        self.business_use_percentage = dto.business_use_percentage
        self.depreciation_years = dto.depreciation_years
        self.is_active = dto.is_active
        self.disposal_date = dto.disposal_date
        self.disposal_value = dto.disposal_value
        self.disposal_reason = dto.disposal_reason.value if dto.disposal_reason else None
        self.expense_id = dto.expense_id
        self.created_at = dto.created_at
        self.updated_at = dto.updated_at

    def __repr__(self) -> str:
        return (
            f"<AssetRecordModel(id={self.id!r}, name={self.name!r}, "
            f"category={self.category!r})>"
        )
