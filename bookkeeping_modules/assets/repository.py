"""
Asset Repositories (``bookkeeping_modules.assets.repository``).

Responsibility
--------------
The persistence collaborator's contract for ``AssetRecord``: create, read,
update, delete, and the three list queries the application needs (active,
by category, by purchase year), plus lookup by originating expense.

Architecture position
---------------------
**Modules layer** -- persistence adapters.  The depreciation engine works
on in-memory records only; these adapters are what the surrounding
application uses to load and store them.

Invariants enforced
-------------------
* Records are copied on the way in and out, so a caller mutating a loaded
  record does not change stored state until ``update`` is called.
* ``SqlAlchemyAssetRepository`` never commits or rolls back: the caller owns
  the session and its transaction scope.
* Deleting an asset never touches the expense it references.

Failure modes
-------------
* ``AssetNotFoundError`` from ``get``, ``update`` and ``delete`` for an
  unknown id.
* ``InvalidAssetDataError`` (field ``id``) from ``add`` when a record with
  the same id is already stored; the stored record is left unchanged.
"""

from __future__ import annotations

import copy
from datetime import date
from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from bookkeeping_kernel.exceptions import AssetNotFoundError, InvalidAssetDataError
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_modules.assets.models import AssetCategory, AssetRecord
from bookkeeping_modules.assets.orm import AssetRecordModel

logger = get_logger("modules.assets.repository")


class AssetRepository(Protocol):
    """Storage contract used by ``FixedAssetService``."""

    def add(self, asset: AssetRecord) -> AssetRecord: ...

    def get(self, asset_id: UUID) -> AssetRecord: ...

    def update(self, asset: AssetRecord) -> AssetRecord: ...

    def delete(self, asset_id: UUID) -> None: ...

    def list_all(self) -> list[AssetRecord]: ...

    def list_active(self) -> list[AssetRecord]: ...

    def list_by_category(self, category: AssetCategory) -> list[AssetRecord]: ...

    def list_by_purchase_year(self, year: int) -> list[AssetRecord]: ...

    def find_by_expense(self, expense_id: UUID) -> AssetRecord | None: ...


def _by_purchase_date(assets: list[AssetRecord]) -> list[AssetRecord]:
    return sorted(assets, key=lambda a: (a.purchase_date, a.name))


class InMemoryAssetRepository:
    """Dict-backed repository for tests and ephemeral sessions."""

    def __init__(self) -> None:
        self._records: dict[UUID, AssetRecord] = {}

    def add(self, asset: AssetRecord) -> AssetRecord:
        if asset.id in self._records:
            raise InvalidAssetDataError("id", "asset already exists", asset.id)
        self._records[asset.id] = copy.deepcopy(asset)
        return asset

    def get(self, asset_id: UUID) -> AssetRecord:
        try:
            return copy.deepcopy(self._records[asset_id])
        except KeyError:
            raise AssetNotFoundError(str(asset_id)) from None

    def update(self, asset: AssetRecord) -> AssetRecord:
        if asset.id not in self._records:
            raise AssetNotFoundError(str(asset.id))
        self._records[asset.id] = copy.deepcopy(asset)
        return asset

    def delete(self, asset_id: UUID) -> None:
        if self._records.pop(asset_id, None) is None:
            raise AssetNotFoundError(str(asset_id))

    def list_all(self) -> list[AssetRecord]:
        return _by_purchase_date([copy.deepcopy(a) for a in self._records.values()])

    def list_active(self) -> list[AssetRecord]:
        return [a for a in self.list_all() if a.is_active]

    def list_by_category(self, category: AssetCategory) -> list[AssetRecord]:
        category = AssetCategory(category)
        return [a for a in self.list_all() if a.category == category]

    def list_by_purchase_year(self, year: int) -> list[AssetRecord]:
        return [a for a in self.list_all() if a.purchase_date.year == year]

    def find_by_expense(self, expense_id: UUID) -> AssetRecord | None:
        for asset in self.list_all():
            if asset.expense_id == expense_id:
                return asset
        return None


class SqlAlchemyAssetRepository:
    """
    Repository over ``AssetRecordModel`` in a caller-owned session.

    ``minimum_years`` is applied to every loaded record so later edits are
    validated against the configured minimum term.
    """

    def __init__(self, session: Session, minimum_years: int = 1):
        self.session = session
        self.minimum_years = minimum_years

    def _load(self, asset_id: UUID) -> AssetRecordModel:
        model = self.session.get(AssetRecordModel, asset_id)
        if model is None:
            raise AssetNotFoundError(str(asset_id))
        return model

    def _to_dtos(self, stmt) -> list[AssetRecord]:
        stmt = stmt.order_by(AssetRecordModel.purchase_date, AssetRecordModel.name)
        return [
            m.to_dto(self.minimum_years)
            for m in self.session.scalars(stmt).all()
        ]

    def add(self, asset: AssetRecord) -> AssetRecord:
        if self.session.get(AssetRecordModel, asset.id) is not None:
            raise InvalidAssetDataError("id", "asset already exists", asset.id)
        self.session.add(AssetRecordModel.from_dto(asset))
        self.session.flush()
        logger.debug("asset_row_inserted", extra={"asset_id": str(asset.id)})
        return asset

    def get(self, asset_id: UUID) -> AssetRecord:
        return self._load(asset_id).to_dto(self.minimum_years)

    def update(self, asset: AssetRecord) -> AssetRecord:
        self._load(asset.id).apply_dto(asset)
        self.session.flush()
        return asset

    def delete(self, asset_id: UUID) -> None:
        self.session.delete(self._load(asset_id))
        self.session.flush()
        logger.debug("asset_row_deleted", extra={"asset_id": str(asset_id)})

    def list_all(self) -> list[AssetRecord]:
        return self._to_dtos(select(AssetRecordModel))

    def list_active(self) -> list[AssetRecord]:
        return self._to_dtos(
            select(AssetRecordModel).where(AssetRecordModel.is_active.is_(True))
        )

    def list_by_category(self, category: AssetCategory) -> list[AssetRecord]:
        return self._to_dtos(
            select(AssetRecordModel).where(
                AssetRecordModel.category == AssetCategory(category).value
            )
        )

    def list_by_purchase_year(self, year: int) -> list[AssetRecord]:
        return self._to_dtos(
            select(AssetRecordModel).where(
                AssetRecordModel.purchase_date >= date(year, 1, 1),
                AssetRecordModel.purchase_date <= date(year, 12, 31),
            )
        )

    def find_by_expense(self, expense_id: UUID) -> AssetRecord | None:
        model = self.session.scalars(
            select(AssetRecordModel).where(AssetRecordModel.expense_id == expense_id)
        ).first()
        return model.to_dto(self.minimum_years) if model else None
