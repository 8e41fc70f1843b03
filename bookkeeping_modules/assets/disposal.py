"""
Disposal Handler (``bookkeeping_modules.assets.disposal``).

Responsibility
--------------
The one stateful transition of the asset lifecycle: Active -> Disposed.
Marks the record disposed in place, which freezes further accrual in the
depreciation calculator.

Invariants enforced
-------------------
* Disposal is terminal and not idempotent: a second call raises
  ``AlreadyDisposedError`` and leaves the recorded disposal untouched.
* The disposal date is never before the in-service date.

Failure modes
-------------
* ``AlreadyDisposedError`` -- asset already disposed.
* ``InvalidAssetDataError`` -- disposal date before in-service date, or a
  negative sale value.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from bookkeeping_kernel.domain.clock import Clock, SystemClock
from bookkeeping_kernel.domain.values import ZERO, to_decimal
from bookkeeping_kernel.exceptions import AlreadyDisposedError, InvalidAssetDataError
from bookkeeping_kernel.logging_config import get_logger
from bookkeeping_modules.assets.models import AssetRecord, DisposalReason

logger = get_logger("modules.assets.disposal")


class DisposalHandler:
    """Performs the Active -> Disposed transition on an ``AssetRecord``."""

    def __init__(self, clock: Clock | None = None):
        self._clock = clock or SystemClock()

    def dispose(
        self,
        asset: AssetRecord,
        disposal_date: date,
        sale_value: Decimal | str | int | None = None,
        reason: DisposalReason | str | None = None,
    ) -> AssetRecord:
        """
        Mark ``asset`` as disposed on ``disposal_date``.

        Preconditions:
            - asset is active (not yet disposed).
            - disposal_date >= asset.in_service_date.
        Postconditions:
            - disposal_date, disposal_value and disposal_reason are set,
              is_active is False and updated_at is refreshed.
        """
        if asset.is_disposed or not asset.is_active:
            logger.warning(
                "asset_disposal_rejected",
                extra={
                    "asset_id": str(asset.id),
                    "disposal_date": asset.disposal_date,
                },
            )
            raise AlreadyDisposedError(str(asset.id), asset.disposal_date)

        if disposal_date < asset.in_service_date:
            raise InvalidAssetDataError(
                "disposal_date",
                "must not be before in_service_date",
                disposal_date,
            )

        value: Decimal | None = None
        if sale_value is not None:
            try:
                value = to_decimal(sale_value, field="disposal_value")
            except (TypeError, ValueError) as e:
                raise InvalidAssetDataError("disposal_value", str(e), sale_value) from e
            if value < ZERO:
                raise InvalidAssetDataError(
                    "disposal_value", "must not be negative", value,
                )

        disposal_reason: DisposalReason | None = None
        if reason is not None:
            try:
                disposal_reason = DisposalReason(reason)
            except ValueError as e:
                raise InvalidAssetDataError(
                    "disposal_reason", "unknown disposal reason", reason,
                ) from e

        asset.disposal_date = disposal_date
        asset.disposal_value = value
        asset.disposal_reason = disposal_reason
        asset.is_active = False
        asset.touch(self._clock)

        logger.info(
            "asset_disposed",
            extra={
                "asset_id": str(asset.id),
                "disposal_date": disposal_date,
                "disposal_value": str(value) if value is not None else None,
                "disposal_reason": disposal_reason.value if disposal_reason else None,
            },
        )
        return asset
