"""
Fixed Assets Module (``bookkeeping_modules.assets``).

Responsibility
--------------
Fixed-asset lifecycle for a single-practitioner practice: capitalising a
purchase above the threshold, straight-line depreciation with monthly
proration, disposal, and the year figures for the annual tax report.

Architecture position
---------------------
**Modules layer** -- domain models, config, eligibility policy, the
disposal transition, persistence adapters, and a service facade that
delegates all depreciation math to ``bookkeeping_engines``.

Failure modes
-------------
* ``InvalidAssetDataError`` -- a record violates its invariants.
* ``AlreadyDisposedError`` -- disposal attempted twice.
* ``AssetNotFoundError`` -- unknown id in a repository.
"""

from bookkeeping_modules.assets.config import DepreciationConfig
from bookkeeping_modules.assets.disposal import DisposalHandler
from bookkeeping_modules.assets.models import (
    AssetCategory,
    AssetRecord,
    AssetStatus,
    DisposalReason,
    Purchase,
)
from bookkeeping_modules.assets.policy import EligibilityPolicy
from bookkeeping_modules.assets.repository import (
    AssetRepository,
    InMemoryAssetRepository,
    SqlAlchemyAssetRepository,
)
from bookkeeping_modules.assets.service import FixedAssetService

__all__ = [
    "AssetCategory",
    "AssetRecord",
    "AssetStatus",
    "DisposalReason",
    "Purchase",
    "DepreciationConfig",
    "EligibilityPolicy",
    "DisposalHandler",
    "AssetRepository",
    "InMemoryAssetRepository",
    "SqlAlchemyAssetRepository",
    "FixedAssetService",
]
