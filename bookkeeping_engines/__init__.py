"""
Pure calculation engines.

No I/O, no clock, no database.  Engines read assets through the
``DepreciableAsset`` protocol and never import the modules layer.
"""

from bookkeeping_engines.depreciation import (
    DepreciableAsset,
    DepreciationCalculator,
    DisposalResult,
    ScheduleLine,
)
from bookkeeping_engines.portfolio import AnnualDepreciationSummary, AssetPortfolio

__all__ = [
    "DepreciableAsset",
    "DepreciationCalculator",
    "DisposalResult",
    "ScheduleLine",
    "AssetPortfolio",
    "AnnualDepreciationSummary",
]
