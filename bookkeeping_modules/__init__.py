"""
Bookkeeping Modules.

Thin orchestration layers over the Bookkeeping Kernel and Engines.
Each module contains:
- Domain models (the nouns)
- Configuration (policy and settings)
- Persistence adapters (ORM models and repositories)
- A service facade

Modules:
- Assets: Fixed assets, depreciation, disposal

Actual calculation logic lives in the engines.
"""

from bookkeeping_modules import assets

__all__ = ["assets"]
