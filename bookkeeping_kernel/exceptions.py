"""
Typed Exception Hierarchy for the Bookkeeping Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (form layer, report layer, persistence glue) must be able to react
to a failure without parsing its message:
  1. Every error has a TYPED exception class (catch by type, not message)
  2. Every exception has a CODE attribute (machine-readable, UI-safe)
  3. Exceptions carry structured DATA (the offending field, the asset id)

Example:
    try:
        handler.dispose(asset, date(2026, 12, 31))
    except AlreadyDisposedError as e:
        show_inline_error(e.code, disposed_on=e.disposal_date)
    except InvalidAssetDataError as e:
        highlight_field(e.field, e.reason)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    BookkeepingKernelError (base)
    |
    +-- AssetError
    |   +-- InvalidAssetDataError
    |   +-- AlreadyDisposedError
    |   +-- AssetNotFoundError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                   | When Raised
----------------|------------------------|------------------------------------------
Asset           | INVALID_ASSET_DATA     | Record invariant violated on create/update
                | ALREADY_DISPOSED       | dispose() called on a terminal asset
                | ASSET_NOT_FOUND        | Repository has no record with that id
----------------|------------------------|------------------------------------------
Configuration   | INVALID_CONFIGURATION  | Config value out of range or unknown key

Numeric overflow and precision loss are programming-contract violations and
have no exception type here.
"""

from datetime import date


class BookkeepingKernelError(Exception):
    """
    Base exception for all bookkeeping kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "BOOKKEEPING_KERNEL_ERROR"


# Asset-related exceptions


class AssetError(BookkeepingKernelError):
    """Base exception for fixed-asset errors."""

    code: str = "ASSET_ERROR"


class InvalidAssetDataError(AssetError):
    """An AssetRecord invariant was violated at construction or update."""

    code: str = "INVALID_ASSET_DATA"

    def __init__(self, field: str, reason: str, value: object = None):
        self.field = field
        self.reason = reason
        self.value = value
        super().__init__(f"Invalid asset data for '{field}': {reason}")


class AlreadyDisposedError(AssetError):
    """
    Asset is already disposed.

    Disposal is a one-way terminal transition; a second call is rejected
    instead of overwriting the recorded disposal.
    """

    code: str = "ALREADY_DISPOSED"

    def __init__(self, asset_id: str, disposal_date: date | None):
        self.asset_id = asset_id
        self.disposal_date = disposal_date
        super().__init__(
            f"Asset {asset_id} was already disposed on {disposal_date}"
        )


class AssetNotFoundError(AssetError):
    """Asset with given ID was not found."""

    code: str = "ASSET_NOT_FOUND"

    def __init__(self, asset_id: str):
        self.asset_id = asset_id
        super().__init__(f"Asset not found: {asset_id}")


# Configuration exceptions


class ConfigurationError(BookkeepingKernelError):
    """A depreciation configuration value is invalid."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Invalid configuration '{key}': {reason}")
