"""
Fixed Assets Configuration Schema.

Defines the depreciation settings and their defaults.  A config value is
always passed explicitly to the policy, calculator and services; there is
no process-wide settings object.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from pathlib import Path
from typing import Any, Self

import yaml

from bookkeeping_kernel.domain.values import to_decimal
from bookkeeping_kernel.exceptions import ConfigurationError
from bookkeeping_kernel.logging_config import get_logger

logger = get_logger("modules.assets.config")


@dataclass(frozen=True)
class DepreciationConfig:
    """
    Configuration schema for the depreciation engine.

    Field defaults follow the Dutch small-business rules the engine was
    built for.  Override at instantiation:

        config = DepreciationConfig(
            capitalization_threshold=Decimal("500.00"),
            minimum_depreciation_years=4,
        )
    """

    # Purchases at or above this amount (VAT-exclusive) are capitalised
    capitalization_threshold: Decimal = Decimal("450")

    # Shortest allowed depreciation term
    minimum_depreciation_years: int = 5

    # Residual value suggested for new assets, as a fraction of purchase value
    default_residual_fraction: Decimal = Decimal("0.10")

    currency: str = "EUR"
    currency_decimal_places: int = 2

    def __post_init__(self):
        for name in ("capitalization_threshold", "default_residual_fraction"):
            raw = getattr(self, name)
            try:
                value = to_decimal(raw, field=name)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(name, str(e)) from e
            object.__setattr__(self, name, value)

        if self.capitalization_threshold < 0:
            raise ConfigurationError(
                "capitalization_threshold", "must not be negative",
            )
        if not Decimal("0") <= self.default_residual_fraction <= Decimal("1"):
            raise ConfigurationError(
                "default_residual_fraction", "must be between 0 and 1",
            )
        if isinstance(self.minimum_depreciation_years, bool) or not isinstance(
            self.minimum_depreciation_years, int
        ):
            raise ConfigurationError(
                "minimum_depreciation_years", "must be an integer",
            )
        if self.minimum_depreciation_years < 1:
            raise ConfigurationError(
                "minimum_depreciation_years", "must be at least 1",
            )
        if not 0 <= self.currency_decimal_places <= 4:
            raise ConfigurationError(
                "currency_decimal_places", "must be between 0 and 4",
            )

        logger.debug(
            "depreciation_config_initialized",
            extra={
                "capitalization_threshold": str(self.capitalization_threshold),
                "minimum_depreciation_years": self.minimum_depreciation_years,
                "default_residual_fraction": str(self.default_residual_fraction),
                "currency": self.currency,
            },
        )

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with the standard defaults."""
        return cls()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create config from a dictionary (e.g. loaded from a settings file)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(unknown[0], "unknown configuration key")
        logger.info(
            "depreciation_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        values = dict(data)
        # YAML yields floats for 0.10; go through str to keep the literal
        for name in ("capitalization_threshold", "default_residual_fraction"):
            if isinstance(values.get(name), float):
                values[name] = str(values[name])
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Self:
        """
        Load config from a YAML file.

        The file may hold the settings at top level or under a
        ``depreciation:`` key.  An empty file yields the defaults.
        """
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ConfigurationError(str(path), "expected a mapping")
        if "depreciation" in data:
            data = data["depreciation"] or {}
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to plain values (decimals as strings)."""
        result = asdict(self)
        for key, val in result.items():
            if isinstance(val, Decimal):
                result[key] = str(val)
        return result
