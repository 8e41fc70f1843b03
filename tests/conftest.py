"""
Pytest fixtures for the bookkeeping test suite.

Provides:
- Structured logging reset and capture
- A deterministic clock and default depreciation config
- An asset factory seeded with the reference laptop purchase
- In-memory SQLite sessions
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO

import pytest

from bookkeeping_engines.depreciation import DepreciationCalculator
from bookkeeping_engines.portfolio import AssetPortfolio
from bookkeeping_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from bookkeeping_kernel.domain.clock import DeterministicClock
from bookkeeping_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from bookkeeping_modules.assets.config import DepreciationConfig
from bookkeeping_modules.assets.models import AssetCategory, AssetRecord

FIXED_NOW = datetime(2024, 6, 1, 9, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture bookkeeping logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.capitalize_purchase(purchase)
            logs = captured_logs()
            assert any(r["message"] == "purchase_capitalized" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("bookkeeping")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(FIXED_NOW)


@pytest.fixture
def config():
    return DepreciationConfig.with_defaults()


@pytest.fixture
def calculator():
    return DepreciationCalculator()


@pytest.fixture
def portfolio(calculator):
    return AssetPortfolio(calculator)


@pytest.fixture
def make_asset(deterministic_clock):
    """
    Factory for AssetRecord.

    Defaults are the reference purchase: EUR 3,000 laptop, 5-year term,
    EUR 300 residual, full business use, in service 1 June 2024.
    """

    def _make(**overrides) -> AssetRecord:
        fields = dict(
            name="Laptop",
            purchase_date=date(2024, 6, 1),
            purchase_value=Decimal("3000"),
            residual_value=Decimal("300"),
            depreciation_years=5,
            category=AssetCategory.COMPUTER,
            clock=deterministic_clock,
        )
        fields.update(overrides)
        return AssetRecord(**fields)

    return _make


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def session():
    """Fresh in-memory SQLite database with every table created."""
    init_engine_from_url("sqlite://")
    create_tables()
    sess = get_session()
    yield sess
    sess.close()
    reset_engine()
