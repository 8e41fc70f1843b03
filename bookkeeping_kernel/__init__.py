"""
Bookkeeping Kernel

Shared infrastructure for the fixed-asset depreciation engine:
- Typed exceptions with machine-readable codes
- Structured JSON logging
- Injectable clock for audit timestamps
- Exact decimal coercion and minor-unit rounding
- SQLAlchemy declarative base and session management
"""

__version__ = "0.1.0"
