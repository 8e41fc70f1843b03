"""
Module ORM Registry (``bookkeeping_modules._orm_registry``).

Responsibility
--------------
Ensure every module-level SQLAlchemy ORM model is imported so that
``Base.metadata`` contains its table definition before tables are created.
``bookkeeping_kernel.db.engine.create_tables()`` calls this first.

Architecture position
---------------------
**Modules layer** -- utility.  Imports sibling ``bookkeeping_modules``
packages only.  MUST NOT be imported by ``bookkeeping_engines``.
"""


def import_all_orm_models() -> None:
    """Import every ``bookkeeping_modules.*.orm`` module.

    This function is idempotent -- repeated calls are harmless.
    """
    import bookkeeping_modules.assets.orm  # noqa: F401
