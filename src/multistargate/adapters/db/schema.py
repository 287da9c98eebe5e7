"""Key-value store schema.

Defines the ``kv_store`` table backing `SqlAlchemyStorage`. Every key of the
simulated chain (bank balances, application state documents) is one row.

| Constraint          | Purpose                    |
|---------------------|----------------------------|
| PRIMARY KEY(key)    | one value per key          |
"""

from __future__ import annotations

from sqlalchemy import Column, LargeBinary, Table

from .metadata import metadata

__all__ = ["kv_store"]

kv_store = Table(
    "kv_store",
    metadata,
    Column(
        "key",
        LargeBinary(512),
        primary_key=True,
        nullable=False,
        comment="Raw storage key (namespaced by module).",
    ),
    Column(
        "value",
        LargeBinary,
        nullable=False,
        comment="Raw stored value.",
    ),
    comment="Flat byte-keyed store of the simulated chain.",
)
