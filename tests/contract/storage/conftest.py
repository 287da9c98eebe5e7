"""Pytest fixtures for storage contract tests.

Provided fixtures
-----------------
- **store**: Parametrized backend factory that returns a **fresh**, empty
  `Storage` per test:
    - `"memory"` → `InMemoryStorage`
    - `"transaction"` → `StorageTransaction` over an `InMemoryStorage`
    - `"sqlalchemy"` → `SqlAlchemyStorage` on a connection to in-memory SQLite
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

import pytest

from multistargate.adapters.storage import (
    InMemoryStorage,
    SqlAlchemyStorage,
    StorageTransaction,
)

if TYPE_CHECKING:
    from multistargate.interfaces.storage import Storage


@pytest.fixture(params=["memory", "transaction", "sqlalchemy"])
def store(request: pytest.FixtureRequest) -> Iterator[Storage]:
    """Return a fresh store instance for the requested backend."""
    match request.param:
        case "memory":
            yield InMemoryStorage()
        case "transaction":
            yield StorageTransaction(InMemoryStorage())
        case "sqlalchemy":
            engine = request.getfixturevalue("sqlite_engine_memory")
            with engine.connect() as connection:
                yield SqlAlchemyStorage(connection)
                connection.rollback()
        case _:
            raise ValueError(f"unknown store type: {request.param}")
