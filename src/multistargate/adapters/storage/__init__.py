"""Defines the storage adapter package.

- `InMemoryStorage`: non-durable dict-backed store for tests.
- `StorageTransaction`: write overlay over any store, flushed on commit.
- `SqlAlchemyStorage`: durable store over the ``kv_store`` table.
"""

from .memory import InMemoryStorage
from .sqlalchemy import SqlAlchemyStorage
from .transaction import StorageTransaction

__all__ = ["InMemoryStorage", "SqlAlchemyStorage", "StorageTransaction"]
