"""Unit of Work implementations for MULTISTARGATE.

- `InMemoryUnitOfWork`: buffers writes in a `StorageTransaction` over a
  shared `InMemoryStorage`; commit flushes, rollback discards.
- `SqlAlchemyUnitOfWork`: runs on one SQLAlchemy Connection per unit; commit
  and rollback map to the connection's.

Both can be re-entered while open, e.g. a `Chain.query` issued from inside
`Chain.application_state`. The inner ``with`` block then works on a
`StorageTransaction` layered over the outer storage: its commit lands in the
outer unit (still undecided), its rollback drops only its own writes.
"""

from __future__ import annotations

import abc
import logging
from typing import TYPE_CHECKING

from multistargate.adapters.storage import (
    InMemoryStorage,
    SqlAlchemyStorage,
    StorageTransaction,
)
from multistargate.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

    from multistargate.interfaces.storage import Storage

logger = logging.getLogger(__name__)


class LayeredUnitOfWork(AbstractUnitOfWork):
    """Shared enter/exit bookkeeping of the adapters.

    Subclasses provide the outermost transaction through `_begin`, `_commit`,
    `_rollback` and `_end`.
    """

    def __init__(self) -> None:
        self._root: Storage | None = None
        self._layers: list[StorageTransaction] = []

    @property
    def depth(self) -> int:
        """Number of open ``with`` blocks on this unit."""
        if self._root is None:
            return 0
        return len(self._layers) + 1

    def __enter__(self):
        if self._root is None:
            self._root = self.storage = self._begin()
        else:
            layer = StorageTransaction(self.storage)
            self._layers.append(layer)
            self.storage = layer
            logger.debug("Nested unit of work opened (depth %d)", self.depth)
        return super().__enter__()

    def __exit__(self, *args):
        if self._layers:
            self._layers.pop().discard()
            self.storage = self._layers[-1] if self._layers else self._root
            return
        try:
            super().__exit__(*args)
        finally:
            self._root = None
            self._end()

    def commit(self):
        if self._layers:
            self._layers[-1].commit()
        else:
            self._commit()

    def rollback(self):
        if self._layers:
            self._layers[-1].discard()
        else:
            self._rollback()

    @abc.abstractmethod
    def _begin(self) -> Storage:
        """Open the outermost transaction and return its storage."""

    @abc.abstractmethod
    def _commit(self) -> None: ...

    @abc.abstractmethod
    def _rollback(self) -> None: ...

    def _end(self) -> None:
        """Release whatever `_begin` acquired."""


class InMemoryUnitOfWork(LayeredUnitOfWork):
    """In-memory Unit of Work."""

    def __init__(self, backing: InMemoryStorage | None = None):
        super().__init__()
        self.backing = backing if backing is not None else InMemoryStorage()
        self._tx: StorageTransaction | None = None

    def _begin(self) -> Storage:
        self._tx = StorageTransaction(self.backing)
        return self._tx

    def _commit(self) -> None:
        assert self._tx is not None
        self._tx.commit()

    def _rollback(self) -> None:
        assert self._tx is not None
        self._tx.discard()

    def _end(self) -> None:
        self._tx = None


class SqlAlchemyUnitOfWork(LayeredUnitOfWork):
    """Unit of Work over one connection of `engine`, opened per unit."""

    def __init__(self, engine: Engine):
        super().__init__()
        self.engine = engine
        self.connection: Connection | None = None

    def _begin(self) -> Storage:
        self.connection = self.engine.connect()
        return SqlAlchemyStorage(self.connection)

    def _commit(self) -> None:
        assert self.connection is not None
        self.connection.commit()

    def _rollback(self) -> None:
        assert self.connection is not None
        self.connection.rollback()

    def _end(self) -> None:
        if self.connection is not None:
            self.connection.close()
            self.connection = None
