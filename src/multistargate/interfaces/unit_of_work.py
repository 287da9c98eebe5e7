"""Unit of Work port.

A unit of work brackets one top-level chain operation. Inside a ``with``
block, `storage` is the chain storage as seen by that operation; nothing
written to it is durable until `commit` is called. Leaving the block always
calls `rollback`, which is a no-op for committed writes.
"""

from __future__ import annotations

import abc

from .storage import Storage


class AbstractUnitOfWork(abc.ABC):
    """One transaction over the chain storage."""

    #: Only valid between ``__enter__`` and ``__exit__``.
    storage: Storage

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Make every write since entering (or the last commit) durable."""

    @abc.abstractmethod
    def rollback(self):
        """Drop every write since entering (or the last commit)."""
