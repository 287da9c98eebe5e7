"""SQLAlchemy-backed Storage adapter for MULTISTARGATE.

This module provides a SQLAlchemy-backed implementation of the Storage
interface over the ``kv_store`` table (see adapters.db.schema). It runs on the
connection of the enclosing unit of work and never commits by itself. Driver
errors are mapped to storage-specific exceptions.

Usage:
    Instantiate SqlAlchemyStorage with a SQLAlchemy Connection object.
"""

from collections.abc import Iterator

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from multistargate.adapters.db.schema import kv_store
from multistargate.interfaces.storage import Storage, StoreUnavailableError


class SqlAlchemyStorage(Storage):
    """SQLAlchemy-backed Storage.

    - Uses the ``kv_store`` table (see adapters.db.schema).
    - Keys are compared bytewise, so `items` is ordered like the in-memory store.
    """

    def __init__(self, connection: Connection):
        self.connection = connection

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(self, key: bytes) -> bytes | None:
        stmt = select(kv_store.c.value).where(kv_store.c.key == key)
        try:
            value = self.connection.execute(stmt).scalar_one_or_none()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e
        return bytes(value) if value is not None else None

    def set(self, key: bytes, value: bytes) -> None:
        try:
            result = self.connection.execute(
                update(kv_store).where(kv_store.c.key == key).values(value=value)
            )
            if result.rowcount == 0:
                self.connection.execute(insert(kv_store).values(key=key, value=value))
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    def remove(self, key: bytes) -> None:
        try:
            self.connection.execute(delete(kv_store).where(kv_store.c.key == key))
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

    def items(self, prefix: bytes = b"") -> Iterator[tuple[bytes, bytes]]:
        stmt = select(kv_store.c.key, kv_store.c.value).where(kv_store.c.key >= prefix)
        if (end := prefix_end(prefix)) is not None:
            stmt = stmt.where(kv_store.c.key < end)
        stmt = stmt.order_by(kv_store.c.key.asc())
        try:
            rows = self.connection.execute(stmt).all()
        except DBAPIError as e:
            raise StoreUnavailableError(str(e)) from e

        for key, value in rows:
            yield bytes(key), bytes(value)


def prefix_end(prefix: bytes) -> bytes | None:
    r"""Return the smallest key greater than every key starting with `prefix`.

    Trailing ``0xff`` bytes cannot be incremented and are dropped first, e.g.
    ``b"a\xff"`` gives ``b"b"``. None when there is no such key (empty or
    all-``0xff`` prefix): the range is then unbounded above.
    """
    stripped = prefix.rstrip(b"\xff")
    if not stripped:
        return None
    return stripped[:-1] + bytes([stripped[-1] + 1])
