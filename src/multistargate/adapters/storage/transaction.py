"""Write overlay over a parent storage.

A `StorageTransaction` buffers every write (and removal) in memory. Reads see
the buffered writes first and fall back to the parent. Nothing reaches the
parent until `commit()`; `discard()` drops the buffer.

Transactions nest: a transaction over a transaction commits into its parent
overlay only, which is how nested router calls are made atomic without
touching the state the outer call is still working on.
"""

from collections.abc import Iterator

from multistargate.interfaces.storage import Storage


class StorageTransaction(Storage):
    """Buffered, discardable view of a parent `Storage`."""

    def __init__(self, parent: Storage) -> None:
        self._parent = parent
        # None marks a removal
        self._writes: dict[bytes, bytes | None] = {}

    @property
    def parent(self) -> Storage:
        """The storage this transaction commits into."""
        return self._parent

    @property
    def dirty(self) -> bool:
        """True if there are buffered writes."""
        return bool(self._writes)

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(self, key: bytes) -> bytes | None:
        if key in self._writes:
            return self._writes[key]
        return self._parent.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._writes[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._writes[bytes(key)] = None

    def items(self, prefix: bytes = b"") -> Iterator[tuple[bytes, bytes]]:
        merged = dict(self._parent.items(prefix))
        for key, value in self._writes.items():
            if not key.startswith(prefix):
                continue
            if value is None:
                merged.pop(key, None)
            else:
                merged[key] = value
        for key in sorted(merged):
            yield key, merged[key]

    # --------------------------------------------------------------------- #
    # Transaction control
    # --------------------------------------------------------------------- #

    def commit(self) -> None:
        """Flush buffered writes into the parent and clear the buffer."""
        for key, value in self._writes.items():
            if value is None:
                self._parent.remove(key)
            else:
                self._parent.set(key, value)
        self._writes.clear()

    def discard(self) -> None:
        """Drop buffered writes."""
        self._writes.clear()
