"""In memory storage implementation.

All data is stored in memory and lost when the instance is discarded.
Use for unit tests, prototyping, or scenarios where durability is not required.

This implementation passes all contract tests for the Storage interface.
"""

from collections.abc import Iterator

from multistargate.interfaces.storage import Storage


class InMemoryStorage(Storage):
    """In-memory Storage for testing and non-durable use cases."""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}

    # --------------------------------------------------------------------- #
    # Interface implementation
    # --------------------------------------------------------------------- #

    def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._data.pop(key, None)

    def items(self, prefix: bytes = b"") -> Iterator[tuple[bytes, bytes]]:
        # snapshot so callers may write while iterating
        snapshot = sorted(
            (key, value) for key, value in self._data.items() if key.startswith(prefix)
        )
        yield from snapshot

    def __len__(self) -> int:
        return len(self._data)
