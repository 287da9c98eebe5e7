"""Key-value storage port.

The simulated chain keeps all of its state (bank balances, application state)
in a single byte-keyed store. Applications never see it directly: the
dispatcher reads and writes their namespaced state on their behalf.

Contract overview
-----------------
- `get(key)` returns the stored bytes or `None` when the key is absent.
- `set(key, value)` inserts or overwrites; `remove(key)` is a no-op for
  absent keys.
- `items(prefix)` yields `(key, value)` pairs whose key starts with
  `prefix`, in ascending key order.
- Backends map their own operational failures to `StoreUnavailableError`.
"""

import abc
from collections.abc import Iterator

# --- Exceptions to standardize adapter behavior ---


class StorageError(Exception):
    """Base class for storage errors."""


class StoreUnavailableError(StorageError):
    """Operational/timeout/connection errors; callers may retry."""


# --- Storage Interface ---


class Storage(abc.ABC):
    """An abstract base class for a byte-keyed key-value store."""

    @abc.abstractmethod
    def get(self, key: bytes) -> bytes | None:
        """Return the value stored under `key`, or None if absent."""

    @abc.abstractmethod
    def set(self, key: bytes, value: bytes) -> None:
        """Store `value` under `key`, overwriting any previous value."""

    @abc.abstractmethod
    def remove(self, key: bytes) -> None:
        """Delete `key` if present."""

    @abc.abstractmethod
    def items(self, prefix: bytes = b"") -> Iterator[tuple[bytes, bytes]]:
        """Yield `(key, value)` pairs whose key starts with `prefix`, ascending by key."""
