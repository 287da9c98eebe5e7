"""Namespaced persistence of application state.

Each application's state is stored as a single canonical JSON document under
``<STATE_KEY_PREFIX><namespace>``. The state is written whole: there are no
partial updates.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Generic, TypeVar

from multistargate import config

from .errors import StateDecodeError

if TYPE_CHECKING:
    from multistargate.interfaces.storage import Storage

    from .application import Application

S = TypeVar("S")

logger = logging.getLogger(__name__)


class StateStore(Generic[S]):
    """Load-with-default / save access to one application's state."""

    def __init__(self, application: Application[S]) -> None:
        self.application = application
        self.namespace = application.NAMESPACE
        self.key = f"{config.STATE_KEY_PREFIX}{self.namespace}".encode("utf-8")

    def load(self, storage: Storage) -> S:
        """Load the state, or the application's default if nothing is stored yet.

        Raises:
            StateDecodeError: If the stored bytes are not a valid state document.
        """
        raw = storage.get(self.key)
        if raw is None:
            logger.debug("No state stored for %s; using default", self.namespace)
            return self.application.default_state()
        try:
            data = json.loads(raw)
            return self.application.decode_state(data)
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise StateDecodeError(self.namespace, str(e)) from e

    def save(self, storage: Storage, state: S) -> None:
        """Persist the full state."""
        data = self.application.encode_state(state)
        storage.set(
            self.key,
            json.dumps(data, sort_keys=True, separators=(",", ":")).encode("utf-8"),
        )

    def exists(self, storage: Storage) -> bool:
        """Return True if a state has been saved for this namespace."""
        return storage.get(self.key) is not None

    @contextmanager
    def use(self, storage: Storage) -> Iterator[S]:
        """Load the state, yield it for mutation and save it if no error escapes.

        Example:
            ```py
            with store.use(storage) as state:
                state.clear_fee_creation()
            ```
        """
        state = self.load(storage)
        yield state
        self.save(storage, state)
