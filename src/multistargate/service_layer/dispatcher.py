"""Dispatcher routing wire envelopes to registered applications."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from .errors import NoApplicationForTypeUrl, ReentrantDispatchError
from .registry import ApplicationRegistry
from .state_store import StateStore

if TYPE_CHECKING:
    from multistargate.interfaces.environment import Env
    from multistargate.interfaces.messages import AppResponse
    from multistargate.interfaces.router import Querier, Router
    from multistargate.interfaces.storage import Storage

    from .application import Application

logger = logging.getLogger(__name__)

# Reported in place of a type URL when the state is held outside of a dispatch
HOLD_TYPE_URL = "<application_state>"

# pylint: disable=too-many-arguments


class Dispatcher:
    """Route execute and query calls to the application owning their type URL.

    The dispatcher is a pure routing and persistence wrapper. For an execute
    call it loads the owning application's state, invokes the application and
    saves the state only if the application returned successfully. A failing
    call therefore leaves the application's state exactly as it was.

    Calls are serialized with a re-entrant lock, so a dispatcher may be shared
    across threads of an outer test runner while nested calls issued through
    the router on the same thread still go through. A nested execute that
    targets an application whose own execute is still in progress is rejected,
    as both calls would otherwise hold the same state mutably.

    Args:
        registry: The applications to route to.
    """

    def __init__(self, registry: ApplicationRegistry) -> None:
        self.registry = registry
        self._stores: dict[str, StateStore[Any]] = {}
        self._executing: set[str] = set()
        self._lock = threading.RLock()

    def state_store(self, name: str) -> StateStore[Any]:
        """Return the state store of the application registered under `name`.

        Raises:
            UnknownApplicationError: If no application has that name.
        """
        return self._store(self.registry.get(name))

    def handles_query(self, type_url: str) -> bool:
        """Return True if some application owns the query `type_url`."""
        return any(app.is_query_type_url(type_url) for app in self.registry)

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        """Mark application `name` as busy for the duration of the block.

        Used while its state is loaded outside of a dispatch: any execute
        routed to it in the meantime raises `ReentrantDispatchError` instead of
        saving over a state the holder is about to write back.

        Raises:
            UnknownApplicationError: If no application has that name.
            ReentrantDispatchError: If the application is already busy.
        """
        name = self.registry.get(name).NAME
        with self._lock:
            if name in self._executing:
                logger.error("Application %s is already busy", name)
                raise ReentrantDispatchError(name, HOLD_TYPE_URL)
            self._executing.add(name)
            try:
                yield
            finally:
                self._executing.discard(name)

    def execute(
        self,
        storage: Storage,
        router: Router,
        env: Env,
        sender: str,
        type_url: str,
        value: bytes,
    ) -> AppResponse:
        """Dispatch an execute call.

        Args:
            storage: Storage segment the call runs against.
            router: Handle bound to the same storage, passed to the application.
            env: Address API and current block.
            sender: Address issuing the call.
            type_url: Routing discriminator of the envelope.
            value: Encoded payload, opaque to the dispatcher.

        Returns:
            The effects produced by the application.

        Raises:
            NoApplicationForTypeUrl: If no application owns `type_url`.
            ReentrantDispatchError: If the owning application is already executing.
            Exception: Any error raised by the application, unchanged.
        """
        with self._lock:
            try:
                application = self.registry.find_by_msg_type_url(type_url)
            except NoApplicationForTypeUrl:
                logger.error("No application found for message %s", type_url)
                raise

            name = application.NAME
            if name in self._executing:
                logger.error("Re-entrant dispatch of %s into %s", type_url, name)
                raise ReentrantDispatchError(name, type_url)

            store = self._store(application)
            self._executing.add(name)
            try:
                state = store.load(storage)
                logger.debug(
                    "Dispatching %s from %s to application %s", type_url, sender, name
                )
                try:
                    response = application.handle_execute(
                        state, sender, type_url, value, router, env
                    )
                except Exception:  # pylint: disable=broad-except
                    logger.exception(
                        "Exception executing %s with application %s", type_url, name
                    )
                    raise
                store.save(storage, state)
            finally:
                self._executing.discard(name)

            return response

    def query(
        self,
        storage: Storage,
        querier: Querier,
        env: Env,
        path: str,
        data: bytes,
    ) -> bytes:
        """Dispatch a read-only query. Never persists state.

        Raises:
            NoApplicationForTypeUrl: If no application owns `path`.
            Exception: Any error raised by the application, unchanged.
        """
        with self._lock:
            try:
                application = self.registry.find_by_query_type_url(path)
            except NoApplicationForTypeUrl:
                logger.error("No application found for query %s", path)
                raise

            state = self._store(application).load(storage)
            logger.debug("Querying %s on application %s", path, application.NAME)
            return application.handle_query(state, path, data, querier, env)

    def _store(self, application: Application) -> StateStore[Any]:
        if (store := self._stores.get(application.NAME)) is None:
            store = self._stores[application.NAME] = StateStore(application)
        return store
