"""The Application contract.

An application is a unit of pluggable behavior: it owns a closed set of
message type URLs and a closed set of query type URLs, a namespace under which
its state is persisted, and handlers for both kinds of calls.

Applications are constructed once, when the registry is built, and hold no
per-call state themselves. The dispatcher loads their state before each call,
hands it to the handler, and saves it back on success.
"""

from __future__ import annotations

import abc
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

if TYPE_CHECKING:
    from multistargate.interfaces.environment import Env
    from multistargate.interfaces.messages import AppResponse
    from multistargate.interfaces.router import Querier, Router

S = TypeVar("S")
T = TypeVar("T", bound="TypeUrl")


class TypeUrl(str, Enum):
    """Base for the closed set of type URLs an application owns.

    Example:
        ```py
        class BankMsgUrl(TypeUrl):
            SEND = "/cosmos.bank.v1beta1.MsgSend"
        ```
    """

    @classmethod
    def lookup(cls: type[T], type_url: str) -> T | None:
        """Return the member whose value is `type_url`, or None if unrecognized."""
        if isinstance(type_url, TypeUrl):
            # members of another set hash by name, compare by value
            type_url = type_url.value
        try:
            return cls(type_url)
        except ValueError:
            return None

    @classmethod
    def values(cls) -> frozenset[str]:
        """All type URLs of the set."""
        return frozenset(member.value for member in cls)


class Application(abc.ABC, Generic[S]):
    """Base class for all applications.

    Concrete applications set the class attributes below and implement the
    state codec and the two handlers.
    """

    NAME: ClassVar[str]
    """Registry key. Must be unique among the applications of a registry."""

    NAMESPACE: ClassVar[str]
    """Storage namespace of the application's persisted state."""

    MSG_URLS: ClassVar[type[TypeUrl]]
    QUERY_URLS: ClassVar[type[TypeUrl]]

    # --- Type URLs ---

    def msg_type_urls(self) -> frozenset[str]:
        """Message type URLs owned by the application."""
        return self.MSG_URLS.values()

    def query_type_urls(self) -> frozenset[str]:
        """Query type URLs owned by the application."""
        return self.QUERY_URLS.values()

    def type_urls(self) -> frozenset[str]:
        """Every type URL owned by the application."""
        return self.msg_type_urls() | self.query_type_urls()

    def is_msg_type_url(self, type_url: str) -> bool:
        """Return True if the application owns the message `type_url`."""
        return self.MSG_URLS.lookup(type_url) is not None

    def is_query_type_url(self, type_url: str) -> bool:
        """Return True if the application owns the query `type_url`."""
        return self.QUERY_URLS.lookup(type_url) is not None

    # --- State ---

    @abc.abstractmethod
    def default_state(self) -> S:
        """State used the first time the application is dispatched to."""

    @abc.abstractmethod
    def encode_state(self, state: S) -> dict[str, Any]:
        """Return the JSON-compatible representation of `state`."""

    @abc.abstractmethod
    def decode_state(self, data: Mapping[str, Any]) -> S:
        """Rebuild the state from the output of `encode_state`."""

    # --- Handlers ---

    @abc.abstractmethod
    def handle_execute(  # pylint: disable=too-many-arguments
        self,
        state: S,
        sender: str,
        type_url: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        """Handle an execute call, mutating `state` in place.

        Args:
            state: The loaded application state. Saved by the caller on success.
            sender: Address that issued the call.
            type_url: One of the application's message type URLs.
            value: Encoded message payload.
            router: Handle to issue nested execute/sudo/query calls.
            env: Address API and current block.

        Returns:
            The effects of the call.

        Raises:
            Exception: Any error aborts the call; `state` is then discarded.
        """

    @abc.abstractmethod
    def handle_query(
        self,
        state: S,
        type_url: str,
        value: bytes,
        querier: Querier,
        env: Env,
    ) -> bytes:
        """Handle a read-only query and return the encoded result."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} name={self.NAME!r}>"
