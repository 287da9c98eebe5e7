"""Router handle contract.

A narrow capability handed to applications so that they can issue further
operations against the environment they are embedded in without knowing its
concrete type. Every call is synchronous and either returns a result or
raises.
"""

import abc

from .messages import AppResponse, CosmosMsg, SudoMsg


class Querier(abc.ABC):
    """Read-only access to the environment."""

    @abc.abstractmethod
    def query(self, path: str, data: bytes) -> bytes:
        """Run a read-only query identified by `path` and return raw result bytes."""


class Router(Querier):
    """Read-write access to the environment."""

    @abc.abstractmethod
    def execute(self, sender: str, msg: CosmosMsg) -> AppResponse:
        """Run `msg` as if issued by `sender`.

        A failing call leaves no trace in the environment.
        """

    @abc.abstractmethod
    def sudo(self, msg: SudoMsg) -> AppResponse:
        """Run a privileged message that bypasses sender authorization."""
