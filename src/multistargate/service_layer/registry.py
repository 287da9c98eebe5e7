"""Registry of applications keyed by name.

The registry guarantees that type URL ownership is disjoint: no message or
query type URL may be claimed by two registered applications. The check runs
once, when the registry is built, so routing never has to break ties.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from .application import Application
from .errors import (
    DuplicateApplicationError,
    NamespaceCollisionError,
    NoApplicationForTypeUrl,
    TypeUrlCollisionError,
    UnknownApplicationError,
)

logger = logging.getLogger(__name__)


class ApplicationRegistry:
    """Mapping of application name to application instance.

    Lookup is linear in the number of registered applications, which is a
    small, fixed set.
    """

    def __init__(self) -> None:
        self._applications: dict[str, Application] = {}

    @classmethod
    def register(cls, applications: Iterable[Application]) -> ApplicationRegistry:
        """Build a registry from a list of applications.

        Args:
            applications: Applications to register, in order.

        Returns:
            The populated registry.

        Raises:
            TypeUrlCollisionError: If a type URL is claimed by two applications.
            DuplicateApplicationError: If two applications share a name.
            NamespaceCollisionError: If two applications share a namespace.
        """
        registry = cls()
        for application in applications:
            registry.add(application)
        return registry

    def add(self, application: Application) -> None:
        """Register one more application.

        Raises:
            TypeUrlCollisionError: If one of its type URLs is already owned.
            DuplicateApplicationError: If its name is already registered.
            NamespaceCollisionError: If its namespace is already used.
        """
        name = application.NAME
        if name in self._applications:
            raise DuplicateApplicationError(name)

        for existing in self._applications.values():
            if existing.NAMESPACE == application.NAMESPACE:
                raise NamespaceCollisionError(application.NAMESPACE, name, existing.NAME)

        for type_url in sorted(application.type_urls()):
            for existing in self._applications.values():
                if existing.is_msg_type_url(type_url) or existing.is_query_type_url(
                    type_url
                ):
                    logger.error(
                        "Type URL %s of %s is already owned by %s",
                        type_url,
                        name,
                        existing.NAME,
                    )
                    raise TypeUrlCollisionError(type_url, name, existing.NAME)

        self._applications[name] = application
        logger.debug(
            "Registered application %s (%d msg urls, %d query urls)",
            name,
            len(application.msg_type_urls()),
            len(application.query_type_urls()),
        )

    # --- Lookups ---

    def find_by_msg_type_url(self, type_url: str) -> Application:
        """Return the application owning the message `type_url`.

        Raises:
            NoApplicationForTypeUrl: If no application owns it.
        """
        for application in self._applications.values():
            if application.is_msg_type_url(type_url):
                return application
        raise NoApplicationForTypeUrl(type_url, kind="message")

    def find_by_query_type_url(self, type_url: str) -> Application:
        """Return the application owning the query `type_url`.

        Raises:
            NoApplicationForTypeUrl: If no application owns it.
        """
        for application in self._applications.values():
            if application.is_query_type_url(type_url):
                return application
        raise NoApplicationForTypeUrl(type_url, kind="query")

    def get(self, name: str) -> Application:
        """Return the application registered under `name`.

        Raises:
            UnknownApplicationError: If no application has that name.
        """
        try:
            return self._applications[name]
        except KeyError as e:
            raise UnknownApplicationError(name) from e

    def names(self) -> list[str]:
        """Names of the registered applications, in registration order."""
        return list(self._applications)

    def __contains__(self, name: object) -> bool:
        return name in self._applications

    def __iter__(self) -> Iterator[Application]:
        return iter(self._applications.values())

    def __len__(self) -> int:
        return len(self._applications)
