"""Unit tests for TypeUrl sets and the application registry."""

from __future__ import annotations

import logging

import pytest

from multistargate.applications.token_factory import TokenFactoryApplication
from multistargate.service_layer.application import TypeUrl
from multistargate.service_layer.errors import (
    DuplicateApplicationError,
    NamespaceCollisionError,
    NoApplicationForTypeUrl,
    TypeUrlCollisionError,
    UnknownApplicationError,
)
from multistargate.service_layer.registry import ApplicationRegistry
from tests.helpers.fakes import CounterApplication, CounterMsgUrl, CounterQueryUrl

# pylint: disable=magic-value-comparison


class NoQueryUrl(TypeUrl):
    """Owns no query."""


class ClashingMsgUrl(TypeUrl):
    """Claims a counter message type URL."""

    INCREMENT = CounterMsgUrl.INCREMENT.value


class ClashingApplication(CounterApplication):
    """Different name, overlapping message type URLs."""

    NAME = "clashing"
    NAMESPACE = "clashing"
    MSG_URLS = ClashingMsgUrl
    QUERY_URLS = NoQueryUrl


class QueryAsMsgUrl(TypeUrl):
    """Claims a counter query type URL as a message."""

    COUNT = CounterQueryUrl.COUNT.value


class CrossKindApplication(CounterApplication):
    """Claims, as a message, a URL the counter owns as a query."""

    NAME = "cross_kind"
    NAMESPACE = "cross_kind"
    MSG_URLS = QueryAsMsgUrl
    QUERY_URLS = NoQueryUrl


class SharedNamespaceApplication(CounterApplication):
    """Different name and URLs, same namespace as the counter."""

    NAME = "shared_namespace"
    MSG_URLS = NoQueryUrl
    QUERY_URLS = NoQueryUrl


class TestTypeUrl:
    """Tests for TypeUrl lookups."""

    @staticmethod
    def test_lookup_known_and_unknown():
        """`lookup` maps strings to members, unknown strings to None."""
        assert CounterMsgUrl.lookup("/test.counter.v1.MsgIncrement") is CounterMsgUrl.INCREMENT
        assert CounterMsgUrl.lookup("/test.counter.v1.MsgUnknown") is None

    @staticmethod
    def test_values_lists_every_url():
        """`values` is the closed set of URL strings."""
        assert CounterQueryUrl.values() == frozenset(
            {"/test.counter.v1.Query/Count", "/test.counter.v1.Query/Proxy"}
        )

    @staticmethod
    def test_members_compare_as_strings():
        """Members are usable wherever a plain type URL string is expected."""
        assert CounterMsgUrl.INCREMENT == "/test.counter.v1.MsgIncrement"


class TestRegistry:
    """Tests for ApplicationRegistry."""

    @staticmethod
    def test_finds_owner_by_type_url():
        """Message and query URLs resolve to their application."""
        counter = CounterApplication()
        factory = TokenFactoryApplication()
        registry = ApplicationRegistry.register([counter, factory])

        assert registry.find_by_msg_type_url(CounterMsgUrl.INCREMENT) is counter
        assert (
            registry.find_by_msg_type_url("/osmosis.tokenfactory.v1beta1.MsgMint")
            is factory
        )
        assert (
            registry.find_by_query_type_url("/osmosis.tokenfactory.v1beta1.Query/Params")
            is factory
        )

    @staticmethod
    def test_message_url_is_not_a_query_url():
        """Routing keeps messages and queries apart."""
        registry = ApplicationRegistry.register([CounterApplication()])
        with pytest.raises(NoApplicationForTypeUrl) as exc_info:
            registry.find_by_query_type_url(CounterMsgUrl.INCREMENT)
        assert exc_info.value.kind == "query"

    @staticmethod
    def test_unknown_url_is_a_lookup_error():
        """Unknown type URLs raise a LookupError subclass."""
        registry = ApplicationRegistry.register([CounterApplication()])
        with pytest.raises(LookupError):
            registry.find_by_msg_type_url("/nobody.v1.MsgNothing")

    @staticmethod
    def test_collision_is_rejected(caplog):
        """Two applications may not own the same type URL."""
        with caplog.at_level(logging.ERROR):
            with pytest.raises(TypeUrlCollisionError) as exc_info:
                ApplicationRegistry.register([CounterApplication(), ClashingApplication()])
        error = exc_info.value
        assert error.type_url == CounterMsgUrl.INCREMENT
        assert (error.application, error.existing) == ("clashing", "counter")
        assert "Duplicated type_url among applications" in str(error)
        assert "already owned by counter" in caplog.text

    @staticmethod
    def test_collision_across_kinds_is_rejected():
        """A message URL may not shadow another application's query URL."""
        with pytest.raises(TypeUrlCollisionError):
            ApplicationRegistry.register([CounterApplication(), CrossKindApplication()])

    @staticmethod
    def test_failed_add_leaves_registry_unchanged():
        """A rejected application is not half-registered."""
        registry = ApplicationRegistry.register([CounterApplication()])
        with pytest.raises(TypeUrlCollisionError):
            registry.add(ClashingApplication())
        assert registry.names() == ["counter"]

    @staticmethod
    def test_duplicate_name_is_rejected():
        """Names are unique within a registry."""
        with pytest.raises(DuplicateApplicationError):
            ApplicationRegistry.register([CounterApplication(), CounterApplication()])

    @staticmethod
    def test_shared_namespace_is_rejected():
        """Two applications may not persist under the same namespace."""
        with pytest.raises(NamespaceCollisionError) as exc_info:
            ApplicationRegistry.register(
                [CounterApplication(), SharedNamespaceApplication()]
            )
        assert exc_info.value.existing == "counter"

    @staticmethod
    def test_get_by_name():
        """Applications are addressable by name."""
        counter = CounterApplication()
        registry = ApplicationRegistry.register([counter])
        assert registry.get("counter") is counter
        assert "counter" in registry
        assert len(registry) == 1
        assert list(registry) == [counter]
        with pytest.raises(UnknownApplicationError):
            registry.get("bank")

    @staticmethod
    def test_empty_registry_routes_nothing():
        """An empty registry is valid and owns no URL."""
        registry = ApplicationRegistry.register([])
        assert registry.names() == []
        with pytest.raises(NoApplicationForTypeUrl):
            registry.find_by_msg_type_url(CounterMsgUrl.INCREMENT)
