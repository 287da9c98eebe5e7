"""Unit tests for the mock address API."""

import pytest

from multistargate.environment import MockAddressApi
from multistargate.interfaces.environment import InvalidAddressError

# pylint: disable=magic-value-comparison


def test_addr_make_is_deterministic():
    """The same name always gives the same address."""
    api = MockAddressApi("osmo")
    assert api.addr_make("alice") == api.addr_make("alice")
    assert api.addr_make("alice") != api.addr_make("bob")


def test_addr_make_shape():
    """Made addresses carry the prefix and 38 data characters."""
    address = MockAddressApi("osmo").addr_make("alice")
    assert address.startswith("osmo1")
    assert len(address) == len("osmo1") + 38


def test_made_addresses_validate():
    """Every made address is valid on its own chain."""
    api = MockAddressApi("juno")
    address = api.addr_make("x")
    assert api.addr_validate(address) == address


def test_upper_case_address_is_normalized():
    """A fully upper-case address validates to its lower-case form."""
    api = MockAddressApi("osmo")
    address = api.addr_make("alice")
    assert api.addr_validate(address.upper()) == address


@pytest.mark.parametrize(
    "address",
    [
        "",
        "osmo1",
        "osmo1abc",
        "cosmos1qqqqqqqqqqqq",
        "Osmo1qqqqqqqqqq",
        "osmo1qqqqqqqqqq\n",
        "osmo1qqqq-qqqqq",
    ],
)
def test_invalid_addresses(address):
    """Wrong prefix, short data, mixed case and stray characters are refused."""
    with pytest.raises(InvalidAddressError):
        MockAddressApi("osmo").addr_validate(address)


@pytest.mark.parametrize("prefix", ["", "Osmo", "os mo"])
def test_invalid_prefix(prefix):
    """The address prefix is lower-case alphanumeric."""
    with pytest.raises(ValueError):
        MockAddressApi(prefix)
