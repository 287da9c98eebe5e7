"""Unit tests for the upper bound of SQL prefix scans."""

import pytest

from multistargate.adapters.storage.sqlalchemy import prefix_end


@pytest.mark.parametrize(
    "prefix, expected",
    [
        (b"bank/", b"bank0"),
        (b"a", b"b"),
        (b"a\xfe", b"a\xff"),
        (b"a\xff", b"b"),
        (b"a\xff\xff", b"b"),
        (b"\x00", b"\x01"),
        (b"", None),
        (b"\xff", None),
        (b"\xff\xff", None),
    ],
)
def test_prefix_end(prefix, expected):
    """The bound is the prefix with its last incrementable byte bumped."""
    assert prefix_end(prefix) == expected
