"""Unit tests for the StorageTransaction write overlay."""

from multistargate.adapters.storage import InMemoryStorage, StorageTransaction

# pylint: disable=magic-value-comparison


def make_parent() -> InMemoryStorage:
    """A parent store holding two keys."""
    parent = InMemoryStorage()
    parent.set(b"a", b"1")
    parent.set(b"b", b"2")
    return parent


def test_writes_are_buffered_until_commit():
    """The parent only sees writes after commit."""
    parent = make_parent()
    tx = StorageTransaction(parent)
    tx.set(b"c", b"3")
    tx.remove(b"a")

    assert tx.get(b"c") == b"3"
    assert tx.get(b"a") is None
    assert parent.get(b"c") is None
    assert parent.get(b"a") == b"1"
    assert tx.dirty

    tx.commit()
    assert parent.get(b"c") == b"3"
    assert parent.get(b"a") is None
    assert not tx.dirty


def test_discard_drops_writes():
    """Discarding leaves the parent untouched and the overlay clean."""
    parent = make_parent()
    tx = StorageTransaction(parent)
    tx.set(b"a", b"changed")
    tx.discard()
    assert tx.get(b"a") == b"1"
    assert parent.get(b"a") == b"1"


def test_items_merges_overlay_and_parent():
    """Iteration sees the overlay's view, in key order."""
    tx = StorageTransaction(make_parent())
    tx.set(b"aa", b"x")
    tx.remove(b"b")
    tx.set(b"a", b"9")
    assert list(tx.items()) == [(b"a", b"9"), (b"aa", b"x")]
    assert list(tx.items(b"a")) == [(b"a", b"9"), (b"aa", b"x")]
    assert list(tx.items(b"b")) == []


def test_nested_transactions_commit_one_level():
    """A child commits into its parent overlay, not into the backing store."""
    backing = make_parent()
    outer = StorageTransaction(backing)
    inner = StorageTransaction(outer)
    inner.set(b"z", b"26")
    inner.commit()

    assert inner.parent is outer
    assert outer.get(b"z") == b"26"
    assert backing.get(b"z") is None

    outer.discard()
    assert outer.get(b"z") is None
