"""Unit tests for the in-memory Unit of Work."""

import pytest

from multistargate.adapters.storage import InMemoryStorage
from multistargate.adapters.unit_of_work import InMemoryUnitOfWork

# pylint: disable=magic-value-comparison


def test_commit_persists():
    """Committed writes reach the backing store."""
    backing = InMemoryStorage()
    uow = InMemoryUnitOfWork(backing)
    with uow:
        uow.storage.set(b"k", b"v")
        uow.commit()
    assert backing.get(b"k") == b"v"


def test_exit_without_commit_discards():
    """Leaving the context without committing rolls back."""
    uow = InMemoryUnitOfWork()
    with uow:
        uow.storage.set(b"k", b"v")
    assert uow.backing.get(b"k") is None


def test_rolls_back_on_error():
    """An exception inside the context triggers a rollback."""

    class MyException(Exception):
        """Custom exception for testing."""

    uow = InMemoryUnitOfWork()
    with pytest.raises(MyException):
        with uow:
            uow.storage.set(b"k", b"v")
            raise MyException()
    with uow:
        assert uow.storage.get(b"k") is None


def test_each_unit_sees_previous_commits():
    """A fresh unit starts from the committed state."""
    uow = InMemoryUnitOfWork()
    with uow:
        uow.storage.set(b"k", b"1")
        uow.commit()
    with uow:
        assert uow.storage.get(b"k") == b"1"


def test_reentering_nests_a_layer():
    """An inner block commits into the outer unit, which still decides."""
    uow = InMemoryUnitOfWork()
    with uow:
        uow.storage.set(b"outer", b"1")
        with uow:
            assert uow.depth == 2
            assert uow.storage.get(b"outer") == b"1"
            uow.storage.set(b"inner", b"2")
            uow.commit()
        assert uow.depth == 1
        assert uow.storage.get(b"inner") == b"2"
        assert uow.backing.get(b"inner") is None
        uow.commit()
    assert uow.depth == 0
    assert uow.backing.get(b"inner") == b"2"


def test_inner_rollback_keeps_outer_writes():
    """A failing inner block drops only its own writes."""
    uow = InMemoryUnitOfWork()
    with uow:
        uow.storage.set(b"outer", b"1")
        with pytest.raises(RuntimeError):
            with uow:
                uow.storage.set(b"inner", b"2")
                raise RuntimeError("inner failure")
        uow.commit()
    assert uow.backing.get(b"outer") == b"1"
    assert uow.backing.get(b"inner") is None
