"""Unit tests for the token factory ledger."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from multistargate.domain.errors import (
    DenomAlreadyExistsError,
    DenomNotFoundError,
    InsufficientSupplyError,
    InvalidAmountError,
    InvalidDenomError,
    UnauthorizedError,
)
from multistargate.domain.token_factory import MAX_SUBDENOM_LENGTH, TokenFactoryState
from multistargate.domain.value_objects import Coin, FeeCreation, Metadata

# pylint: disable=redefined-outer-name,magic-value-comparison

ALICE = "osmo1alice"
BOB = "osmo1bob"


@pytest.fixture
def state() -> TokenFactoryState:
    """A ledger with ``factory/osmo1alice/foo`` administered by alice."""
    ledger = TokenFactoryState()
    ledger.create_denom(ALICE, "foo")
    return ledger


# ===========================================================================
#                               Creation
# ===========================================================================


def test_create_denom_builds_factory_name():
    """Denoms are namespaced by their creator."""
    ledger = TokenFactoryState()
    denom = ledger.create_denom(ALICE, "foo")
    assert denom == "factory/osmo1alice/foo"
    assert ledger.supplies[denom] == 0
    assert ledger.admin[denom] == ALICE


def test_same_subdenom_by_two_creators_gives_two_denoms(state):
    """Subdenoms only collide within one creator."""
    other = state.create_denom(BOB, "foo")
    assert other == "factory/osmo1bob/foo"
    assert state.exists("factory/osmo1alice/foo") and state.exists(other)


def test_create_existing_denom_fails(state):
    """A denom can be created only once."""
    with pytest.raises(DenomAlreadyExistsError):
        state.create_denom(ALICE, "foo")


def test_empty_subdenom_is_allowed():
    """The subdenom may be empty."""
    assert TokenFactoryState().create_denom(ALICE, "") == "factory/osmo1alice/"


@pytest.mark.parametrize(
    "subdenom",
    ["a" * (MAX_SUBDENOM_LENGTH + 1), "with space", "dash-ed", "emoji😀"],
)
def test_invalid_subdenom_is_rejected(subdenom):
    """Subdenoms are short and restricted to ``[a-zA-Z0-9./]``."""
    with pytest.raises(InvalidDenomError):
        TokenFactoryState().create_denom(ALICE, subdenom)


def test_longest_subdenom_is_accepted():
    """Exactly the maximum length is fine."""
    TokenFactoryState().create_denom(ALICE, "a" * MAX_SUBDENOM_LENGTH)


# ===========================================================================
#                             Mint and burn
# ===========================================================================


def test_mint_then_burn_tracks_supply(state):
    """Supply of record follows mints and burns."""
    denom = "factory/osmo1alice/foo"
    assert state.mint(ALICE, denom, 100) == 100
    assert state.burn(ALICE, denom, 40) == 60
    assert state.supplies[denom] == 60


def test_mint_by_non_admin_fails(state):
    """Only the admin mints."""
    with pytest.raises(UnauthorizedError) as exc_info:
        state.mint(BOB, "factory/osmo1alice/foo", 1)
    assert exc_info.value.admin == ALICE
    assert state.supplies["factory/osmo1alice/foo"] == 0


def test_mint_unknown_denom_fails(state):
    """Minting a denom that was never created fails."""
    with pytest.raises(DenomNotFoundError):
        state.mint(ALICE, "factory/osmo1alice/bar", 1)


@pytest.mark.parametrize("amount", [0, -5])
def test_non_positive_amounts_are_rejected(state, amount):
    """Mint and burn amounts must be positive."""
    with pytest.raises(InvalidAmountError):
        state.mint(ALICE, "factory/osmo1alice/foo", amount)
    with pytest.raises(InvalidAmountError):
        state.burn(ALICE, "factory/osmo1alice/foo", amount)


def test_burn_more_than_supply_fails_without_change(state):
    """Burning past the supply of record is refused."""
    denom = "factory/osmo1alice/foo"
    state.mint(ALICE, denom, 10)
    with pytest.raises(InsufficientSupplyError):
        state.burn(ALICE, denom, 11)
    assert state.supplies[denom] == 10


# ===========================================================================
#                           Metadata and admin
# ===========================================================================


def test_set_metadata_by_admin(state):
    """The admin may describe the denom."""
    metadata = Metadata(base="factory/osmo1alice/foo", symbol="FOO")
    state.set_metadata(ALICE, metadata)
    assert state.metadata["factory/osmo1alice/foo"] == metadata


def test_set_metadata_by_non_admin_fails(state):
    """Only the admin describes the denom."""
    with pytest.raises(UnauthorizedError):
        state.set_metadata(BOB, Metadata(base="factory/osmo1alice/foo"))
    assert not state.metadata


def test_change_admin_moves_authority(state):
    """After a change of admin only the new admin is authorized."""
    denom = "factory/osmo1alice/foo"
    state.change_admin(ALICE, denom, BOB)
    assert state.mint(BOB, denom, 1) == 1
    with pytest.raises(UnauthorizedError):
        state.mint(ALICE, denom, 1)


# ===========================================================================
#                             Configuration
# ===========================================================================


def test_fee_creation_can_be_set_and_cleared():
    """The creation fee is plain configuration on the ledger."""
    ledger = TokenFactoryState()
    ledger.set_fee_creation([Coin("uosmo", 10)], "osmo1collector")
    assert ledger.fee_creation == FeeCreation((Coin("uosmo", 10),), "osmo1collector")
    ledger.clear_fee_creation()
    assert ledger.fee_creation is None


def test_serialization_round_trip(state):
    """The ledger survives encoding, including big supplies."""
    denom = "factory/osmo1alice/foo"
    state.mint(ALICE, denom, 2**100)
    state.set_metadata(ALICE, Metadata(base=denom, name="Foo"))
    state.set_fee_creation([Coin("uosmo", 1)], "osmo1collector")
    data = state.to_dict()
    assert data["supplies"][denom] == str(2**100)
    assert TokenFactoryState.from_dict(data) == state


# ===========================================================================
#                               Properties
# ===========================================================================


@pytest.mark.property
@given(
    st.lists(
        st.tuples(st.sampled_from(["mint", "burn"]), st.integers(min_value=-3, max_value=50)),
        max_size=40,
    )
)
def test_supply_never_goes_negative(operations):
    """Whatever the sequence of mints and burns, the supply stays >= 0."""
    ledger = TokenFactoryState()
    denom = ledger.create_denom(ALICE, "foo")
    expected = 0
    for kind, amount in operations:
        try:
            if kind == "mint":
                ledger.mint(ALICE, denom, amount)
                expected += amount
            else:
                ledger.burn(ALICE, denom, amount)
                expected -= amount
        except (InvalidAmountError, InsufficientSupplyError):
            pass
        assert ledger.supplies[denom] >= 0
    assert ledger.supplies[denom] == expected
