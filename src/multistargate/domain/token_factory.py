"""Token factory ledger.

Tracks the lifecycle of factory denoms (``factory/<creator>/<subdenom>``):
creation, supply of record, descriptive metadata and the admin allowed to
manage each denom. A denom is either absent or active; there are no further
states.

Invariants:
- a denom exists iff it has an entry in ``supplies``;
- every existing denom has exactly one ``admin`` entry;
- ``supplies[denom] >= 0`` at all times;
- mint, burn, set-metadata and change-admin require ``sender == admin[denom]``.

This module is pure bookkeeping. Moving coins (fees, minting, burning) is the
job of the application wrapping the ledger.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from multistargate.domain.errors import (
    DenomAlreadyExistsError,
    DenomNotFoundError,
    InsufficientSupplyError,
    InvalidAmountError,
    InvalidDenomError,
    UnauthorizedError,
)
from multistargate.domain.value_objects import Coin, FeeCreation, Metadata

DENOM_PREFIX = "factory"
MAX_SUBDENOM_LENGTH = 44
SUBDENOM_PATTERN = re.compile(r"[a-zA-Z0-9./]*")


@dataclass
class TokenFactoryState:
    """Mutable state of the token factory ledger."""

    fee_creation: FeeCreation | None = None
    supplies: dict[str, int] = field(default_factory=dict)
    metadata: dict[str, Metadata] = field(default_factory=dict)
    admin: dict[str, str] = field(default_factory=dict)

    # --- Denoms ---

    @staticmethod
    def build_denom(creator: str, subdenom: str) -> str:
        """Derive the full denom name from its creator and subdenom.

        Raises:
            InvalidDenomError: If the subdenom is too long or holds invalid characters.
        """
        denom = f"{DENOM_PREFIX}/{creator}/{subdenom}"
        if len(subdenom) > MAX_SUBDENOM_LENGTH:
            raise InvalidDenomError(
                denom, f"subdenom longer than {MAX_SUBDENOM_LENGTH} characters"
            )
        if not SUBDENOM_PATTERN.fullmatch(subdenom):
            raise InvalidDenomError(denom, "subdenom has invalid characters")
        return denom

    def exists(self, denom: str) -> bool:
        """Return True if the denom has been created."""
        return denom in self.supplies

    def assert_admin(self, sender: str, denom: str) -> None:
        """Check that ``sender`` administers ``denom``.

        Raises:
            DenomNotFoundError: If the denom does not exist.
            UnauthorizedError: If the sender is not the admin.
        """
        if (admin := self.admin.get(denom)) is None or not self.exists(denom):
            raise DenomNotFoundError(denom)
        if admin != sender:
            raise UnauthorizedError(denom, admin, sender)

    # --- Operations ---

    def create_denom(self, sender: str, subdenom: str) -> str:
        """Create a new denom administered by ``sender`` with a zero supply.

        Returns:
            The full name of the new denom.

        Raises:
            InvalidDenomError: If the subdenom is malformed.
            DenomAlreadyExistsError: If the denom is already active.
        """
        denom = self.build_denom(sender, subdenom)
        if self.exists(denom):
            raise DenomAlreadyExistsError(denom)
        self.supplies[denom] = 0
        self.admin[denom] = sender
        return denom

    def mint(self, sender: str, denom: str, amount: int) -> int:
        """Increase the supply of record. Returns the new supply."""
        self.assert_admin(sender, denom)
        _check_amount(denom, amount)
        self.supplies[denom] += amount
        return self.supplies[denom]

    def burn(self, sender: str, denom: str, amount: int) -> int:
        """Decrease the supply of record. Returns the new supply.

        Raises:
            InsufficientSupplyError: If ``amount`` exceeds the current supply.
        """
        self.assert_admin(sender, denom)
        _check_amount(denom, amount)
        supply = self.supplies[denom]
        if amount > supply:
            raise InsufficientSupplyError(denom, supply, amount)
        self.supplies[denom] = supply - amount
        return self.supplies[denom]

    def set_metadata(self, sender: str, metadata: Metadata) -> None:
        """Overwrite the metadata of ``metadata.base``."""
        self.assert_admin(sender, metadata.base)
        self.metadata[metadata.base] = metadata

    def change_admin(self, sender: str, denom: str, new_admin: str) -> None:
        """Hand the administration of ``denom`` over to ``new_admin``."""
        self.assert_admin(sender, denom)
        self.admin[denom] = new_admin

    # --- Configuration ---

    def set_fee_creation(self, fee: Sequence[Coin], fee_collector: str) -> None:
        """Charge ``fee`` (paid to ``fee_collector``) on every denom creation."""
        self.fee_creation = FeeCreation(fee=tuple(fee), fee_collector=fee_collector)

    def clear_fee_creation(self) -> None:
        """Make denom creation free."""
        self.fee_creation = None

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the ledger."""
        return {
            "fee_creation": (
                self.fee_creation.to_dict() if self.fee_creation is not None else None
            ),
            "supplies": {denom: str(supply) for denom, supply in self.supplies.items()},
            "metadata": {
                denom: metadata.to_dict() for denom, metadata in self.metadata.items()
            },
            "admin": dict(self.admin),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TokenFactoryState:
        """Rebuild the ledger from its JSON representation."""
        fee_creation = data.get("fee_creation")
        return cls(
            fee_creation=(
                FeeCreation.from_dict(fee_creation) if fee_creation is not None else None
            ),
            supplies={
                denom: int(supply) for denom, supply in data.get("supplies", {}).items()
            },
            metadata={
                denom: Metadata.from_dict(metadata)
                for denom, metadata in data.get("metadata", {}).items()
            },
            admin=dict(data.get("admin", {})),
        )


def _check_amount(denom: str, amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError(denom, amount)
