"""Execution environment DTOs and the address API port."""

from __future__ import annotations

import abc
from dataclasses import dataclass, replace
from datetime import datetime, timedelta


class InvalidAddressError(ValueError):
    """Raised when an address fails validation."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Invalid address {address!r}: {reason}")
        self.address = address
        self.reason = reason


@dataclass(frozen=True, slots=True)
class BlockInfo:
    """Height, time and chain id of the block being executed."""

    height: int
    time: datetime
    chain_id: str

    def advance(self, seconds: int, blocks: int = 1) -> BlockInfo:
        """Return the block `blocks` heights and `seconds` seconds later."""
        return replace(
            self, height=self.height + blocks, time=self.time + timedelta(seconds=seconds)
        )


class AddressApi(abc.ABC):
    """Address validation and generation used by the chain and applications."""

    @abc.abstractmethod
    def addr_validate(self, address: str) -> str:
        """Validate and normalize an address.

        Raises:
            InvalidAddressError: If the address is malformed.
        """

    @abc.abstractmethod
    def addr_make(self, name: str) -> str:
        """Deterministically derive a valid address from a human-readable name."""


@dataclass(frozen=True, slots=True)
class Env:
    """Read-only context handed to applications on every call."""

    api: AddressApi
    block: BlockInfo
