"""Bech32-style mock addresses.

Addresses look like ``<prefix>1<38 hex chars>``. They are derived from a
human-readable name with SHA-256, so ``addr_make("alice")`` is stable across
runs. No checksum is computed or verified.
"""

from __future__ import annotations

import hashlib
import re

from multistargate.interfaces.environment import AddressApi, InvalidAddressError

ADDRESS_DATA_LENGTH = 38


class MockAddressApi(AddressApi):
    """Address API for a given human-readable prefix (e.g. ``osmo``)."""

    def __init__(self, prefix: str) -> None:
        if not prefix or not prefix.isalnum() or not prefix.islower():
            raise ValueError(f"Invalid address prefix: {prefix!r}")
        self.prefix = prefix
        self._pattern = re.compile(rf"{re.escape(prefix)}1[0-9a-z]{{6,90}}")

    def addr_make(self, name: str) -> str:
        digest = hashlib.sha256(name.encode("utf-8")).hexdigest()
        return f"{self.prefix}1{digest[:ADDRESS_DATA_LENGTH]}"

    def addr_validate(self, address: str) -> str:
        if not address:
            raise InvalidAddressError(address, "empty address")
        # mixed case is never valid; a fully upper-case address is normalized
        if address != address.lower() and address != address.upper():
            raise InvalidAddressError(address, "mixed case")
        normalized = address.lower()
        if not self._pattern.fullmatch(normalized):
            raise InvalidAddressError(
                address, f"expected '{self.prefix}1' followed by 6-90 [0-9a-z]"
            )
        return normalized
