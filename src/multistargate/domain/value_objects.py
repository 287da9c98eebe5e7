"""Module including value objects used across the domain layer."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Coin:
    """An amount of a single denom."""

    denom: str
    amount: int

    def __post_init__(self) -> None:
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError(f"Coin amount must be an int, got {self.amount!r}")
        if self.amount < 0:
            raise ValueError(f"Coin amount must be >= 0, got {self.amount}")
        if not isinstance(self.denom, str):
            raise TypeError(f"Coin denom must be a str, got {self.denom!r}")
        if not self.denom or not self.denom.strip():
            raise ValueError("Coin denom must be non-empty.")

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the coin."""
        return {"denom": self.denom, "amount": str(self.amount)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Coin:
        """Build a coin from its JSON representation (amount may be str or int)."""
        return cls(denom=data["denom"], amount=int(data["amount"]))


def coins_from_list(items: Iterable[Mapping[str, Any]]) -> tuple[Coin, ...]:
    """Decode a list of JSON coins."""
    return tuple(Coin.from_dict(item) for item in items)


def format_coins(coins: Iterable[Coin]) -> str:
    """Render coins the way chain events do, e.g. ``"100uosmo,5uatom"``."""
    return ",".join(str(coin) for coin in coins)


@dataclass(frozen=True)
class DenomUnit:
    """One display unit of a denom (e.g. ``uosmo`` with exponent 0)."""

    denom: str
    exponent: int
    aliases: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the unit."""
        return {
            "denom": self.denom,
            "exponent": self.exponent,
            "aliases": list(self.aliases),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DenomUnit:
        """Build a unit from its JSON representation."""
        return cls(
            denom=data["denom"],
            exponent=int(data["exponent"]),
            aliases=tuple(data.get("aliases", ())),
        )


@dataclass(frozen=True)
class Metadata:
    """Descriptive bank metadata of a denom. ``base`` is the denom itself."""

    # pylint: disable=too-many-instance-attributes

    base: str
    description: str = ""
    denom_units: tuple[DenomUnit, ...] = ()
    display: str = ""
    name: str = ""
    symbol: str = ""
    uri: str = ""
    uri_hash: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the metadata."""
        return {
            "base": self.base,
            "description": self.description,
            "denom_units": [unit.to_dict() for unit in self.denom_units],
            "display": self.display,
            "name": self.name,
            "symbol": self.symbol,
            "uri": self.uri,
            "uri_hash": self.uri_hash,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Metadata:
        """Build metadata from its JSON representation; missing fields default."""
        return cls(
            base=data["base"],
            description=data.get("description", ""),
            denom_units=tuple(
                DenomUnit.from_dict(unit) for unit in data.get("denom_units", ())
            ),
            display=data.get("display", ""),
            name=data.get("name", ""),
            symbol=data.get("symbol", ""),
            uri=data.get("uri", ""),
            uri_hash=data.get("uri_hash", ""),
        )


@dataclass(frozen=True)
class FeeCreation:
    """Fee charged on denom creation and the address collecting it."""

    fee: tuple[Coin, ...]
    fee_collector: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the fee."""
        return {
            "fee": [coin.to_dict() for coin in self.fee],
            "fee_collector": self.fee_collector,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FeeCreation:
        """Build a fee configuration from its JSON representation."""
        return cls(
            fee=coins_from_list(data["fee"]), fee_collector=data["fee_collector"]
        )
