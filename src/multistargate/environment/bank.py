"""Bank keeper of the simulated chain.

Balances live in the chain storage under
``bank/balances/<address>/<denom>`` and total supplies under
``bank/supply/<denom>``, both as ASCII decimal integers. Every operation
checks all of its preconditions before writing anything.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from multistargate import config
from multistargate.domain.value_objects import Coin, coins_from_list, format_coins
from multistargate.interfaces.messages import AppResponse, Event, WireMessage

if TYPE_CHECKING:
    from multistargate.interfaces.storage import Storage

logger = logging.getLogger(__name__)

BALANCE_QUERY_PATH = "/cosmos.bank.v1beta1.Query/Balance"
ALL_BALANCES_QUERY_PATH = "/cosmos.bank.v1beta1.Query/AllBalances"


class BankError(Exception):
    """Base class for bank errors."""


class InsufficientFundsError(BankError):
    """Raised when an account holds less than it is asked to spend."""

    def __init__(self, address: str, denom: str, balance: int, amount: int) -> None:
        super().__init__(
            f"Insufficient funds: {address} has {balance}{denom}, needs {amount}{denom}"
        )
        self.address = address
        self.denom = denom
        self.balance = balance
        self.amount = amount


# ============================================================================
#                               Queries
# ============================================================================


@dataclass(frozen=True)
class QueryBalanceRequest(WireMessage):
    """Balance of one denom held by `address`."""

    TYPE_URL: ClassVar[str] = BALANCE_QUERY_PATH

    address: str
    denom: str


@dataclass(frozen=True)
class QueryBalanceResponse(WireMessage):
    """Answer to `QueryBalanceRequest`."""

    TYPE_URL: ClassVar[str] = "/cosmos.bank.v1beta1.QueryBalanceResponse"

    balance: Coin

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryBalanceResponse:
        return cls(balance=Coin.from_dict(data["balance"]))


@dataclass(frozen=True)
class QueryAllBalancesRequest(WireMessage):
    """Every non-zero balance held by `address`."""

    TYPE_URL: ClassVar[str] = ALL_BALANCES_QUERY_PATH

    address: str


@dataclass(frozen=True)
class QueryAllBalancesResponse(WireMessage):
    """Answer to `QueryAllBalancesRequest`, sorted by denom."""

    TYPE_URL: ClassVar[str] = "/cosmos.bank.v1beta1.QueryAllBalancesResponse"

    balances: tuple[Coin, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryAllBalancesResponse:
        return cls(balances=coins_from_list(data.get("balances", ())))


# ============================================================================
#                               Keeper
# ============================================================================


class BankKeeper:
    """Native coin balances and supplies.

    The keeper is stateless: every method takes the storage segment it must
    operate on.
    """

    BALANCES = f"{config.BANK_KEY_PREFIX}balances/"
    SUPPLY = f"{config.BANK_KEY_PREFIX}supply/"

    # --- Reads ---

    def balance(self, storage: Storage, address: str, denom: str) -> int:
        """Amount of `denom` held by `address` (0 if none)."""
        raw = storage.get(self._balance_key(address, denom))
        return int(raw) if raw is not None else 0

    def all_balances(self, storage: Storage, address: str) -> list[Coin]:
        """Every non-zero balance of `address`, sorted by denom."""
        prefix = f"{self.BALANCES}{address}/".encode("utf-8")
        return [
            Coin(denom=key[len(prefix) :].decode("utf-8"), amount=int(value))
            for key, value in storage.items(prefix)
        ]

    def supply(self, storage: Storage, denom: str) -> int:
        """Total amount of `denom` in existence."""
        raw = storage.get(f"{self.SUPPLY}{denom}".encode("utf-8"))
        return int(raw) if raw is not None else 0

    # --- Writes ---

    def send(
        self,
        storage: Storage,
        from_address: str,
        to_address: str,
        amount: Sequence[Coin],
    ) -> AppResponse:
        """Move `amount` from `from_address` to `to_address`.

        Raises:
            InsufficientFundsError: If the sender lacks any of the coins.
        """
        self._check_funds(storage, from_address, amount)
        for coin in amount:
            self._add(storage, from_address, coin.denom, -coin.amount)
            self._add(storage, to_address, coin.denom, coin.amount)
        logger.debug(
            "Sent %s from %s to %s", format_coins(amount), from_address, to_address
        )
        return AppResponse(
            events=[
                Event(
                    "transfer",
                    (
                        ("recipient", to_address),
                        ("sender", from_address),
                        ("amount", format_coins(amount)),
                    ),
                )
            ]
        )

    def burn(self, storage: Storage, address: str, amount: Sequence[Coin]) -> AppResponse:
        """Destroy `amount` held by `address`.

        Raises:
            InsufficientFundsError: If the holder lacks any of the coins.
        """
        self._check_funds(storage, address, amount)
        for coin in amount:
            self._add(storage, address, coin.denom, -coin.amount)
            self._add_supply(storage, coin.denom, -coin.amount)
        logger.debug("Burned %s from %s", format_coins(amount), address)
        return AppResponse(
            events=[
                Event("burn", (("burner", address), ("amount", format_coins(amount))))
            ]
        )

    def mint(self, storage: Storage, to_address: str, amount: Sequence[Coin]) -> AppResponse:
        """Create `amount` and credit it to `to_address`."""
        for coin in amount:
            self._add(storage, to_address, coin.denom, coin.amount)
            self._add_supply(storage, coin.denom, coin.amount)
        logger.debug("Minted %s to %s", format_coins(amount), to_address)
        return AppResponse(
            events=[
                Event(
                    "coinbase", (("minter", to_address), ("amount", format_coins(amount)))
                )
            ]
        )

    # --- Queries ---

    def query(self, storage: Storage, path: str, data: bytes) -> bytes:
        """Serve the bank query `path`."""
        if path == BALANCE_QUERY_PATH:
            request = QueryBalanceRequest.decode(data)
            amount = self.balance(storage, request.address, request.denom)
            return QueryBalanceResponse(
                balance=Coin(denom=request.denom, amount=amount)
            ).encode()
        if path == ALL_BALANCES_QUERY_PATH:
            all_request = QueryAllBalancesRequest.decode(data)
            return QueryAllBalancesResponse(
                balances=tuple(self.all_balances(storage, all_request.address))
            ).encode()
        raise ValueError(f"Unknown bank query path: {path}")

    @staticmethod
    def handles_query(path: str) -> bool:
        """Return True if `path` is a bank query."""
        return path in (BALANCE_QUERY_PATH, ALL_BALANCES_QUERY_PATH)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _balance_key(self, address: str, denom: str) -> bytes:
        return f"{self.BALANCES}{address}/{denom}".encode("utf-8")

    def _check_funds(self, storage: Storage, address: str, amount: Sequence[Coin]) -> None:
        needed: dict[str, int] = {}
        for coin in amount:
            needed[coin.denom] = needed.get(coin.denom, 0) + coin.amount
        for denom, total in needed.items():
            balance = self.balance(storage, address, denom)
            if balance < total:
                raise InsufficientFundsError(address, denom, balance, total)

    def _add(self, storage: Storage, address: str, denom: str, delta: int) -> None:
        key = self._balance_key(address, denom)
        new = self.balance(storage, address, denom) + delta
        if new == 0:
            storage.remove(key)
        else:
            storage.set(key, str(new).encode("ascii"))

    def _add_supply(self, storage: Storage, denom: str, delta: int) -> None:
        key = f"{self.SUPPLY}{denom}".encode("utf-8")
        new = self.supply(storage, denom) + delta
        if new == 0:
            storage.remove(key)
        else:
            storage.set(key, str(new).encode("ascii"))
