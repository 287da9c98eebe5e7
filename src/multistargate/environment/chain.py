"""Chain facade and the router handle it gives to applications.

`Chain` is the entry point of a test: it owns the storage unit of work, the
bank keeper, the address API, the current block and the `Dispatcher`. Every
top-level operation runs in its own unit of work, committed on success and
rolled back on failure.

Applications never see the `Chain` itself. They get a `ChainRouter` bound to
the storage segment of the call they are serving. Each call through the
router runs in a `StorageTransaction` layered over that segment, so a nested
call that fails leaves nothing behind even when the caller catches the error.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from multistargate import config
from multistargate.adapters.storage import StorageTransaction
from multistargate.interfaces.environment import BlockInfo, Env
from multistargate.interfaces.messages import (
    AppResponse,
    BankBurn,
    BankMint,
    BankSend,
    CosmosMsg,
    StargateMsg,
    SudoMsg,
)
from multistargate.interfaces.router import Querier, Router
from multistargate.service_layer.errors import NoApplicationForTypeUrl

from .bank import (
    ALL_BALANCES_QUERY_PATH,
    BALANCE_QUERY_PATH,
    BankKeeper,
    QueryAllBalancesRequest,
    QueryAllBalancesResponse,
    QueryBalanceRequest,
    QueryBalanceResponse,
)

if TYPE_CHECKING:
    from multistargate.domain.value_objects import Coin
    from multistargate.interfaces.environment import AddressApi
    from multistargate.interfaces.storage import Storage
    from multistargate.interfaces.unit_of_work import AbstractUnitOfWork
    from multistargate.service_layer.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

# pylint: disable=protected-access,too-many-arguments


class UnsupportedMessageError(Exception):
    """Raised when the chain has no handler for a message kind."""

    def __init__(self, msg: object) -> None:
        super().__init__(f"Unsupported message: {type(msg).__name__}")
        self.msg = msg


# ============================================================================
#                           Handles for applications
# ============================================================================


class ChainQuerier(Querier):
    """Read-only handle over one storage segment of the chain."""

    def __init__(self, chain: Chain, storage: Storage) -> None:
        self._chain = chain
        self._storage = storage

    def query(self, path: str, data: bytes) -> bytes:
        return self._chain._query(self._storage, path, data)


class ChainRouter(ChainQuerier, Router):
    """Read-write handle over one storage segment of the chain."""

    def execute(self, sender: str, msg: CosmosMsg) -> AppResponse:
        sender = self._chain.api.addr_validate(sender)
        return self._in_transaction(lambda tx: self._chain._execute(tx, sender, msg))

    def sudo(self, msg: SudoMsg) -> AppResponse:
        return self._in_transaction(lambda tx: self._chain._sudo(tx, msg))

    def _in_transaction(self, call: Callable[[Storage], AppResponse]) -> AppResponse:
        tx = StorageTransaction(self._storage)
        try:
            response = call(tx)
        except Exception:
            logger.debug("Nested call failed; discarding its writes")
            tx.discard()
            raise
        tx.commit()
        return response


# ============================================================================
#                                   Chain
# ============================================================================


class Chain:
    """A deterministic, in-process chain hosting stargate applications.

    Args:
        uow: Unit of work giving access to the chain storage.
        dispatcher: Routes stargate messages and queries to applications.
        api: Address validation and generation.
        bank: Native coin keeper. A fresh `BankKeeper` when omitted.
        block: Initial block. The default test block when omitted.
    """

    def __init__(
        self,
        uow: AbstractUnitOfWork,
        dispatcher: Dispatcher,
        api: AddressApi,
        bank: BankKeeper | None = None,
        block: BlockInfo | None = None,
    ) -> None:
        self.uow = uow
        self.dispatcher = dispatcher
        self.api = api
        self.bank = bank if bank is not None else BankKeeper()
        self.block = block if block is not None else default_block()
        self._lock = threading.RLock()

    @property
    def env(self) -> Env:
        """Address API and current block, as seen by applications."""
        return Env(api=self.api, block=self.block)

    def addr_make(self, name: str) -> str:
        """Derive a valid address from `name`."""
        return self.api.addr_make(name)

    # --- Transactions ---

    def execute(self, sender: str, msg: CosmosMsg) -> AppResponse:
        """Run `msg` on behalf of `sender` in its own transaction.

        Raises:
            InvalidAddressError: If `sender` is not a valid address.
            UnsupportedMessageError: If the chain cannot run `msg`.
            Exception: Whatever the bank or the target application raised.
                Nothing is persisted in that case.
        """
        sender = self.api.addr_validate(sender)
        with self._lock, self.uow:
            response = self._execute(self.uow.storage, sender, msg)
            self.uow.commit()
        return response

    def sudo(self, msg: SudoMsg) -> AppResponse:
        """Run a privileged message in its own transaction."""
        with self._lock, self.uow:
            response = self._sudo(self.uow.storage, msg)
            self.uow.commit()
        return response

    def mint(self, to_address: str, coins: Iterable[Coin]) -> AppResponse:
        """Fund `to_address` with freshly minted `coins`."""
        return self.sudo(BankMint(to_address=to_address, amount=tuple(coins)))

    # --- Queries ---

    def query(self, path: str, data: bytes) -> bytes:
        """Run a read-only query. Nothing is persisted."""
        with self._lock, self.uow:
            return self._query(self.uow.storage, path, data)

    def query_balance(self, address: str, denom: str) -> int:
        """Balance of `denom` held by `address`."""
        raw = self.query(
            BALANCE_QUERY_PATH, QueryBalanceRequest(address=address, denom=denom).encode()
        )
        return QueryBalanceResponse.decode(raw).balance.amount

    def query_all_balances(self, address: str) -> list[Coin]:
        """Every non-zero balance of `address`, sorted by denom."""
        raw = self.query(
            ALL_BALANCES_QUERY_PATH, QueryAllBalancesRequest(address=address).encode()
        )
        return list(QueryAllBalancesResponse.decode(raw).balances)

    # --- Block ---

    def increase_time(self, seconds: int) -> None:
        """Move the block time forward without producing a block."""
        self.block = self.block.advance(seconds, blocks=0)
        logger.debug("Block time is now %s", self.block.time.isoformat())

    def next_block(self) -> None:
        """Produce one block, `DEFAULT_BLOCK_TIME_SECONDS` after the current one."""
        self.block = self.block.advance(config.DEFAULT_BLOCK_TIME_SECONDS)
        logger.debug("Block height is now %d", self.block.height)

    # --- Direct state access ---

    @contextmanager
    def application_state(self, name: str) -> Iterator[Any]:
        """Expose the persisted state of application `name` for direct set-up.

        Changes made to the yielded state are saved when the block exits
        without an exception. Chain calls made inside the block join its
        transaction, but none may execute on application `name` itself: it
        is held for the whole block.

        Raises:
            UnknownApplicationError: If no application has that name.
            ReentrantDispatchError: If a call inside the block executes on
                application `name`.
        """
        store = self.dispatcher.state_store(name)
        with self._lock, self.uow, self.dispatcher.hold(name):
            with store.use(self.uow.storage) as state:
                yield state
            self.uow.commit()

    def load_state(self, name: str) -> Any:
        """Return a detached copy of the persisted state of application `name`.

        Nothing is written back, whatever the caller does with the copy.

        Raises:
            UnknownApplicationError: If no application has that name.
        """
        store = self.dispatcher.state_store(name)
        with self._lock, self.uow:
            return store.load(self.uow.storage)

    # --------------------------------------------------------------------- #
    # Internals, shared with the router handles
    # --------------------------------------------------------------------- #

    def _execute(self, storage: Storage, sender: str, msg: CosmosMsg) -> AppResponse:
        match msg:
            case BankSend():
                to_address = self.api.addr_validate(msg.to_address)
                return self.bank.send(storage, sender, to_address, msg.amount)
            case BankBurn():
                return self.bank.burn(storage, sender, msg.amount)
            case StargateMsg():
                return self.dispatcher.execute(
                    storage,
                    ChainRouter(self, storage),
                    self.env,
                    sender,
                    msg.type_url,
                    msg.value,
                )
            case _:
                raise UnsupportedMessageError(msg)

    def _sudo(self, storage: Storage, msg: SudoMsg) -> AppResponse:
        match msg:
            case BankMint():
                to_address = self.api.addr_validate(msg.to_address)
                return self.bank.mint(storage, to_address, msg.amount)
            case _:
                raise UnsupportedMessageError(msg)

    def _query(self, storage: Storage, path: str, data: bytes) -> bytes:
        if self.bank.handles_query(path):
            return self.bank.query(storage, path, data)
        if not self.dispatcher.handles_query(path):
            logger.error("No bank path or application answers query %s", path)
            raise NoApplicationForTypeUrl(path, kind="query")
        return self.dispatcher.query(
            storage, ChainQuerier(self, storage), self.env, path, data
        )


def default_block() -> BlockInfo:
    """The block every fresh chain starts at."""
    return BlockInfo(
        height=config.DEFAULT_BLOCK_HEIGHT,
        time=config.DEFAULT_BLOCK_TIME,
        chain_id=config.DEFAULT_CHAIN_ID,
    )
