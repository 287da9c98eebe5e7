"""Token factory application.

Wraps the `TokenFactoryState` ledger as a dispatchable application: decodes
payloads, checks the embedded sender, applies the ledger operation and turns
it into effects on the surrounding chain through the router handle:

- creation fee: ``router.execute(sender, BankSend(collector, fee))``;
- mint: ``router.sudo(BankMint(to, amount))``;
- burn: ``router.execute(from, BankBurn(amount))``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from multistargate.domain.errors import (
    DenomNotFoundError,
    FeeCollectionError,
    SenderMismatchError,
)
from multistargate.domain.token_factory import TokenFactoryState
from multistargate.domain.value_objects import FeeCreation, format_coins
from multistargate.interfaces.messages import (
    AppResponse,
    BankBurn,
    BankMint,
    BankSend,
    Event,
)
from multistargate.service_layer.application import Application
from multistargate.service_layer.errors import UnknownTypeUrlError

from .messages import (
    MsgBurn,
    MsgChangeAdmin,
    MsgCreateDenom,
    MsgCreateDenomResponse,
    MsgMint,
    MsgSetDenomMetadata,
    QueryDenomAuthorityMetadataRequest,
    QueryDenomAuthorityMetadataResponse,
    QueryParamsResponse,
    TokenFactoryMsgUrl,
    TokenFactoryQueryUrl,
)

if TYPE_CHECKING:
    from multistargate.interfaces.environment import Env
    from multistargate.interfaces.router import Querier, Router

# pylint: disable=too-many-arguments

logger = logging.getLogger(__name__)

DENOM_CREATION_GAS_CONSUME = 200_000

ExecuteHandler = Callable[[TokenFactoryState, str, bytes, "Router", "Env"], AppResponse]


class TokenFactoryApplication(Application[TokenFactoryState]):
    """Denom lifecycle ledger: create, mint, burn, set metadata, change admin.

    Args:
        fee_creation: Fee charged on every denom creation in a fresh state.
            The fee can also be changed later through the chain's
            `application_state` helper.
    """

    NAME = "token_factory"
    NAMESPACE = "token_factory"
    MSG_URLS = TokenFactoryMsgUrl
    QUERY_URLS = TokenFactoryQueryUrl

    def __init__(self, fee_creation: FeeCreation | None = None) -> None:
        self.fee_creation = fee_creation
        self._execute_handlers: dict[TokenFactoryMsgUrl, ExecuteHandler] = {
            TokenFactoryMsgUrl.CREATE_DENOM: self._run_create_denom,
            TokenFactoryMsgUrl.MINT: self._run_mint,
            TokenFactoryMsgUrl.BURN: self._run_burn,
            TokenFactoryMsgUrl.SET_DENOM_METADATA: self._run_set_denom_metadata,
            TokenFactoryMsgUrl.CHANGE_ADMIN: self._run_change_admin,
        }

    # --- State ---

    def default_state(self) -> TokenFactoryState:
        return TokenFactoryState(fee_creation=self.fee_creation)

    def encode_state(self, state: TokenFactoryState) -> dict[str, Any]:
        return state.to_dict()

    def decode_state(self, data: Mapping[str, Any]) -> TokenFactoryState:
        return TokenFactoryState.from_dict(data)

    # --- Dispatch ---

    def handle_execute(
        self,
        state: TokenFactoryState,
        sender: str,
        type_url: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        if (msg_url := TokenFactoryMsgUrl.lookup(type_url)) is None:
            raise UnknownTypeUrlError(self.NAME, type_url)
        return self._execute_handlers[msg_url](state, sender, value, router, env)

    def handle_query(
        self,
        state: TokenFactoryState,
        type_url: str,
        value: bytes,
        querier: Querier,
        env: Env,
    ) -> bytes:
        match TokenFactoryQueryUrl.lookup(type_url):
            case TokenFactoryQueryUrl.PARAMS:
                return self._query_params(state)
            case TokenFactoryQueryUrl.DENOM_AUTHORITY_METADATA:
                return self._query_denom_authority_metadata(state, value)
            case _:
                raise UnknownTypeUrlError(self.NAME, type_url)

    # ============================================================================
    #                               Messages
    # ============================================================================

    def _run_create_denom(
        self,
        state: TokenFactoryState,
        sender: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        msg = MsgCreateDenom.decode(value)
        _check_sender(sender, msg.sender)

        denom = state.create_denom(sender, msg.subdenom)
        response = AppResponse()

        if (fee_creation := state.fee_creation) is not None:
            logger.debug(
                "Collecting creation fee %s for %s",
                format_coins(fee_creation.fee),
                denom,
            )
            try:
                fee_response = router.execute(
                    sender,
                    BankSend(
                        to_address=fee_creation.fee_collector,
                        amount=fee_creation.fee,
                    ),
                )
            except Exception as e:  # pylint: disable=broad-except
                raise FeeCollectionError(denom, sender, e) from e
            response.absorb(fee_response)

        response.events.append(
            Event(
                "create_denom",
                (("creator", sender), ("new_token_denom", denom)),
            )
        )
        response.data = MsgCreateDenomResponse(new_token_denom=denom).encode()
        return response

    def _run_mint(
        self,
        state: TokenFactoryState,
        sender: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        msg = MsgMint.decode(value)
        _check_sender(sender, msg.sender)
        mint_to = env.api.addr_validate(msg.mint_to_address or sender)

        state.mint(sender, msg.amount.denom, msg.amount.amount)

        response = router.sudo(BankMint(to_address=mint_to, amount=(msg.amount,)))
        response.events.append(
            Event(
                "tf_mint",
                (("mint_to_address", mint_to), ("amount", str(msg.amount))),
            )
        )
        return response

    def _run_burn(
        self,
        state: TokenFactoryState,
        sender: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        msg = MsgBurn.decode(value)
        _check_sender(sender, msg.sender)
        burn_from = env.api.addr_validate(msg.burn_from_address or sender)

        state.burn(sender, msg.amount.denom, msg.amount.amount)

        response = router.execute(burn_from, BankBurn(amount=(msg.amount,)))
        response.events.append(
            Event(
                "tf_burn",
                (("burn_from_address", burn_from), ("amount", str(msg.amount))),
            )
        )
        return response

    def _run_set_denom_metadata(
        self,
        state: TokenFactoryState,
        sender: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        msg = MsgSetDenomMetadata.decode(value)
        _check_sender(sender, msg.sender)

        if msg.metadata is None:
            logger.debug("MsgSetDenomMetadata from %s without metadata; noop", sender)
            return AppResponse()

        state.set_metadata(sender, msg.metadata)
        return AppResponse(
            events=[Event("set_denom_metadata", (("denom", msg.metadata.base),))]
        )

    def _run_change_admin(
        self,
        state: TokenFactoryState,
        sender: str,
        value: bytes,
        router: Router,
        env: Env,
    ) -> AppResponse:
        msg = MsgChangeAdmin.decode(value)
        _check_sender(sender, msg.sender)
        new_admin = env.api.addr_validate(msg.new_admin)

        state.change_admin(sender, msg.denom, new_admin)
        return AppResponse(
            events=[
                Event("change_admin", (("denom", msg.denom), ("new_admin", new_admin)))
            ]
        )

    # ============================================================================
    #                               Queries
    # ============================================================================

    @staticmethod
    def _query_params(state: TokenFactoryState) -> bytes:
        fee = state.fee_creation.fee if state.fee_creation is not None else ()
        return QueryParamsResponse(
            denom_creation_fee=fee,
            denom_creation_gas_consume=DENOM_CREATION_GAS_CONSUME,
        ).encode()

    @staticmethod
    def _query_denom_authority_metadata(state: TokenFactoryState, value: bytes) -> bytes:
        request = QueryDenomAuthorityMetadataRequest.decode(value)
        if not state.exists(request.denom):
            raise DenomNotFoundError(request.denom)
        return QueryDenomAuthorityMetadataResponse(
            admin=state.admin[request.denom]
        ).encode()


def _check_sender(sender: str, msg_sender: str) -> None:
    if sender != msg_sender:
        raise SenderMismatchError(sender, msg_sender)
