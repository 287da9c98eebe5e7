"""Token factory type URLs and payloads (osmosis ``tokenfactory.v1beta1``)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from multistargate.domain.value_objects import Coin, Metadata, coins_from_list
from multistargate.interfaces.messages import WireMessage
from multistargate.service_layer.application import TypeUrl

PACKAGE = "/osmosis.tokenfactory.v1beta1"


class TokenFactoryMsgUrl(TypeUrl):
    """Message type URLs owned by the token factory."""

    CREATE_DENOM = f"{PACKAGE}.MsgCreateDenom"
    MINT = f"{PACKAGE}.MsgMint"
    BURN = f"{PACKAGE}.MsgBurn"
    SET_DENOM_METADATA = f"{PACKAGE}.MsgSetDenomMetadata"
    CHANGE_ADMIN = f"{PACKAGE}.MsgChangeAdmin"


class TokenFactoryQueryUrl(TypeUrl):
    """Query type URLs owned by the token factory."""

    PARAMS = f"{PACKAGE}.Query/Params"
    DENOM_AUTHORITY_METADATA = f"{PACKAGE}.Query/DenomAuthorityMetadata"


# ============================================================================
#                               Messages
# ============================================================================


@dataclass(frozen=True)
class MsgCreateDenom(WireMessage):
    """Create ``factory/<sender>/<subdenom>``."""

    TYPE_URL: ClassVar[str] = TokenFactoryMsgUrl.CREATE_DENOM.value

    sender: str
    subdenom: str


@dataclass(frozen=True)
class MsgCreateDenomResponse(WireMessage):
    """Data returned by a successful `MsgCreateDenom`."""

    TYPE_URL: ClassVar[str] = f"{PACKAGE}.MsgCreateDenomResponse"

    new_token_denom: str


@dataclass(frozen=True)
class MsgMint(WireMessage):
    """Mint `amount` to `mint_to_address` (the sender when empty)."""

    TYPE_URL: ClassVar[str] = TokenFactoryMsgUrl.MINT.value

    sender: str
    amount: Coin
    mint_to_address: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MsgMint:
        return cls(
            sender=data["sender"],
            amount=Coin.from_dict(data["amount"]),
            mint_to_address=data.get("mint_to_address", ""),
        )


@dataclass(frozen=True)
class MsgBurn(WireMessage):
    """Burn `amount` held by `burn_from_address` (the sender when empty)."""

    TYPE_URL: ClassVar[str] = TokenFactoryMsgUrl.BURN.value

    sender: str
    amount: Coin
    burn_from_address: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MsgBurn:
        return cls(
            sender=data["sender"],
            amount=Coin.from_dict(data["amount"]),
            burn_from_address=data.get("burn_from_address", ""),
        )


@dataclass(frozen=True)
class MsgSetDenomMetadata(WireMessage):
    """Overwrite the metadata of ``metadata.base``. No-op without metadata."""

    TYPE_URL: ClassVar[str] = TokenFactoryMsgUrl.SET_DENOM_METADATA.value

    sender: str
    metadata: Metadata | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MsgSetDenomMetadata:
        metadata = data.get("metadata")
        return cls(
            sender=data["sender"],
            metadata=Metadata.from_dict(metadata) if metadata is not None else None,
        )


@dataclass(frozen=True)
class MsgChangeAdmin(WireMessage):
    """Hand the administration of `denom` over to `new_admin`."""

    TYPE_URL: ClassVar[str] = TokenFactoryMsgUrl.CHANGE_ADMIN.value

    sender: str
    denom: str
    new_admin: str


# ============================================================================
#                               Queries
# ============================================================================


@dataclass(frozen=True)
class QueryParamsRequest(WireMessage):
    """Request the module parameters."""

    TYPE_URL: ClassVar[str] = TokenFactoryQueryUrl.PARAMS.value


@dataclass(frozen=True)
class QueryParamsResponse(WireMessage):
    """Denom creation fee (empty when free) and the gas it consumes."""

    TYPE_URL: ClassVar[str] = f"{PACKAGE}.QueryParamsResponse"

    denom_creation_fee: tuple[Coin, ...] = ()
    denom_creation_gas_consume: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> QueryParamsResponse:
        return cls(
            denom_creation_fee=coins_from_list(data.get("denom_creation_fee", ())),
            denom_creation_gas_consume=int(data.get("denom_creation_gas_consume", 0)),
        )


@dataclass(frozen=True)
class QueryDenomAuthorityMetadataRequest(WireMessage):
    """Request the admin of `denom`."""

    TYPE_URL: ClassVar[str] = TokenFactoryQueryUrl.DENOM_AUTHORITY_METADATA.value

    denom: str


@dataclass(frozen=True)
class QueryDenomAuthorityMetadataResponse(WireMessage):
    """The admin of the requested denom."""

    TYPE_URL: ClassVar[str] = f"{PACKAGE}.QueryDenomAuthorityMetadataResponse"

    admin: str
