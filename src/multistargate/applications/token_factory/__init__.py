"""Token factory application (osmosis-style denom lifecycle ledger)."""

from .application import DENOM_CREATION_GAS_CONSUME, TokenFactoryApplication
from .messages import (
    MsgBurn,
    MsgChangeAdmin,
    MsgCreateDenom,
    MsgCreateDenomResponse,
    MsgMint,
    MsgSetDenomMetadata,
    QueryDenomAuthorityMetadataRequest,
    QueryDenomAuthorityMetadataResponse,
    QueryParamsRequest,
    QueryParamsResponse,
    TokenFactoryMsgUrl,
    TokenFactoryQueryUrl,
)

__all__ = [
    "DENOM_CREATION_GAS_CONSUME",
    "MsgBurn",
    "MsgChangeAdmin",
    "MsgCreateDenom",
    "MsgCreateDenomResponse",
    "MsgMint",
    "MsgSetDenomMetadata",
    "QueryDenomAuthorityMetadataRequest",
    "QueryDenomAuthorityMetadataResponse",
    "QueryParamsRequest",
    "QueryParamsResponse",
    "TokenFactoryApplication",
    "TokenFactoryMsgUrl",
    "TokenFactoryQueryUrl",
]
