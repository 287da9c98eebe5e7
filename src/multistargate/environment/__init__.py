"""The simulated chain the dispatcher is embedded in.

A deterministic, in-process, single-threaded state machine: an address API,
a bank keeper and a router giving applications access back into the chain.
"""

from .address import MockAddressApi
from .bank import BankKeeper, InsufficientFundsError
from .chain import Chain, ChainQuerier, ChainRouter, UnsupportedMessageError

__all__ = [
    "BankKeeper",
    "Chain",
    "ChainQuerier",
    "ChainRouter",
    "InsufficientFundsError",
    "MockAddressApi",
    "UnsupportedMessageError",
]
