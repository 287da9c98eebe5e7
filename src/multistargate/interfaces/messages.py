"""Wire envelopes, environment messages and call results.

This module defines:
- `WireMessage`: base for application payloads. Payloads travel as opaque
  bytes inside a `StargateMsg` envelope ``{type_url, value}``; only the owning
  application decodes them. Encoding is canonical JSON (sorted keys, no
  whitespace) so identical messages always produce identical bytes.
- The environment messages an application can ask the chain to run through
  its router handle (`BankSend`, `BankBurn`, `StargateMsg`) and the
  privileged `BankMint` sudo message.
- `Event` and `AppResponse`, the effect list returned by every execute call.
"""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeVar

from multistargate.domain.value_objects import Coin

W = TypeVar("W", bound="WireMessage")

# Scalar field annotations checked on decode, as written with and without
# postponed evaluation
_SCALAR_TYPES: dict[Any, type] = {
    "str": str,
    "int": int,
    "bool": bool,
    str: str,
    int: int,
    bool: bool,
}


class MessageDecodeError(ValueError):
    """Raised when a payload cannot be decoded into the expected message."""

    def __init__(self, type_url: str, reason: str) -> None:
        super().__init__(f"Cannot decode {type_url}: {reason}")
        self.type_url = type_url
        self.reason = reason


# ============================================================================
#                               Payloads
# ============================================================================


class WireMessage:
    """Base class for JSON-encoded payloads identified by a type URL.

    Subclasses are frozen dataclasses setting `TYPE_URL`. Messages with nested
    value objects override `from_dict`.
    """

    TYPE_URL: ClassVar[str]

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-compatible representation of the message."""
        return {
            f.name: _to_jsonable(getattr(self, f.name))
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
        }

    @classmethod
    def from_dict(cls: type[W], data: Mapping[str, Any]) -> W:
        """Build the message from its JSON representation."""
        return cls(**data)

    def encode(self) -> bytes:
        """Encode the message to canonical JSON bytes."""
        return json.dumps(
            self.to_dict(), sort_keys=True, separators=(",", ":")
        ).encode("utf-8")

    @classmethod
    def decode(cls: type[W], data: bytes) -> W:
        """Decode a message from bytes produced by `encode`.

        Raises:
            MessageDecodeError: If the bytes are not valid JSON or do not match
                the message shape.
        """
        try:
            raw = json.loads(data)
            if not isinstance(raw, dict):
                raise TypeError(f"expected a JSON object, got {type(raw).__name__}")
            message = cls.from_dict(raw)
            message.check_field_types()
            return message
        except (ValueError, TypeError, KeyError, AttributeError) as e:
            raise MessageDecodeError(cls.TYPE_URL, str(e)) from e

    def check_field_types(self) -> None:
        """Check that every `str`, `int` or `bool` field holds a value of that type.

        Raises:
            TypeError: On the first mismatching field. A bool is not an int here.
        """
        for f in dataclasses.fields(self):  # type: ignore[arg-type]
            expected = _SCALAR_TYPES.get(f.type)
            if expected is None:
                continue
            value = getattr(self, f.name)
            if not isinstance(value, expected) or (
                expected is int and isinstance(value, bool)
            ):
                raise TypeError(
                    f"field {f.name!r} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )

    def to_any(self) -> StargateMsg:
        """Wrap the message in a routable `StargateMsg` envelope."""
        return StargateMsg(type_url=self.TYPE_URL, value=self.encode())


def _to_jsonable(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, (tuple, list)):
        return [_to_jsonable(item) for item in value]
    return value


# ============================================================================
#                         Environment messages
# ============================================================================


@dataclass(frozen=True)
class CosmosMsg:
    """Base class for messages executed on behalf of a sender."""


@dataclass(frozen=True)
class BankSend(CosmosMsg):
    """Move coins from the sender to `to_address`."""

    to_address: str
    amount: tuple[Coin, ...]


@dataclass(frozen=True)
class BankBurn(CosmosMsg):
    """Destroy coins held by the sender."""

    amount: tuple[Coin, ...]


@dataclass(frozen=True)
class StargateMsg(CosmosMsg):
    """The ``{type_url, value}`` envelope routed to a registered application."""

    type_url: str
    value: bytes


@dataclass(frozen=True)
class SudoMsg:
    """Base class for privileged messages issued by the environment itself."""


@dataclass(frozen=True)
class BankMint(SudoMsg):
    """Create coins out of thin air and credit them to `to_address`."""

    to_address: str
    amount: tuple[Coin, ...]


# ============================================================================
#                               Results
# ============================================================================


@dataclass(frozen=True)
class Event:
    """A typed event with ordered string attributes."""

    type: str
    attributes: tuple[tuple[str, str], ...] = ()

    def get(self, key: str) -> str | None:
        """Return the first attribute value for `key`, or None."""
        for attr_key, value in self.attributes:
            if attr_key == key:
                return value
        return None


@dataclass
class AppResponse:
    """Effects of a successful execute call: emitted events and optional data."""

    events: list[Event] = field(default_factory=list)
    data: bytes | None = None

    def absorb(self, other: AppResponse) -> AppResponse:
        """Append the events of a sub-call result. Returns self."""
        self.events.extend(other.events)
        return self

    def has_event(self, event_type: str) -> bool:
        """Return True if an event of `event_type` was emitted."""
        return any(event.type == event_type for event in self.events)
