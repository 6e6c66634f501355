"""Orbiter payload schema: actions, forwarding records and their encoding.

The records mirror the Orbiter module's protobuf types. A payload is a list of
pre-actions that run in order on the source chain, followed by exactly one
forwarding that routes the remaining funds out. Encoding follows the protobuf
JSON mapping: enums by name, ``bytes`` as padded base64, attribute messages
packed as ``Any`` with an ``@type`` URL.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Sequence, Union

from .validators import BPS_NORMALIZER, ValidationError, validate_basis_points

COMPACT_JSON_SEPARATORS = (",", ":")
PAYLOAD_WRAPPER_KEY = "orbiter"
CCTP_ADDRESS_LENGTH = 32
UINT32_MAX = (1 << 32) - 1

FEE_ATTRIBUTES_TYPE_URL = "/noble.orbiter.controller.action.v1.FeeAttributes"
CCTP_ATTRIBUTES_TYPE_URL = "/noble.orbiter.controller.forwarding.v1.CCTPAttributes"


class SchemaError(ValueError):
    """Raised when a record violates the Orbiter payload schema."""


class ActionID(Enum):
    """Identifiers of the pre-actions known to Orbiter."""

    ACTION_UNSUPPORTED = 0
    ACTION_FEE = 1
    ACTION_SWAP = 2

    @property
    def display_name(self) -> str:
        return self.name


class ProtocolID(Enum):
    """Identifiers of the bridging protocols known to Orbiter."""

    PROTOCOL_UNSUPPORTED = 0
    PROTOCOL_INTERNAL = 1
    PROTOCOL_IBC = 2
    PROTOCOL_CCTP = 3
    PROTOCOL_HYPERLANE = 4

    @property
    def display_name(self) -> str:
        return self.name


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@dataclass(frozen=True)
class FeeInfo:
    recipient: str
    basis_points: int

    def validate(self) -> None:
        if not self.recipient:
            raise SchemaError("fee recipient cannot be empty")
        try:
            validate_basis_points(self.basis_points)
        except ValidationError as exc:
            raise SchemaError(str(exc)) from exc

    def to_dict(self) -> dict[str, Any]:
        return {"recipient": self.recipient, "basis_points": self.basis_points}


@dataclass(frozen=True)
class FeeAttributes:
    """Attributes of a fee action: one or more recipients with their share."""

    fees_info: tuple[FeeInfo, ...]

    @property
    def total_basis_points(self) -> int:
        return sum(info.basis_points for info in self.fees_info)

    def validate(self) -> None:
        if not self.fees_info:
            raise SchemaError("fee attributes require at least one fee info")
        for info in self.fees_info:
            info.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "@type": FEE_ATTRIBUTES_TYPE_URL,
            "fees_info": [info.to_dict() for info in self.fees_info],
        }


@dataclass(frozen=True)
class CCTPAttributes:
    """Attributes of a CCTP forwarding.

    ``mint_recipient`` and ``destination_caller`` are 32-byte words on the
    destination domain; an empty ``destination_caller`` lets anyone relay.
    """

    destination_domain: int
    mint_recipient: bytes
    destination_caller: bytes = b""

    def validate(self) -> None:
        if not 0 <= self.destination_domain <= UINT32_MAX:
            raise SchemaError(f"destination domain out of range: {self.destination_domain}")
        if len(self.mint_recipient) != CCTP_ADDRESS_LENGTH:
            raise SchemaError(
                f"mint recipient must be {CCTP_ADDRESS_LENGTH} bytes; got: {len(self.mint_recipient)}"
            )
        if self.destination_caller and len(self.destination_caller) != CCTP_ADDRESS_LENGTH:
            raise SchemaError(
                f"destination caller must be empty or {CCTP_ADDRESS_LENGTH} bytes; "
                f"got: {len(self.destination_caller)}"
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "@type": CCTP_ATTRIBUTES_TYPE_URL,
            "destination_domain": self.destination_domain,
            "mint_recipient": _b64(self.mint_recipient),
            "destination_caller": _b64(self.destination_caller),
        }


ActionAttributes = Union[FeeAttributes]
ForwardingAttributes = Union[CCTPAttributes]

# Kinds without an entry here cannot be constructed.
ACTION_ATTRIBUTE_TYPES: dict[ActionID, type] = {
    ActionID.ACTION_FEE: FeeAttributes,
}
FORWARDING_ATTRIBUTE_TYPES: dict[ProtocolID, type] = {
    ProtocolID.PROTOCOL_CCTP: CCTPAttributes,
}


@dataclass(frozen=True)
class Action:
    id: ActionID
    attributes: ActionAttributes

    def validate(self) -> None:
        expected = ACTION_ATTRIBUTE_TYPES.get(self.id)
        if expected is None:
            raise SchemaError(f"no attributes registered for {self.id.display_name}")
        if not isinstance(self.attributes, expected):
            raise SchemaError(
                f"{self.id.display_name} expects {expected.__name__}; "
                f"got: {type(self.attributes).__name__}"
            )
        self.attributes.validate()

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id.name, "attributes": self.attributes.to_dict()}


@dataclass(frozen=True)
class Forwarding:
    protocol_id: ProtocolID
    attributes: ForwardingAttributes
    passthrough_payload: bytes = b""

    def validate(self) -> None:
        expected = FORWARDING_ATTRIBUTE_TYPES.get(self.protocol_id)
        if expected is None:
            raise SchemaError(f"no attributes registered for {self.protocol_id.display_name}")
        if not isinstance(self.attributes, expected):
            raise SchemaError(
                f"{self.protocol_id.display_name} expects {expected.__name__}; "
                f"got: {type(self.attributes).__name__}"
            )
        self.attributes.validate()

    def to_dict(self) -> dict[str, Any]:
        return {
            "protocol_id": self.protocol_id.name,
            "attributes": self.attributes.to_dict(),
            "passthrough_payload": _b64(self.passthrough_payload),
        }


@dataclass(frozen=True)
class Payload:
    """Ordered pre-actions plus the single forwarding that ends the flow."""

    pre_actions: tuple[Action, ...]
    forwarding: Forwarding | None

    def validate(self) -> None:
        if self.forwarding is None:
            raise SchemaError("payload requires a forwarding")
        for index, action in enumerate(self.pre_actions):
            try:
                action.validate()
            except SchemaError as exc:
                raise SchemaError(f"invalid action at index {index}: {exc}") from exc
        self.forwarding.validate()

        total_bps = sum(
            action.attributes.total_basis_points
            for action in self.pre_actions
            if isinstance(action.attributes, FeeAttributes)
        )
        if total_bps > BPS_NORMALIZER:
            raise SchemaError(
                f"combined fees of {total_bps} basis points exceed {BPS_NORMALIZER}"
            )

    def to_dict(self) -> dict[str, Any]:
        if self.forwarding is None:
            raise SchemaError("payload requires a forwarding")
        return {
            "pre_actions": [action.to_dict() for action in self.pre_actions],
            "forwarding": self.forwarding.to_dict(),
        }


def new_fee_action(fees_info: Sequence[FeeInfo]) -> Action:
    """Construct and validate a fee action."""

    action = Action(id=ActionID.ACTION_FEE, attributes=FeeAttributes(tuple(fees_info)))
    action.validate()
    return action


def new_cctp_forwarding(
    destination_domain: int,
    mint_recipient: bytes,
    destination_caller: bytes | None = None,
    passthrough_payload: bytes | None = None,
) -> Forwarding:
    """Construct and validate a CCTP forwarding."""

    forwarding = Forwarding(
        protocol_id=ProtocolID.PROTOCOL_CCTP,
        attributes=CCTPAttributes(
            destination_domain=destination_domain,
            mint_recipient=bytes(mint_recipient),
            destination_caller=bytes(destination_caller or b""),
        ),
        passthrough_payload=bytes(passthrough_payload or b""),
    )
    forwarding.validate()
    return forwarding


def encode_payload(payload: Payload) -> str:
    """Validate ``payload`` and return its compact JSON memo string."""

    payload.validate()
    return json.dumps(
        {PAYLOAD_WRAPPER_KEY: payload.to_dict()},
        separators=COMPACT_JSON_SEPARATORS,
    )
