"""Forwarding protocol catalog and the CCTP sub-form.

Only CCTP can be configured today. The remaining protocols are listed so the
selection screen shows the full Orbiter catalog, but choosing one raises
:class:`~orbgen.errors.UnsupportedFeatureError`.
"""

from __future__ import annotations

import logging

from .errors import InternalStateError, UnsupportedFeatureError
from .forms import CatalogEntry, FormDraft, FormField, SubFormBuilder
from .schema import Forwarding, ProtocolID, SchemaError, new_cctp_forwarding
from .validators import (
    ValidationError,
    validate_address_like,
    validate_required,
    validate_uint,
)

logger = logging.getLogger(__name__)

CCTP_DESTINATION_DOMAIN = "destination_domain"
CCTP_MINT_RECIPIENT = "mint_recipient"
CCTP_DESTINATION_CALLER = "destination_caller"
CCTP_PASSTHROUGH_PAYLOAD = "passthrough_payload"

# Well-known CCTP domain identifiers shown as a hint on the input screen.
CCTP_DOMAIN_HINTS = {
    0: "Ethereum",
    1: "Avalanche",
    2: "OP",
    3: "Arbitrum",
    6: "Base",
}

_ADDRESS_HINT = "prefix with '0x' for Hex input; otherwise base64 is assumed; put 'r' for random"


class CCTPForwardingBuilder:
    """Collects the destination details of a CCTP transfer."""

    kind = ProtocolID.PROTOCOL_CCTP

    def begin(self) -> FormDraft:
        domains = ", ".join(f"{domain}={name}" for domain, name in CCTP_DOMAIN_HINTS.items())
        return FormDraft(
            kind=self.kind,
            title="Configure CCTP Forwarding",
            description=[
                "CCTP enables USDC transfers across chains. Configure the destination details:",
                f"• Domain: Chain identifier ({domains})",
                "• Mint Recipient: Address that receives USDC on destination",
                "• Destination Caller: Address that can call functions on destination",
                "• Passthrough Payload: Additional data to pass through (optional)",
            ],
            fields=[
                FormField(
                    key=CCTP_DESTINATION_DOMAIN,
                    label="Destination domain",
                    placeholder="Destination domain (e.g. 0)",
                    char_limit=10,
                    required=True,
                ),
                FormField(
                    key=CCTP_MINT_RECIPIENT,
                    label="Mint recipient",
                    placeholder=f"Mint recipient ({_ADDRESS_HINT})",
                    char_limit=128,
                    required=True,
                ),
                FormField(
                    key=CCTP_DESTINATION_CALLER,
                    label="Destination caller",
                    placeholder=f"Destination caller ({_ADDRESS_HINT}; can be left empty)",
                    char_limit=128,
                ),
                FormField(
                    key=CCTP_PASSTHROUGH_PAYLOAD,
                    label="Passthrough payload",
                    placeholder="Passthrough payload (can be left empty)",
                    char_limit=256,
                ),
            ],
        )

    def submit(self, draft: FormDraft, *, allow_random: bool = False) -> Forwarding:
        domain_raw = draft.value(CCTP_DESTINATION_DOMAIN)
        validate_required(domain_raw, "destination domain")
        domain = validate_uint(domain_raw, 32, field_name="destination domain")

        mint_recipient_raw = draft.value(CCTP_MINT_RECIPIENT)
        validate_required(mint_recipient_raw, "mint recipient")
        mint_recipient = validate_address_like(
            mint_recipient_raw, "mint recipient", allow_random=allow_random
        )

        destination_caller = b""
        destination_caller_raw = draft.value(CCTP_DESTINATION_CALLER)
        if destination_caller_raw:
            destination_caller = validate_address_like(
                destination_caller_raw, "destination caller", allow_random=allow_random
            )

        passthrough_raw = draft.value(CCTP_PASSTHROUGH_PAYLOAD)
        passthrough_payload = passthrough_raw.encode("utf-8") if passthrough_raw else b""

        try:
            forwarding = new_cctp_forwarding(
                domain,
                mint_recipient,
                destination_caller,
                passthrough_payload,
            )
        except SchemaError as exc:
            raise ValidationError(f"failed to create CCTP forwarding: {exc}") from exc
        logger.debug("Built CCTP forwarding", extra={"destination_domain": domain})
        return forwarding


FORWARDING_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(
        ProtocolID.PROTOCOL_CCTP,
        "Circle's Cross-Chain Transfer Protocol (USDC transfers)",
        CCTPForwardingBuilder(),
    ),
    CatalogEntry(ProtocolID.PROTOCOL_IBC, "Inter-Blockchain Communication (Cosmos ecosystem)"),
    CatalogEntry(ProtocolID.PROTOCOL_HYPERLANE, "Hyperlane interchain protocol"),
    CatalogEntry(ProtocolID.PROTOCOL_INTERNAL, "Transfer within the Noble chain"),
)


def list_available_protocols() -> list[CatalogEntry]:
    """Return the selectable forwarding protocols in display order."""

    return list(FORWARDING_CATALOG)


def _builder_for(protocol: ProtocolID) -> SubFormBuilder:
    for entry in FORWARDING_CATALOG:
        if entry.kind is protocol:
            if entry.builder is None:
                raise UnsupportedFeatureError(protocol.display_name)
            return entry.builder
    raise InternalStateError(f"protocol is not in the catalog: {protocol!r}")


def begin_forwarding_input(protocol: ProtocolID) -> FormDraft:
    return _builder_for(protocol).begin()


def submit_forwarding_input(draft: FormDraft, *, allow_random: bool = False) -> Forwarding:
    """Validate ``draft`` and return the forwarding.

    Fields are checked in screen order and the first failure is raised; no
    forwarding is built from a partially valid draft.
    """

    return _builder_for(draft.kind).submit(draft, allow_random=allow_random)
