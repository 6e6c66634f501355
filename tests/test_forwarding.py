import base64

import pytest

from orbgen.codec import InvalidEncodingError, TooLongError
from orbgen.errors import UnsupportedFeatureError
from orbgen.forms import FormDraft
from orbgen.forwarding import (
    CCTP_DESTINATION_CALLER,
    CCTP_DESTINATION_DOMAIN,
    CCTP_MINT_RECIPIENT,
    CCTP_PASSTHROUGH_PAYLOAD,
    begin_forwarding_input,
    list_available_protocols,
    submit_forwarding_input,
)
from orbgen.schema import CCTPAttributes, ProtocolID
from orbgen.validators import (
    EmptyFieldError,
    FieldError,
    FieldTooLongError,
    NotANumberError,
    OutOfRangeError,
)

MINT_HEX = "0x" + "11" * 32


def _cctp_draft(
    domain: str = "0",
    mint_recipient: str = MINT_HEX,
    destination_caller: str = "",
    passthrough_payload: str = "",
) -> FormDraft:
    draft = begin_forwarding_input(ProtocolID.PROTOCOL_CCTP)
    draft.set_value(domain, key=CCTP_DESTINATION_DOMAIN)
    draft.set_value(mint_recipient, key=CCTP_MINT_RECIPIENT)
    draft.set_value(destination_caller, key=CCTP_DESTINATION_CALLER)
    draft.set_value(passthrough_payload, key=CCTP_PASSTHROUGH_PAYLOAD)
    return draft


def test_catalog_lists_cctp_first() -> None:
    catalog = list_available_protocols()

    assert [entry.kind for entry in catalog] == [
        ProtocolID.PROTOCOL_CCTP,
        ProtocolID.PROTOCOL_IBC,
        ProtocolID.PROTOCOL_HYPERLANE,
        ProtocolID.PROTOCOL_INTERNAL,
    ]
    assert [entry.supported for entry in catalog] == [True, False, False, False]


@pytest.mark.parametrize(
    "protocol",
    [ProtocolID.PROTOCOL_IBC, ProtocolID.PROTOCOL_HYPERLANE, ProtocolID.PROTOCOL_INTERNAL],
)
def test_reserved_protocols_are_unsupported(protocol: ProtocolID) -> None:
    with pytest.raises(UnsupportedFeatureError):
        begin_forwarding_input(protocol)


def test_cctp_draft_has_four_fields() -> None:
    draft = begin_forwarding_input(ProtocolID.PROTOCOL_CCTP)

    assert [item.key for item in draft.fields] == [
        CCTP_DESTINATION_DOMAIN,
        CCTP_MINT_RECIPIENT,
        CCTP_DESTINATION_CALLER,
        CCTP_PASSTHROUGH_PAYLOAD,
    ]
    assert [item.required for item in draft.fields] == [True, True, False, False]


def test_submit_minimal_cctp_forwarding() -> None:
    forwarding = submit_forwarding_input(_cctp_draft())

    assert forwarding.protocol_id is ProtocolID.PROTOCOL_CCTP
    assert forwarding.attributes == CCTPAttributes(
        destination_domain=0,
        mint_recipient=bytes.fromhex("11" * 32),
        destination_caller=b"",
    )
    assert forwarding.passthrough_payload == b""


def test_submit_pads_base64_caller_and_keeps_passthrough_bytes() -> None:
    caller = bytes(range(20))
    forwarding = submit_forwarding_input(
        _cctp_draft(
            domain="3",
            destination_caller=base64.b64encode(caller).decode("ascii"),
            passthrough_payload="hello orbiter",
        )
    )

    assert forwarding.attributes.destination_domain == 3
    assert forwarding.attributes.destination_caller == bytes(12) + caller
    assert forwarding.passthrough_payload == b"hello orbiter"


def test_empty_domain_is_reported() -> None:
    with pytest.raises(EmptyFieldError) as excinfo:
        submit_forwarding_input(_cctp_draft(domain=""))
    assert excinfo.value.field_name == "destination domain"


def test_domain_must_be_uint32() -> None:
    with pytest.raises(NotANumberError):
        submit_forwarding_input(_cctp_draft(domain="eth"))
    with pytest.raises(OutOfRangeError):
        submit_forwarding_input(_cctp_draft(domain="4294967296"))


@pytest.mark.parametrize("domain", ["12345678901", "00000000006"])
def test_domain_longer_than_the_field_is_rejected(domain: str) -> None:
    with pytest.raises(FieldTooLongError) as excinfo:
        submit_forwarding_input(_cctp_draft(domain=domain))

    assert excinfo.value.field_name == "destination domain"
    assert excinfo.value.limit == 10


def test_ten_digit_domain_is_parsed_whole() -> None:
    forwarding = submit_forwarding_input(_cctp_draft(domain="4294967295"))
    assert forwarding.attributes.destination_domain == 4294967295


def test_passthrough_longer_than_the_field_is_rejected() -> None:
    with pytest.raises(FieldTooLongError) as excinfo:
        submit_forwarding_input(_cctp_draft(passthrough_payload="x" * 257))
    assert excinfo.value.field_name == "passthrough payload"

    forwarding = submit_forwarding_input(_cctp_draft(passthrough_payload="x" * 256))
    assert forwarding.passthrough_payload == b"x" * 256


def test_empty_mint_recipient_is_reported() -> None:
    with pytest.raises(EmptyFieldError) as excinfo:
        submit_forwarding_input(_cctp_draft(mint_recipient=""))
    assert excinfo.value.field_name == "mint recipient"


def test_domain_is_checked_before_mint_recipient() -> None:
    with pytest.raises(NotANumberError):
        submit_forwarding_input(_cctp_draft(domain="x", mint_recipient=""))


@pytest.mark.parametrize(
    "mint_recipient, cause",
    [("0xzz", InvalidEncodingError), ("0x" + "11" * 33, TooLongError)],
)
def test_bad_mint_recipient_names_field(mint_recipient: str, cause: type) -> None:
    with pytest.raises(FieldError) as excinfo:
        submit_forwarding_input(_cctp_draft(mint_recipient=mint_recipient))

    assert excinfo.value.field_name == "mint recipient"
    assert isinstance(excinfo.value.cause, cause)


def test_bad_destination_caller_names_field() -> None:
    with pytest.raises(FieldError) as excinfo:
        submit_forwarding_input(_cctp_draft(destination_caller="!!!"))
    assert excinfo.value.field_name == "destination caller"


def test_random_sentinel_only_when_enabled() -> None:
    with pytest.raises(FieldError):
        submit_forwarding_input(_cctp_draft(mint_recipient="r"))

    forwarding = submit_forwarding_input(
        _cctp_draft(mint_recipient="r", destination_caller="r"), allow_random=True
    )
    assert len(forwarding.attributes.mint_recipient) == 32
    assert len(forwarding.attributes.destination_caller) == 32
