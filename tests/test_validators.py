import pytest

from orbgen.codec import InvalidEncodingError
from orbgen.validators import (
    BPS_NORMALIZER,
    BasisPointsTooLargeError,
    EmptyFieldError,
    FieldError,
    InvalidAddressError,
    NotANumberError,
    OutOfRangeError,
    ZeroBasisPointsError,
    validate_address_like,
    validate_basis_points,
    validate_recipient_prefix,
    validate_required,
    validate_uint,
)

# BIP-173 test vector with a valid bech32 checksum.
BECH32_ADDRESS = "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw"


@pytest.mark.parametrize("bps", [1, 100, 9_999, BPS_NORMALIZER])
def test_basis_points_in_range_are_accepted(bps: int) -> None:
    validate_basis_points(bps)


def test_zero_basis_points_rejected() -> None:
    with pytest.raises(ZeroBasisPointsError):
        validate_basis_points(0)


@pytest.mark.parametrize("bps", [BPS_NORMALIZER + 1, 2**32 - 1])
def test_basis_points_above_normalizer_rejected(bps: int) -> None:
    with pytest.raises(BasisPointsTooLargeError) as excinfo:
        validate_basis_points(bps)
    assert "10000" in str(excinfo.value)


@pytest.mark.parametrize("value", ["", "   ", "\t"])
def test_validate_required_rejects_blank(value: str) -> None:
    with pytest.raises(EmptyFieldError) as excinfo:
        validate_required(value, "mint recipient")
    assert excinfo.value.field_name == "mint recipient"
    assert str(excinfo.value) == "mint recipient is required"


def test_validate_required_accepts_text() -> None:
    validate_required("addr1", "recipient")


@pytest.mark.parametrize(
    "value, expected",
    [("0", 0), ("42", 42), (" 7 ", 7), ("4294967295", 2**32 - 1)],
)
def test_validate_uint_parses_unsigned_integers(value: str, expected: int) -> None:
    assert validate_uint(value, 32) == expected


@pytest.mark.parametrize("value", ["", "abc", "-1", "+1", "1.5", "1_000", "1 2"])
def test_validate_uint_rejects_non_numbers(value: str) -> None:
    with pytest.raises(NotANumberError):
        validate_uint(value, 32)


def test_validate_uint_enforces_bit_width() -> None:
    with pytest.raises(OutOfRangeError):
        validate_uint("4294967296", 32)
    with pytest.raises(NotANumberError):
        validate_uint("256", 8)
    assert validate_uint("255", 8) == 255


def test_recipient_prefix_is_optional() -> None:
    validate_recipient_prefix("addr1", None)
    validate_recipient_prefix("anything", "")


def test_recipient_prefix_accepts_checksummed_address() -> None:
    validate_recipient_prefix(BECH32_ADDRESS, "abcdef")
    validate_recipient_prefix(BECH32_ADDRESS.upper(), "abcdef")


@pytest.mark.parametrize(
    "value",
    [
        "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqwx",
        "abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxx",
        "abcdef1Qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw",
        "abcdef1bpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxw",
        "noble1xyz",
        "noblexyz",
        "noble1",
    ],
)
def test_recipient_prefix_rejects_malformed_addresses(value: str) -> None:
    with pytest.raises(InvalidAddressError):
        validate_recipient_prefix(value, "abcdef")


def test_recipient_prefix_rejects_bad_checksum() -> None:
    with pytest.raises(InvalidAddressError) as excinfo:
        validate_recipient_prefix("abcdef1qpzry9x8gf2tvdw0s3jn54khce6mua7lmqqqxx", "abcdef")
    assert "checksum" in str(excinfo.value)


def test_recipient_prefix_rejects_other_prefixes() -> None:
    with pytest.raises(InvalidAddressError) as excinfo:
        validate_recipient_prefix(BECH32_ADDRESS, "noble")
    assert "prefix 'noble'" in str(excinfo.value)


def test_recipient_prefix_rejects_empty_address() -> None:
    with pytest.raises(InvalidAddressError):
        validate_recipient_prefix("a12uel5l", "a")


def test_validate_address_like_names_the_field() -> None:
    with pytest.raises(FieldError) as excinfo:
        validate_address_like("0xzz", "destination caller")

    assert excinfo.value.field_name == "destination caller"
    assert isinstance(excinfo.value.cause, InvalidEncodingError)
    assert str(excinfo.value).startswith("invalid destination caller:")
