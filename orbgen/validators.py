"""Pure field validators used by the action and forwarding sub-forms."""

from __future__ import annotations

from .codec import DecodeError, decode_address_like, decode_bech32

BPS_NORMALIZER = 10_000


class ValidationError(ValueError):
    """Raised when user input violates a field constraint."""


class EmptyFieldError(ValidationError):
    """Raised when a required field is left blank."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"{field_name} is required")
        self.field_name = field_name


class NotANumberError(ValidationError):
    """Raised when a numeric field does not hold an unsigned integer."""


class OutOfRangeError(NotANumberError):
    """Raised when a numeric field does not fit its bit width."""


class ZeroBasisPointsError(ValidationError):
    """Raised for a fee of zero basis points."""


class BasisPointsTooLargeError(ValidationError):
    """Raised for a fee above 100%."""


class InvalidAddressError(ValidationError):
    """Raised when a recipient is not a valid address for the configured prefix."""


class FieldTooLongError(ValidationError):
    """Raised when a field holds more characters than its input allows."""

    def __init__(self, field_name: str, limit: int) -> None:
        super().__init__(f"{field_name} exceeds {limit} characters")
        self.field_name = field_name
        self.limit = limit


class FieldError(ValidationError):
    """Wraps a lower level error with the name of the offending field."""

    def __init__(self, field_name: str, cause: Exception) -> None:
        super().__init__(f"invalid {field_name}: {cause}")
        self.field_name = field_name
        self.cause = cause


def validate_basis_points(bps: int) -> None:
    """Check that ``bps`` lies in ``(0, BPS_NORMALIZER]``."""

    if bps == 0:
        raise ZeroBasisPointsError("fee basis point cannot be zero")
    if bps > BPS_NORMALIZER:
        raise BasisPointsTooLargeError(
            f"fee basis point cannot be higher than {BPS_NORMALIZER}"
        )


def validate_required(value: str, field_name: str) -> None:
    if not value.strip():
        raise EmptyFieldError(field_name)


def validate_uint(value: str, bit_width: int = 32, field_name: str = "value") -> int:
    """Parse ``value`` as an unsigned base-10 integer of ``bit_width`` bits.

    Only ASCII digits are accepted, so signs, underscores and embedded spaces
    that :func:`int` would tolerate are rejected.
    """

    raw = value.strip()
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise NotANumberError(f"{field_name} must be an unsigned integer; got: {value!r}")
    parsed = int(raw)
    if parsed >= 1 << bit_width:
        raise OutOfRangeError(
            f"{field_name} does not fit in {bit_width} bits; got: {parsed}"
        )
    return parsed


def validate_recipient_prefix(value: str, prefix: str | None) -> None:
    """Require ``value`` to be a bech32 account address under ``prefix``.

    Nothing is checked when no prefix is configured. Otherwise the checksum
    must verify, the human-readable part must equal ``prefix`` and the
    decoded address must not be empty.
    """

    if not prefix:
        return
    try:
        hrp, address = decode_bech32(value)
    except DecodeError as exc:
        raise InvalidAddressError(
            f"recipient must be a bech32 address with prefix {prefix!r}: {exc}"
        ) from exc
    if hrp != prefix.lower():
        raise InvalidAddressError(
            f"recipient must be an address with prefix {prefix!r}; got: {value}"
        )
    if not address:
        raise InvalidAddressError(f"recipient address is empty: {value}")


def validate_address_like(value: str, field_name: str, *, allow_random: bool = False) -> bytes:
    """Decode an address-shaped field, naming the field in any failure."""

    try:
        return decode_address_like(value, allow_random=allow_random)
    except DecodeError as exc:
        raise FieldError(field_name, exc) from exc
