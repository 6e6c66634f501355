"""Decoding helpers for address-like byte fields.

CCTP identifies recipients and callers on the destination chain with 32-byte
words. Users type those either as ``0x``-prefixed hex or as standard base64;
shorter values are left-padded with zeros the same way an EVM address is
widened to a ``bytes32``. Fee recipients are Cosmos account addresses, which
are checked with :func:`decode_bech32`.
"""

from __future__ import annotations

import base64
import binascii
import random

ADDRESS_LENGTH = 32
HEX_PREFIX = "0x"
RANDOM_SENTINEL = "r"

BECH32_CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32_CHECKSUM_LENGTH = 6
_BECH32_GENERATOR = [0x3b6a57b2, 0x26508e6d, 0x1ea119fa, 0x3d4233dd, 0x2a1462b3]


class DecodeError(ValueError):
    """Raised when an address-like string cannot be turned into bytes."""


class InvalidEncodingError(DecodeError):
    """Raised when the input is neither valid hex nor valid base64."""


class TooLongError(DecodeError):
    """Raised when decoded data exceeds the fixed field width."""

    def __init__(self, length: int, size: int = ADDRESS_LENGTH) -> None:
        super().__init__(f"input is too long; max {size} bytes; got: {length}")
        self.length = length
        self.size = size


class Bech32Error(DecodeError):
    """Raised when a bech32 string is malformed or fails its checksum."""


def generate_test_bytes(size: int = ADDRESS_LENGTH) -> bytes:
    """Return ``size`` pseudo-random bytes for demos and tests.

    The bytes come from :mod:`random`, which is NOT a cryptographically secure
    source. They are only meant to fill placeholder recipients quickly and
    must never be used as key material.
    """

    return random.getrandbits(size * 8).to_bytes(size, "big")


def left_pad(data: bytes, size: int = ADDRESS_LENGTH) -> bytes:
    """Left-pad ``data`` with zero bytes up to ``size``."""

    if len(data) > size:
        raise TooLongError(len(data), size)
    return bytes(size - len(data)) + bytes(data)


def _decode_hex(value: str) -> bytes:
    digits = value[len(HEX_PREFIX):]
    if len(digits) % 2:
        raise InvalidEncodingError(f"failed to decode hex: odd length hex string: {value}")
    try:
        return binascii.unhexlify(digits)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(f"failed to decode hex: invalid hex string: {value}") from exc


def _decode_base64(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(f"failed to decode base64: {exc}") from exc


def bech32_polymod(values: list[int]) -> int:
    """Compute bech32 checksum polymod."""
    chk = 1
    for value in values:
        b = chk >> 25
        chk = (chk & 0x1ffffff) << 5 ^ value
        for i in range(5):
            chk ^= _BECH32_GENERATOR[i] if ((b >> i) & 1) else 0
    return chk


def bech32_hrp_expand(hrp: str) -> list[int]:
    """Expand HRP for bech32 checksum."""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def _convert_bits(data: list[int], from_bits: int, to_bits: int) -> bytes:
    acc = 0
    bits = 0
    out = bytearray()
    max_value = (1 << to_bits) - 1
    max_acc = (1 << (from_bits + to_bits - 1)) - 1
    for value in data:
        acc = ((acc << from_bits) | value) & max_acc
        bits += from_bits
        while bits >= to_bits:
            bits -= to_bits
            out.append((acc >> bits) & max_value)
    if bits >= from_bits or ((acc << (to_bits - bits)) & max_value):
        raise Bech32Error("invalid padding in bech32 data")
    return bytes(out)


def decode_bech32(value: str) -> tuple[str, bytes]:
    """Split a bech32 string into its human-readable part and 8-bit payload.

    The checksum must verify with the original bech32 constant (not bech32m),
    which is what Cosmos SDK account addresses use.
    """

    if value.lower() != value and value.upper() != value:
        raise Bech32Error(f"mixed case in bech32 string: {value}")
    normalized = value.lower()
    pos = normalized.rfind("1")
    if pos < 1 or pos + BECH32_CHECKSUM_LENGTH + 1 > len(normalized):
        raise Bech32Error(f"invalid separator position in bech32 string: {value}")

    hrp = normalized[:pos]
    if any(not 33 <= ord(char) <= 126 for char in hrp):
        raise Bech32Error(f"invalid character in bech32 prefix: {hrp!r}")
    try:
        data = [BECH32_CHARSET.index(char) for char in normalized[pos + 1:]]
    except ValueError as exc:
        raise Bech32Error(f"invalid character in bech32 data: {value}") from exc

    if bech32_polymod(bech32_hrp_expand(hrp) + data) != 1:
        raise Bech32Error(f"invalid bech32 checksum: {value}")
    return hrp, _convert_bits(data[:-BECH32_CHECKSUM_LENGTH], 5, 8)


def decode_address_like(value: str, *, allow_random: bool = False) -> bytes:
    """Decode ``value`` into a 32-byte word.

    ``0x``-prefixed input is read as hex, anything else as padded standard
    base64. When ``allow_random`` is set the :data:`RANDOM_SENTINEL` yields
    :func:`generate_test_bytes` instead of being decoded.
    """

    if allow_random and value == RANDOM_SENTINEL:
        return generate_test_bytes()
    if value.startswith(HEX_PREFIX):
        decoded = _decode_hex(value)
    else:
        decoded = _decode_base64(value)
    return left_pad(decoded)
