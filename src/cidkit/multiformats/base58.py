"""
Base58 encoding (Bitcoin alphabet).

Used by legacy multihash values, which were written as base58 CIDv0
strings ("Qm...").

58 is not a power of two, so unlike base32 there is no bit packing: the
input is read as one big-endian integer and converted by repeated
division. Python integers are unbounded, so inputs of any length convert
without overflow.

Leading zero bytes carry no numeric value and would vanish in the
conversion. They are preserved separately as leading '1' characters (the
alphabet's zero digit).
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from .constants import BASE58_ALPHABET
from .errors import CodecError

_BASE: Final[int] = len(BASE58_ALPHABET)

_ZERO_DIGIT: Final[str] = BASE58_ALPHABET[0]

_DECODE_MAP: Final[Mapping[str, int]] = MappingProxyType(
    {char: value for value, char in enumerate(BASE58_ALPHABET)}
)


def encode(data: bytes) -> str:
    """
    Encode bytes as a base58 string.

    Leading zero bytes become leading '1' characters.

    Args:
        data: Bytes to encode.

    Returns:
        Base58-encoded string.
    """
    # Count leading zeros (become leading '1's)
    leading_zeros = len(data) - len(data.lstrip(b"\x00"))

    num = int.from_bytes(data, "big")
    digits: list[str] = []

    while num > 0:
        num, remainder = divmod(num, _BASE)
        digits.append(BASE58_ALPHABET[remainder])

    digits.extend(_ZERO_DIGIT * leading_zeros)
    return "".join(reversed(digits))


def decode(text: str) -> bytes:
    """
    Decode a base58 string to bytes.

    Leading '1' characters become leading zero bytes.

    Args:
        text: Base58-encoded string.

    Returns:
        Decoded bytes.

    Raises:
        CodecError: INVALID_CHARACTER if the string contains a character
            outside the alphabet.
    """
    leading_ones = len(text) - len(text.lstrip(_ZERO_DIGIT))

    num = 0
    for position, char in enumerate(text):
        value = _DECODE_MAP.get(char)
        if value is None:
            raise CodecError.invalid_character("base58", char, position)
        num = num * _BASE + value

    body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
    return b"\x00" * leading_ones + body
