"""
RFC4648 base32 encoding, lowercase and without padding.

This is the text form used by CIDv1 strings (multibase prefix "b").


HOW IT WORKS
------------
Base32 maps every 5 bits of input to one of 32 characters. Bytes are 8
bits wide, so the two widths do not line up: a bit buffer carries the
remainder from one byte to the next.

    Input bytes:   [01010101] [00010010]
    Bit stream:     01010 10100 01001 0
    Characters:       k     u     j   (0 + 0000 padding) -> a

Encoding emits one character for every 5 buffered bits. Leftover bits at
the end (1-4 of them) are shifted left to fill a final 5-bit group. No '='
characters are written, so the output length is ceil(8 * n / 5).

Decoding reverses this: each character contributes 5 bits and one byte is
emitted for every 8 buffered bits. Trailing bits that do not fill a byte
are the padding written by the encoder and are discarded, so the output
length is floor(5 * n / 8).


Reference: https://datatracker.ietf.org/doc/html/rfc4648#section-6
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final, Mapping

from .constants import BASE32_ALPHABET
from .errors import CodecError

_DECODE_MAP: Final[Mapping[str, int]] = MappingProxyType(
    {char: value for value, char in enumerate(BASE32_ALPHABET)}
)
"""Character to 5-bit value lookup."""

_GROUP_MASK: Final[int] = 0x1F
"""Mask for a single 5-bit group."""


def encode(data: bytes) -> str:
    """
    Encode bytes as lowercase, unpadded base32.

    Args:
        data: Bytes to encode.

    Returns:
        Base32 string of length ceil(8 * len(data) / 5).
    """
    chars: list[str] = []
    buffer = 0
    bits = 0

    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8

        # Drain every complete 5-bit group from the top of the buffer.
        while bits >= 5:
            bits -= 5
            chars.append(BASE32_ALPHABET[(buffer >> bits) & _GROUP_MASK])

        # Keep only the bits not yet emitted.
        buffer &= (1 << bits) - 1

    # Pad the final partial group with zero bits.
    if bits > 0:
        chars.append(BASE32_ALPHABET[(buffer << (5 - bits)) & _GROUP_MASK])

    return "".join(chars)


def decode(text: str) -> bytes:
    """
    Decode a base32 string. Input is case-insensitive.

    Args:
        text: Base32 string, without padding characters.

    Returns:
        Decoded bytes, floor(5 * len(text) / 8) of them.

    Raises:
        CodecError: INVALID_CHARACTER if a character is outside the alphabet.
    """
    output = bytearray()
    buffer = 0
    bits = 0

    for position, char in enumerate(text):
        value = _DECODE_MAP.get(char.lower())
        if value is None:
            raise CodecError.invalid_character("base32", char, position)

        buffer = (buffer << 5) | value
        bits += 5

        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    return bytes(output)
