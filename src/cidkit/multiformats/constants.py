"""
Constants for the multiformats codecs.

References:
    - https://datatracker.ietf.org/doc/html/rfc4648#section-6
    - https://github.com/multiformats/multibase
    - https://github.com/multiformats/multicodec/blob/master/table.csv
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final

# ===========================================================================
# Alphabets
# ===========================================================================

BASE32_ALPHABET: Final[str] = "abcdefghijklmnopqrstuvwxyz234567"
"""RFC4648 base32 alphabet, lowercase as used by CIDv1."""

BASE58_ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
"""Bitcoin base58 alphabet (excludes 0, O, I, l)."""

# ===========================================================================
# CIDv1 Layout
# ===========================================================================
#
# The only profile supported is raw content hashed with sha2-256:
#
#   [version][codec][hash function][digest length][digest ...]
#      0x01    0x55        0x12           0x20       32 bytes
#
# Every header field is below 0x80, so each varint is a single byte.

MULTIBASE_BASE32: Final[str] = "b"
"""Multibase prefix for lowercase, unpadded RFC4648 base32."""

CID_VERSION: Final[int] = 1
"""CID version byte."""

SHA2_256_DIGEST_LENGTH: Final[int] = 32
"""Length of a sha2-256 digest in bytes."""

CID_HEADER_LENGTH: Final[int] = 4
"""Version, codec, hash function and digest length bytes."""

CID_LENGTH: Final[int] = CID_HEADER_LENGTH + SHA2_256_DIGEST_LENGTH
"""Total length of a binary CID (36 bytes)."""

CIDV0_LENGTH: Final[int] = 46
"""Length of a base58 sha2-256 CIDv0 string."""

CIDV0_PREFIX: Final[str] = "Qm"
"""Every base58 sha2-256 multihash starts with these characters."""


class Multicodec(IntEnum):
    """Content type codes carried in the CID header."""

    RAW = 0x55
    """Raw binary content."""


class MultihashCode(IntEnum):
    """
    Multihash function codes.

    Multihash is a self-describing hash format: [code][length][digest].
    """

    SHA2_256 = 0x12
    """SHA-256 hash (32-byte output)."""
