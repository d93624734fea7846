"""
CIDv1 codec for raw content hashed with sha2-256.

Binary layout (36 bytes)::

    offset  length  meaning              value
    0       1       CID version          0x01
    1       1       multicodec           0x55 (raw)
    2       1       multihash function   0x12 (sha2-256)
    3       1       digest length        0x20 (32)
    4       32      digest

String form: the multibase prefix "b" followed by the base32 encoding of
the binary form, e.g. "bafkrei...". The first six characters are the same
for every CID in this profile because the header never changes.

Only this one profile is supported. Any other version, codec, hash
function or length is rejected outright rather than decoded on a
best-effort basis, so a malformed CID can never yield a plausible but
wrong digest.

References:
    - https://github.com/multiformats/cid#decoding-algorithm
    - https://github.com/multiformats/multihash
"""

from __future__ import annotations

import hashlib
import string
from typing import Final

from . import base32
from .constants import (
    CID_HEADER_LENGTH,
    CID_LENGTH,
    CID_VERSION,
    MULTIBASE_BASE32,
    SHA2_256_DIGEST_LENGTH,
    Multicodec,
    MultihashCode,
)
from .errors import CodecError, CodecErrorKind

_CID_HEADER: Final[bytes] = bytes(
    [CID_VERSION, Multicodec.RAW, MultihashCode.SHA2_256, SHA2_256_DIGEST_LENGTH]
)
"""Header shared by every CID this codec produces."""

_HEX_DIGITS: Final[frozenset[str]] = frozenset(string.hexdigits)


def _hex_to_bytes(hex_digest: str) -> bytes:
    """
    Parse a hex string, tolerating a 0x prefix, any case and odd length.

    Raises:
        CodecError: INVALID_CHARACTER on a non-hex character.
    """
    text = hex_digest.strip()
    offset = 0
    if text[:2] in ("0x", "0X"):
        text = text[2:]
        offset = 2

    for position, char in enumerate(text, start=offset):
        if char not in _HEX_DIGITS:
            raise CodecError.invalid_character("hex", char, position)

    if len(text) % 2:
        text = "0" + text
    return bytes.fromhex(text)


def encode_cid(digest: bytes) -> str:
    """
    Build the CIDv1 string for a sha2-256 digest.

    Args:
        digest: 32-byte sha2-256 digest.

    Returns:
        CIDv1 string ("b" + base32 of the 36-byte binary form).

    Raises:
        CodecError: INVALID_DIGEST_LENGTH if the digest is not 32 bytes.
    """
    if len(digest) != SHA2_256_DIGEST_LENGTH:
        raise CodecError.digest_length(expected=SHA2_256_DIGEST_LENGTH, actual=len(digest))
    return MULTIBASE_BASE32 + base32.encode(_CID_HEADER + digest)


def decode_cid(cid: str) -> bytes:
    """
    Parse a CIDv1 string and return its sha2-256 digest.

    Header bytes are checked in layout order, so the first mismatch
    determines the error kind.

    Args:
        cid: CIDv1 string starting with "b".

    Returns:
        The 32-byte digest.

    Raises:
        CodecError: UNSUPPORTED_MULTIBASE, INVALID_CHARACTER,
            UNSUPPORTED_VERSION, UNSUPPORTED_CODEC,
            UNSUPPORTED_HASH_FUNCTION or INVALID_DIGEST_LENGTH.
    """
    if not cid.startswith(MULTIBASE_BASE32):
        raise CodecError(
            CodecErrorKind.UNSUPPORTED_MULTIBASE,
            f"Only base32 CIDs starting with {MULTIBASE_BASE32!r} are supported",
        )

    body = cid[len(MULTIBASE_BASE32) :]
    raw = base32.decode(body)

    if len(raw) < CID_HEADER_LENGTH:
        raise CodecError(
            CodecErrorKind.INVALID_DIGEST_LENGTH,
            f"Invalid CID: too short ({len(raw)} bytes)",
            expected=SHA2_256_DIGEST_LENGTH,
            actual=len(raw),
        )

    version, codec, hash_function, digest_length = raw[:CID_HEADER_LENGTH]

    if version != CID_VERSION:
        raise CodecError.header_mismatch(
            CodecErrorKind.UNSUPPORTED_VERSION, "CID version", expected=CID_VERSION, actual=version
        )
    if codec != Multicodec.RAW:
        raise CodecError.header_mismatch(
            CodecErrorKind.UNSUPPORTED_CODEC, "codec", expected=Multicodec.RAW, actual=codec
        )
    if hash_function != MultihashCode.SHA2_256:
        raise CodecError.header_mismatch(
            CodecErrorKind.UNSUPPORTED_HASH_FUNCTION,
            "hash function",
            expected=MultihashCode.SHA2_256,
            actual=hash_function,
        )

    # The declared length and the actual length must both agree with sha2-256.
    if digest_length != SHA2_256_DIGEST_LENGTH or len(raw) != CID_LENGTH:
        raise CodecError.digest_length(
            expected=SHA2_256_DIGEST_LENGTH, actual=len(raw) - CID_HEADER_LENGTH
        )

    # base32 decoding drops trailing bits, so extra characters or non-zero
    # padding bits would otherwise decode to the same digest.
    if body.lower() != base32.encode(raw):
        raise CodecError(
            CodecErrorKind.INVALID_DIGEST_LENGTH,
            f"Invalid CID: {len(body)} base32 characters are not the canonical encoding "
            f"of {CID_LENGTH} bytes",
            expected=SHA2_256_DIGEST_LENGTH,
            actual=len(raw) - CID_HEADER_LENGTH,
        )

    return raw[CID_HEADER_LENGTH:]


def hex_to_cid(hex_digest: str) -> str:
    """
    Convert a sha2-256 hex digest to a CIDv1 string.

    Args:
        hex_digest: 64 hex characters, any case, optional 0x prefix.

    Returns:
        CIDv1 string.

    Raises:
        CodecError: INVALID_CHARACTER on non-hex input,
            INVALID_DIGEST_LENGTH if it is not 32 bytes.
    """
    return encode_cid(_hex_to_bytes(hex_digest))


def cid_to_hex(cid: str, *, uppercase: bool = True) -> str:
    """
    Extract the sha2-256 digest of a CIDv1 string as hex.

    Args:
        cid: CIDv1 string.
        uppercase: Return uppercase hex (the default) or lowercase.

    Returns:
        64-character hex digest, without prefix.

    Raises:
        CodecError: See `decode_cid`.
    """
    digest = decode_cid(cid).hex()
    return digest.upper() if uppercase else digest


def content_cid(data: bytes) -> str:
    """Hash content with SHA-256 and return its raw CIDv1."""
    return encode_cid(hashlib.sha256(data).digest())


def is_cid_v1(text: str) -> bool:
    """Whether `text` is a well-formed CID in the supported profile."""
    try:
        decode_cid(text)
    except CodecError:
        return False
    return True
