"""
Multihash values stored by the on-chain filesystem registry.

The registry keeps one `{hash, hashFunction, size}` triple per account,
pointing at the account's saved game history. Two generations of writers
have filled it:

- Current writers store the 32-byte sha2-256 digest of the content as
  `hash`. The CID is rebuilt from the digest with the CIDv1 codec, so no
  base58 handling is needed for new writes.
- Legacy writers stored the storage provider's CID string itself behind a
  "0x" prefix. Depending on the provider that is either a base58 CIDv0
  ("Qm...") or a base32 CIDv1 ("bafk...").

`Multihash.to_cid` accepts all three shapes.

References:
    - https://github.com/multiformats/multihash
    - https://github.com/multiformats/cid#cidv0
"""

from __future__ import annotations

import logging
import string

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing_extensions import Self

from . import base58
from .cid import decode_cid, encode_cid
from .constants import (
    CIDV0_LENGTH,
    CIDV0_PREFIX,
    MULTIBASE_BASE32,
    SHA2_256_DIGEST_LENGTH,
    MultihashCode,
)
from .errors import CodecError, CodecErrorKind

logger = logging.getLogger(__name__)

_HEX_PREFIX = "0x"


def is_cid_v0(text: str) -> bool:
    """Whether `text` has the shape of a base58 sha2-256 CIDv0."""
    return text.startswith(CIDV0_PREFIX) and len(text) == CIDV0_LENGTH


def encode_base58_multihash(digest: bytes) -> str:
    """
    Encode a sha2-256 digest as a base58 multihash (the CIDv0 form).

    Format: base58([0x12][0x20][digest])

    Raises:
        CodecError: INVALID_DIGEST_LENGTH if the digest is not 32 bytes.
    """
    if len(digest) != SHA2_256_DIGEST_LENGTH:
        raise CodecError.digest_length(expected=SHA2_256_DIGEST_LENGTH, actual=len(digest))
    return base58.encode(bytes([MultihashCode.SHA2_256, SHA2_256_DIGEST_LENGTH]) + digest)


def decode_base58_multihash(text: str) -> bytes:
    """
    Decode a base58 sha2-256 multihash and return the digest.

    Raises:
        CodecError: INVALID_CHARACTER, UNSUPPORTED_HASH_FUNCTION or
            INVALID_DIGEST_LENGTH.
    """
    raw = base58.decode(text)
    if len(raw) < 2:
        raise CodecError(
            CodecErrorKind.INVALID_DIGEST_LENGTH,
            f"Invalid multihash: too short ({len(raw)} bytes)",
            expected=SHA2_256_DIGEST_LENGTH,
            actual=len(raw),
        )

    code, length = raw[0], raw[1]
    if code != MultihashCode.SHA2_256:
        raise CodecError.header_mismatch(
            CodecErrorKind.UNSUPPORTED_HASH_FUNCTION,
            "hash function",
            expected=MultihashCode.SHA2_256,
            actual=code,
        )
    if length != SHA2_256_DIGEST_LENGTH or len(raw) != 2 + SHA2_256_DIGEST_LENGTH:
        raise CodecError.digest_length(expected=SHA2_256_DIGEST_LENGTH, actual=len(raw) - 2)

    return raw[2:]


class Multihash(BaseModel):
    """
    A multihash triple as stored by the filesystem registry.

    Serializes with camelCase keys (`hashFunction`) to match the registry's
    JSON shape. Both numeric fields are uint8 on chain.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )

    hash: str
    """Stored value, always "0x"-prefixed."""

    hash_function: int = Field(ge=0, le=0xFF)
    """Multihash function code recorded by the writer."""

    size: int = Field(ge=0, le=0xFF)
    """Size recorded by the writer."""

    @field_validator("hash")
    @classmethod
    def _require_hex_prefix(cls, value: str) -> str:
        if not value.startswith(_HEX_PREFIX):
            raise ValueError(f"hash must start with {_HEX_PREFIX!r}")
        return value

    @classmethod
    def from_digest(cls, digest: bytes) -> Self:
        """
        Build the triple a current writer stores for a sha2-256 digest.

        Raises:
            CodecError: INVALID_DIGEST_LENGTH if the digest is not 32 bytes.
        """
        if len(digest) != SHA2_256_DIGEST_LENGTH:
            raise CodecError.digest_length(expected=SHA2_256_DIGEST_LENGTH, actual=len(digest))
        return cls(
            hash=_HEX_PREFIX + digest.hex(),
            hash_function=int(MultihashCode.SHA2_256),
            size=SHA2_256_DIGEST_LENGTH,
        )

    @classmethod
    def from_cid(cls, cid: str) -> Self:
        """Build the triple a current writer stores for a CIDv1 string."""
        return cls.from_digest(decode_cid(cid))

    @property
    def payload(self) -> str:
        """The stored value without its "0x" prefix."""
        return self.hash[len(_HEX_PREFIX) :]

    @property
    def is_empty(self) -> bool:
        """
        Whether the registry holds nothing for this account.

        Unset entries come back as a zero hash or a zero size.
        """
        payload = self.payload
        return not payload or self.size == 0 or not payload.strip("0")

    def _is_digest(self) -> bool:
        payload = self.payload
        return len(payload) == 2 * SHA2_256_DIGEST_LENGTH and all(
            char in string.hexdigits for char in payload
        )

    def digest(self) -> bytes:
        """
        Return the sha2-256 digest the stored value refers to.

        Raises:
            CodecError: EMPTY_MULTIHASH if nothing is stored,
                UNSUPPORTED_MULTIBASE if the value is in no recognised form,
                or any error from decoding the stored CID.
        """
        self._ensure_not_empty()
        payload = self.payload

        if self._is_digest():
            return bytes.fromhex(payload)
        if is_cid_v0(payload):
            return decode_base58_multihash(payload)
        if payload.startswith(MULTIBASE_BASE32):
            return decode_cid(payload)
        raise self._unrecognised()

    def to_cid(self) -> str:
        """
        Resolve the stored value to a CID string usable with a gateway.

        Digests are converted to CIDv1. Legacy CIDv0 values are validated
        and returned unchanged, since their content was stored under that
        CID. Legacy CIDv1 values are validated and returned in canonical
        lowercase form.

        Raises:
            CodecError: See `digest`.
        """
        self._ensure_not_empty()
        payload = self.payload

        if self._is_digest():
            logger.debug("Multihash holds a sha2-256 digest (hashFunction=%d)", self.hash_function)
            return encode_cid(bytes.fromhex(payload))

        if is_cid_v0(payload):
            logger.debug("Multihash holds a legacy CIDv0: %s", payload)
            decode_base58_multihash(payload)
            return payload

        if payload.startswith(MULTIBASE_BASE32):
            logger.debug("Multihash holds a legacy CIDv1: %s", payload)
            return encode_cid(decode_cid(payload))

        raise self._unrecognised()

    def _ensure_not_empty(self) -> None:
        if self.is_empty:
            raise CodecError(CodecErrorKind.EMPTY_MULTIHASH, "No multihash stored for this account")

    def _unrecognised(self) -> CodecError:
        return CodecError(
            CodecErrorKind.UNSUPPORTED_MULTIBASE,
            f"Stored multihash is neither a digest nor a supported CID: {self.payload[:16]!r}",
        )
