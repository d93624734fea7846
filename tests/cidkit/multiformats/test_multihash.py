"""Tests for registry multihash values and the base58 multihash path."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from cidkit.multiformats import (
    CodecError,
    CodecErrorKind,
    Multihash,
    base32,
    base58,
    decode_base58_multihash,
    encode_base58_multihash,
    hex_to_cid,
    is_cid_v0,
)

DIGEST_HEX = "e8e2c917bd0e93ef803ad03cadd32142bf3b8119f46b7ba567e9cf203b68da9e"
CIDV1 = "bafkreihi4lerppiospxyaowqhsw5gikcx45ycgpunn52kz7jz4qdw2g2ty"

# A CIDv0 as written by legacy savers.
CIDV0 = "QmfYNyAyGD8xHE9XgctX8WnfJ627edkM2EkAcijEutoJmH"


class TestBase58Multihash:
    """Tests for the base58 sha2-256 multihash (CIDv0 form)."""

    @given(st.binary(min_size=32, max_size=32))
    def test_roundtrip(self, digest: bytes) -> None:
        """Encode then decode returns the digest."""
        encoded = encode_base58_multihash(digest)
        assert decode_base58_multihash(encoded) == digest

    @given(st.binary(min_size=32, max_size=32))
    def test_shape(self, digest: bytes) -> None:
        """Every sha2-256 multihash renders as a 46-character 'Qm' string."""
        encoded = encode_base58_multihash(digest)
        assert encoded.startswith("Qm")
        assert len(encoded) == 46
        assert is_cid_v0(encoded)

    def test_known_cidv0(self) -> None:
        """A real CIDv0 decodes and re-encodes unchanged."""
        digest = decode_base58_multihash(CIDV0)
        assert len(digest) == 32
        assert encode_base58_multihash(digest) == CIDV0

    def test_encode_rejects_other_sizes(self) -> None:
        """Only 32-byte digests can be encoded."""
        with pytest.raises(CodecError) as exc_info:
            encode_base58_multihash(bytes(20))

        assert exc_info.value.kind is CodecErrorKind.INVALID_DIGEST_LENGTH

    def test_decode_wrong_hash_function(self) -> None:
        """A multihash for another function is rejected."""
        text = base58.encode(b"\x13\x20" + bytes(32))
        with pytest.raises(CodecError) as exc_info:
            decode_base58_multihash(text)

        assert exc_info.value.kind is CodecErrorKind.UNSUPPORTED_HASH_FUNCTION
        assert exc_info.value.actual == 0x13

    def test_decode_truncated(self) -> None:
        """A digest shorter than declared is rejected."""
        text = base58.encode(b"\x12\x20" + bytes(31))
        with pytest.raises(CodecError) as exc_info:
            decode_base58_multihash(text)

        assert exc_info.value.kind is CodecErrorKind.INVALID_DIGEST_LENGTH

    def test_decode_too_short(self) -> None:
        """A value without a full header is rejected."""
        with pytest.raises(CodecError) as exc_info:
            decode_base58_multihash("2")

        assert exc_info.value.kind is CodecErrorKind.INVALID_DIGEST_LENGTH
        assert exc_info.value.actual == 1

    def test_decode_invalid_character(self) -> None:
        """Alphabet errors propagate."""
        with pytest.raises(CodecError) as exc_info:
            decode_base58_multihash("Qm0")

        assert exc_info.value.kind is CodecErrorKind.INVALID_CHARACTER

    def test_is_cid_v0(self) -> None:
        """Only 46-character 'Qm' strings look like CIDv0."""
        assert is_cid_v0(CIDV0)
        assert not is_cid_v0(CIDV1)
        assert not is_cid_v0(CIDV0[:-1])


class TestMultihashModel:
    """Tests for the pydantic model."""

    def test_from_digest(self) -> None:
        """Current writers store the digest with sha2-256 metadata."""
        multihash = Multihash.from_digest(bytes.fromhex(DIGEST_HEX))

        assert multihash.hash == "0x" + DIGEST_HEX
        assert multihash.hash_function == 0x12
        assert multihash.size == 32

    def test_from_cid(self) -> None:
        """A CID is stored as its digest."""
        assert Multihash.from_cid(CIDV1) == Multihash.from_digest(bytes.fromhex(DIGEST_HEX))

    def test_from_digest_rejects_other_sizes(self) -> None:
        """Only sha2-256 digests are stored."""
        with pytest.raises(CodecError) as exc_info:
            Multihash.from_digest(bytes(33))

        assert exc_info.value.kind is CodecErrorKind.INVALID_DIGEST_LENGTH

    def test_camel_case_serialization(self) -> None:
        """Field names match the registry's JSON shape."""
        multihash = Multihash.from_cid(CIDV1)
        assert multihash.model_dump(by_alias=True) == {
            "hash": "0x" + DIGEST_HEX,
            "hashFunction": 0x12,
            "size": 32,
        }

    def test_parse_registry_json(self) -> None:
        """Registry JSON parses via the camelCase aliases."""
        multihash = Multihash.model_validate_json(
            f'{{"hash": "0x{DIGEST_HEX}", "hashFunction": 18, "size": 32}}'
        )
        assert multihash.hash_function == 18

    def test_requires_hex_prefix(self) -> None:
        """The hash field must carry the 0x prefix."""
        with pytest.raises(ValidationError):
            Multihash(hash=DIGEST_HEX, hash_function=0x12, size=32)

    def test_strict_types(self) -> None:
        """Numbers given as strings are rejected."""
        with pytest.raises(ValidationError):
            Multihash.model_validate({"hash": "0x00", "hashFunction": "18", "size": 32})

    @pytest.mark.parametrize("field", ["hash_function", "size"])
    def test_uint8_bounds(self, field: str) -> None:
        """Numeric fields are uint8 on chain."""
        values = {"hash": "0x" + DIGEST_HEX, "hash_function": 0x12, "size": 32}
        with pytest.raises(ValidationError):
            Multihash(**(values | {field: 256}))
        with pytest.raises(ValidationError):
            Multihash(**(values | {field: -1}))

    def test_unknown_fields_rejected(self) -> None:
        """Extra keys are not silently dropped."""
        with pytest.raises(ValidationError):
            Multihash.model_validate(
                {"hash": "0x00", "hashFunction": 18, "size": 32, "cid": CIDV1}
            )

    def test_frozen(self) -> None:
        """Instances are immutable."""
        multihash = Multihash.from_cid(CIDV1)
        with pytest.raises(ValidationError):
            multihash.size = 0  # type: ignore[misc]


class TestEmpty:
    """Tests for detecting an unset registry entry."""

    @pytest.mark.parametrize(
        "hash_value, size",
        [
            ("0x", 32),
            ("0x" + "0" * 64, 32),
            ("0x0", 1),
            ("0x" + DIGEST_HEX, 0),
        ],
    )
    def test_is_empty(self, hash_value: str, size: int) -> None:
        """Zero hashes and zero sizes mean nothing is stored."""
        multihash = Multihash(hash=hash_value, hash_function=0, size=size)
        assert multihash.is_empty

        with pytest.raises(CodecError) as exc_info:
            multihash.to_cid()
        assert exc_info.value.kind is CodecErrorKind.EMPTY_MULTIHASH

        with pytest.raises(CodecError):
            multihash.digest()

    def test_not_empty(self) -> None:
        """A stored digest is not empty."""
        assert not Multihash.from_cid(CIDV1).is_empty


class TestResolution:
    """Tests for resolving stored values to CIDs."""

    def test_digest_form(self) -> None:
        """A stored digest resolves through the CIDv1 codec."""
        multihash = Multihash.from_digest(bytes.fromhex(DIGEST_HEX))
        assert multihash.to_cid() == CIDV1
        assert multihash.digest() == bytes.fromhex(DIGEST_HEX)

    def test_uppercase_digest_form(self) -> None:
        """Hex case in the stored digest does not matter."""
        multihash = Multihash(hash="0x" + DIGEST_HEX.upper(), hash_function=0x12, size=32)
        assert multihash.to_cid() == CIDV1

    def test_digest_starting_with_b(self) -> None:
        """A 64-character hex digest is never mistaken for a base32 CID."""
        digest_hex = "b" + DIGEST_HEX[1:]
        multihash = Multihash(hash="0x" + digest_hex, hash_function=0x12, size=32)
        assert multihash.to_cid() == hex_to_cid(digest_hex)

    def test_legacy_cidv0(self) -> None:
        """A legacy CIDv0 is validated and returned unchanged."""
        multihash = Multihash(hash="0x" + CIDV0, hash_function=1, size=120)
        assert multihash.payload == CIDV0
        assert multihash.to_cid() == CIDV0
        assert multihash.digest() == decode_base58_multihash(CIDV0)

    def test_legacy_cidv1(self) -> None:
        """A legacy CIDv1 is validated and returned as is."""
        multihash = Multihash(hash="0x" + CIDV1, hash_function=1, size=120)
        assert multihash.to_cid() == CIDV1
        assert multihash.digest() == bytes.fromhex(DIGEST_HEX)

    def test_legacy_cidv1_canonical_case(self) -> None:
        """A legacy CIDv1 with an uppercase body comes back lowercase."""
        multihash = Multihash(hash="0xb" + CIDV1[1:].upper(), hash_function=1, size=120)
        assert multihash.to_cid() == CIDV1

    def test_legacy_cidv1_wrong_codec(self) -> None:
        """Stored CIDs outside the supported profile are rejected."""
        cid = "b" + base32.encode(bytes([1, 0x70, 0x12, 0x20]) + bytes(32))
        multihash = Multihash(hash="0x" + cid, hash_function=1, size=120)
        with pytest.raises(CodecError) as exc_info:
            multihash.to_cid()

        assert exc_info.value.kind is CodecErrorKind.UNSUPPORTED_CODEC

    def test_legacy_cidv1_trailing_character(self) -> None:
        """A stored CIDv1 with a stray trailing character is rejected, not rewritten."""
        multihash = Multihash(hash="0x" + CIDV1 + "a", hash_function=1, size=120)
        with pytest.raises(CodecError) as exc_info:
            multihash.to_cid()

        assert exc_info.value.kind is CodecErrorKind.INVALID_DIGEST_LENGTH

    def test_corrupt_cidv0(self) -> None:
        """A CIDv0-shaped value with a bad character is rejected."""
        corrupt = CIDV0[:-1] + "0"
        multihash = Multihash(hash="0x" + corrupt, hash_function=1, size=120)
        with pytest.raises(CodecError) as exc_info:
            multihash.to_cid()

        assert exc_info.value.kind is CodecErrorKind.INVALID_CHARACTER

    def test_unrecognised(self) -> None:
        """Values in no known form are rejected."""
        multihash = Multihash(hash="0xdeadbeef", hash_function=1, size=4)
        with pytest.raises(CodecError) as exc_info:
            multihash.to_cid()

        assert exc_info.value.kind is CodecErrorKind.UNSUPPORTED_MULTIBASE
