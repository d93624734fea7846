"""Pure Python content identifier codecs.

Converts between sha2-256 digests and CIDv1 strings (raw codec, base32),
with the base32 and base58 codecs they rely on.

Usage::

    from cidkit.multiformats import cid_to_hex, hex_to_cid

    cid = hex_to_cid("E8E2C917BD0E93EF803AD03CADD32142BF3B8119F46B7BA567E9CF203B68DA9E")
    # 'bafkreihi4lerppiospxyaowqhsw5gikcx45ycgpunn52kz7jz4qdw2g2ty'

    digest = cid_to_hex(cid)

All functions are pure and safe to call from any thread.
"""

from __future__ import annotations

from . import base32, base58
from .cid import cid_to_hex, content_cid, decode_cid, encode_cid, hex_to_cid, is_cid_v1
from .constants import Multicodec, MultihashCode
from .errors import CodecError, CodecErrorKind
from .multihash import (
    Multihash,
    decode_base58_multihash,
    encode_base58_multihash,
    is_cid_v0,
)

__all__ = [
    # Base codecs
    "base32",
    "base58",
    # CIDv1
    "hex_to_cid",
    "cid_to_hex",
    "encode_cid",
    "decode_cid",
    "content_cid",
    "is_cid_v1",
    # Legacy multihash
    "Multihash",
    "encode_base58_multihash",
    "decode_base58_multihash",
    "is_cid_v0",
    # Codes
    "Multicodec",
    "MultihashCode",
    # Exceptions
    "CodecError",
    "CodecErrorKind",
]
