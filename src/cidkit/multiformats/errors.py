"""Error taxonomy for the multiformats codecs."""

from __future__ import annotations

from enum import Enum


class CodecErrorKind(Enum):
    """Every way a codec operation can reject its input."""

    INVALID_CHARACTER = "invalid_character"
    """A character outside the base32, base58 or hex alphabet."""

    INVALID_DIGEST_LENGTH = "invalid_digest_length"
    """A digest that is not 32 bytes, or a CID whose length disagrees with its header."""

    UNSUPPORTED_MULTIBASE = "unsupported_multibase"
    """A CID string without the base32 multibase prefix."""

    UNSUPPORTED_VERSION = "unsupported_version"
    """A CID version other than 1."""

    UNSUPPORTED_CODEC = "unsupported_codec"
    """A content codec other than raw."""

    UNSUPPORTED_HASH_FUNCTION = "unsupported_hash_function"
    """A multihash function other than sha2-256."""

    EMPTY_MULTIHASH = "empty_multihash"
    """A stored multihash that carries no value."""


class CodecError(ValueError):
    """
    Raised when a codec operation rejects its input.

    A single exception type tagged by `kind`, so callers branch on the
    enum value rather than on subclasses.

    Attributes:
        kind: Which rejection occurred.
        detail: Human-readable description.
        character: The offending character (INVALID_CHARACTER only).
        position: Index of the offending character in the input.
        expected: Expected value for header or length mismatches.
        actual: Value actually found; a byte count for length errors.
    """

    def __init__(
        self,
        kind: CodecErrorKind,
        detail: str,
        *,
        character: str | None = None,
        position: int | None = None,
        expected: int | None = None,
        actual: int | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        self.character = character
        self.position = position
        self.expected = expected
        self.actual = actual
        super().__init__(detail)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind.name}, {self.detail!r})"

    @classmethod
    def invalid_character(cls, encoding: str, character: str, position: int) -> CodecError:
        """Build an INVALID_CHARACTER error for `encoding` input."""
        return cls(
            CodecErrorKind.INVALID_CHARACTER,
            f"Invalid {encoding} character {character!r} at position {position}",
            character=character,
            position=position,
        )

    @classmethod
    def header_mismatch(
        cls, kind: CodecErrorKind, field: str, *, expected: int, actual: int
    ) -> CodecError:
        """Build an error for a CID header byte that does not match the supported profile."""
        return cls(
            kind,
            f"Unsupported {field}: expected 0x{expected:02x}, got 0x{actual:02x}",
            expected=expected,
            actual=actual,
        )

    @classmethod
    def digest_length(cls, *, expected: int, actual: int) -> CodecError:
        """Build an INVALID_DIGEST_LENGTH error."""
        return cls(
            CodecErrorKind.INVALID_DIGEST_LENGTH,
            f"Invalid digest length: expected {expected} bytes, got {actual}",
            expected=expected,
            actual=actual,
        )
