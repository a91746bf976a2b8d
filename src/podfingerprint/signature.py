"""Text signature codec and verifier.

A signature is ``<prefix><version><digest-hex>`` with no separators. The
digest is rendered as lowercase hexadecimal zero-padded to the full width of
the 64-bit digest, so every signature of a given format has the same length.

Validation is layered: the total length and prefix are checked first, then
the version tag, and only a signature of the running version has its digest
compared. A version tag of the right width but a different value denotes a
foreign scheme whose digests cannot be compared with ours.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Final

from podfingerprint.errors import (
    IncompatibleVersionError,
    MalformedSignatureError,
    SignatureMismatchError,
)
from podfingerprint.hashing import DIGEST_MASK, DIGEST_SIZE

__all__ = [
    "DEFAULT_FORMAT",
    "PREFIX",
    "VERSION",
    "ParsedSignature",
    "SignatureFormat",
    "is_version_compatible",
    "render",
    "verify",
]

PREFIX: Final[str] = "pfp0"
VERSION: Final[str] = "v001"

_HEX_WIDTH: Final[int] = DIGEST_SIZE * 2
_LOWER_HEX: Final[frozenset[str]] = frozenset(string.digits + "abcdef")


@dataclass(frozen=True, slots=True)
class ParsedSignature:
    """Fields of a signature that passed format and version validation."""

    prefix: str
    version: str
    digest_hex: str

    @property
    def digest(self) -> int:
        """Return the digest field as an integer.

        Raises:
            MalformedSignatureError: If the field is not lowercase hexadecimal.
        """

        if not self.digest_hex or not set(self.digest_hex) <= _LOWER_HEX:
            raise MalformedSignatureError(
                f"digest field {self.digest_hex!r} is not lowercase hexadecimal"
            )
        return int(self.digest_hex, 16)


@dataclass(frozen=True, slots=True)
class SignatureFormat:
    """Prefix and version tag pair defining one signature layout.

    Attributes:
        prefix: Literal marker identifying the format family.
        version: Fixed-width tag identifying the hash and encoding scheme.
    """

    prefix: str = PREFIX
    version: str = VERSION

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValueError("signature prefix must not be empty")
        if not self.version:
            raise ValueError("signature version must not be empty")

    @property
    def expected_length(self) -> int:
        """Total length of every signature in this format."""

        return len(self.prefix) + len(self.version) + _HEX_WIDTH

    def render(self, digest: int) -> str:
        """Render ``digest`` as a signature.

        Args:
            digest: Unsigned 64-bit digest.

        Returns:
            The signature text.

        Raises:
            ValueError: If ``digest`` does not fit in 64 bits unsigned.
        """

        if digest < 0 or digest > DIGEST_MASK:
            raise ValueError(f"digest {digest} out of range for a 64-bit digest")
        return f"{self.prefix}{self.version}{digest:0{_HEX_WIDTH}x}"

    def is_version_compatible(self, tag: str) -> bool:
        """Return whether ``tag`` names the version this format produces.

        Args:
            tag: Version tag extracted from a signature, or supplied directly.

        Returns:
            ``True`` when ``tag`` equals the running version, ``False`` when it
            has the right width but a different value.

        Raises:
            MalformedSignatureError: If ``tag`` has the wrong width.
        """

        if len(tag) != len(self.version):
            raise MalformedSignatureError(
                f"version tag {tag!r} has length {len(tag)}, expected {len(self.version)}"
            )
        return tag == self.version

    def parse(self, candidate: str) -> ParsedSignature:
        """Split ``candidate`` into its fields, validating shape and version.

        Raises:
            MalformedSignatureError: On wrong length, prefix or version width.
            IncompatibleVersionError: On a foreign version of the right width.
        """

        if len(candidate) != self.expected_length:
            raise MalformedSignatureError(
                f"signature has length {len(candidate)}, expected {self.expected_length}"
            )
        if not candidate.startswith(self.prefix):
            raise MalformedSignatureError(
                f"signature does not start with prefix {self.prefix!r}"
            )
        start = len(self.prefix)
        end = start + len(self.version)
        version = candidate[start:end]
        if not self.is_version_compatible(version):
            raise IncompatibleVersionError(version, self.version)
        return ParsedSignature(
            prefix=self.prefix, version=version, digest_hex=candidate[end:]
        )

    def verify(self, candidate: str, digest: int) -> None:
        """Check ``candidate`` against the signature of ``digest``.

        Raises:
            MalformedSignatureError: If ``candidate`` is not a signature.
            IncompatibleVersionError: If it comes from another version.
            SignatureMismatchError: If it encodes a different digest.
        """

        self.parse(candidate)
        computed = self.render(digest)
        if candidate != computed:
            raise SignatureMismatchError(expected=candidate, computed=computed)


DEFAULT_FORMAT: Final[SignatureFormat] = SignatureFormat()


def render(digest: int) -> str:
    """Render ``digest`` with the default format."""

    return DEFAULT_FORMAT.render(digest)


def is_version_compatible(tag: str) -> bool:
    """Check ``tag`` against the version of the default format.

    Raises:
        MalformedSignatureError: If ``tag`` has the wrong width, including
            the empty string.
    """

    return DEFAULT_FORMAT.is_version_compatible(tag)


def verify(candidate: str, digest: int) -> None:
    """Verify ``candidate`` against ``digest`` with the default format."""

    DEFAULT_FORMAT.verify(candidate, digest)
