"""Error taxonomy for signature validation."""

from __future__ import annotations

from typing import ClassVar

__all__ = [
    "FingerprintError",
    "IncompatibleVersionError",
    "MalformedSignatureError",
    "SignatureMismatchError",
]


class FingerprintError(ValueError):
    """Base class for every signature validation failure."""

    kind: ClassVar[str] = "error"


class MalformedSignatureError(FingerprintError):
    """Raised when a text cannot be interpreted as a signature at all."""

    kind: ClassVar[str] = "malformed"


class IncompatibleVersionError(FingerprintError):
    """Raised when a signature was produced by a different scheme version."""

    kind: ClassVar[str] = "incompatible-version"

    def __init__(self, version: str, expected: str) -> None:
        super().__init__(f"incompatible version {version!r}, expected {expected!r}")
        self.version = version
        self.expected = expected


class SignatureMismatchError(FingerprintError):
    """Raised when a well-formed signature does not match the computed one."""

    kind: ClassVar[str] = "signature-mismatch"

    def __init__(self, expected: str, computed: str) -> None:
        super().__init__(f"signature mismatch: expected {expected!r}, computed {computed!r}")
        self.expected = expected
        self.computed = computed
