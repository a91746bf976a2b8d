"""Order-independent fingerprint over the workloads placed on a node.

Entries are hashed individually and folded into a 64-bit running digest by
addition modulo ``2**64``. Addition is commutative and associative, so the
digest depends only on the multiset of entries and never on the order in
which they were enumerated. A duplicate entry shifts the digest rather than
cancelling out as it would under XOR. Distinct multisets whose hash sums
coincide modulo ``2**64`` collide; digest equality therefore means "likely
the same workloads", not a cryptographic guarantee.

An accumulator has a single writer. Producers that enumerate concurrently
should build one accumulator each and combine them with
:meth:`Fingerprint.merge`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from podfingerprint.errors import FingerprintError
from podfingerprint.hashing import DIGEST_MASK, DIGEST_SIZE, hash_entry
from podfingerprint.signature import DEFAULT_FORMAT, SignatureFormat
from podfingerprint.status import TraceStatus

__all__ = ["Fingerprint", "PodIdentifier"]

logger = logging.getLogger(__name__)


class PodIdentifier(Protocol):
    """Minimal interface of an object identifying one workload."""

    def get_namespace(self) -> str:
        """Return the workload namespace."""

    def get_name(self) -> str:
        """Return the workload name."""


def _trace_text(value: str | bytes) -> str:
    if isinstance(value, str):
        return value
    return bytes(value).decode("utf-8", errors="backslashreplace")


class Fingerprint:
    """Accumulate workload identities into a versioned signature.

    Args:
        capacity_hint: Expected number of entries. Informational only; it
            never affects the digest.
        trace: Optional :class:`TraceStatus` receiving every entry and the
            signatures rendered or checked.
        signature_format: Layout used to render and parse signatures.

    Raises:
        ValueError: If ``capacity_hint`` is negative.
    """

    __slots__ = ("_digest", "_format", "_trace", "capacity_hint")

    def __init__(
        self,
        capacity_hint: int = 0,
        *,
        trace: TraceStatus | None = None,
        signature_format: SignatureFormat = DEFAULT_FORMAT,
    ) -> None:
        if capacity_hint < 0:
            raise ValueError("capacity_hint must be non-negative")
        self.capacity_hint = capacity_hint
        self._digest = 0
        self._format = signature_format
        self._trace = trace

    @property
    def signature_format(self) -> SignatureFormat:
        return self._format

    @property
    def trace(self) -> TraceStatus | None:
        return self._trace

    def add(self, namespace: str | bytes, name: str | bytes) -> None:
        """Fold one workload identity into the running digest."""

        self._digest = (self._digest + hash_entry(namespace, name)) & DIGEST_MASK
        if self._trace is not None:
            self._trace.add(_trace_text(namespace), _trace_text(name))

    def add_pod(self, pod: PodIdentifier) -> None:
        """Fold a workload exposing ``get_namespace``/``get_name``."""

        self.add(pod.get_namespace(), pod.get_name())

    def add_pods(self, pods: Iterable[PodIdentifier]) -> None:
        for pod in pods:
            self.add_pod(pod)

    def merge(self, other: Fingerprint) -> None:
        """Fold the digest of ``other`` into this accumulator.

        The result equals a single accumulator fed the entries of both.

        Raises:
            ValueError: If the accumulators use different signature formats.
        """

        if other.signature_format != self._format:
            raise ValueError("cannot merge fingerprints with different signature formats")
        self._digest = (self._digest + other.digest()) & DIGEST_MASK
        if self._trace is not None and other.trace is not None:
            self._trace.pods.extend(other.trace.pods)

    def digest(self) -> int:
        """Return the running digest as an unsigned 64-bit integer."""

        return self._digest

    def sum(self) -> bytes:
        """Return the running digest as big-endian bytes."""

        return self._digest.to_bytes(DIGEST_SIZE, "big")

    def sign(self) -> str:
        """Return the text signature of the running digest."""

        signature = self._format.render(self._digest)
        if self._trace is not None:
            self._trace.fingerprint_computed = signature
        return signature

    def check(self, candidate: str) -> None:
        """Verify ``candidate`` against the signature of the current entries.

        Args:
            candidate: Signature previously published by a peer.

        Raises:
            MalformedSignatureError: If ``candidate`` cannot be interpreted.
            IncompatibleVersionError: If ``candidate`` comes from another
                scheme version; digests are not compared.
            SignatureMismatchError: If the entries differ.
        """

        if self._trace is not None:
            self._trace.fingerprint_expected = candidate
            self._trace.fingerprint_computed = self._format.render(self._digest)
        try:
            self._format.verify(candidate, self._digest)
        except FingerprintError as exc:
            logger.debug("Fingerprint check failed: %s", exc, extra={"kind": exc.kind})
            if self._trace is not None:
                self._trace.check_outcome = exc.kind
            raise
        if self._trace is not None:
            self._trace.check_outcome = "match"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._format.render(self._digest)!r})"
