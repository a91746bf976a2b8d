"""Trace status recording how a fingerprint was computed."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["NamespacedName", "TraceStatus"]


class NamespacedName(BaseModel):
    """Identity of one workload that contributed to a fingerprint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


class TraceStatus(BaseModel):
    """Debugging record of the inputs and outcome of a fingerprint computation.

    A :class:`~podfingerprint.fingerprint.Fingerprint` created with a trace
    status appends every entry it receives and stores the signatures it
    renders or checks. The record has no influence on the digest itself.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    node_name: str = Field(
        default="",
        description="Node whose workloads are being fingerprinted.",
    )
    fingerprint_expected: str = Field(
        default="",
        description="Signature supplied to the last check, if any.",
    )
    fingerprint_computed: str = Field(
        default="",
        description="Signature computed from the recorded entries.",
    )
    check_outcome: str = Field(
        default="",
        description="Outcome of the last check: 'match' or an error kind.",
    )
    pods: list[NamespacedName] = Field(
        default_factory=list,
        description="Entries in the order they were added.",
    )

    def start(self, node_name: str) -> None:
        """Reset the record before fingerprinting ``node_name``."""

        self.node_name = node_name
        self.fingerprint_expected = ""
        self.fingerprint_computed = ""
        self.check_outcome = ""
        self.pods = []

    def add(self, namespace: str, name: str) -> None:
        self.pods.append(NamespacedName(namespace=namespace, name=name))

    def report(self) -> str:
        """Return a human readable dump of the record."""

        lines = [
            f"> processing node {self.node_name!r}",
            f"> processing {len(self.pods)} pods",
        ]
        lines.extend(f"+ {pod}" for pod in self.pods)
        lines.append(f"= {self.fingerprint_computed}")
        if self.fingerprint_expected:
            lines.append(f"V {self.fingerprint_expected}")
        if self.check_outcome:
            lines.append(f"? {self.check_outcome}")
        return "\n".join(lines) + "\n"
