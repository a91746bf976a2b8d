"""Tests for fingerprint trace status."""

from __future__ import annotations

import json

import pytest

from conftest import PodIdent
from podfingerprint.errors import IncompatibleVersionError, SignatureMismatchError
from podfingerprint.fingerprint import Fingerprint
from podfingerprint.status import NamespacedName, TraceStatus


def test_trace_records_pods_in_order(pods: list[PodIdent]) -> None:
    status = TraceStatus()
    status.start("node-a1")
    fp = Fingerprint(len(pods), trace=status)
    fp.add_pods(pods)

    assert status.node_name == "node-a1"
    assert [str(pod) for pod in status.pods] == [
        f"{pod.namespace}/{pod.name}" for pod in pods
    ]


def test_trace_does_not_change_digest(pods: list[PodIdent]) -> None:
    plain = Fingerprint()
    traced = Fingerprint(trace=TraceStatus())
    plain.add_pods(pods)
    traced.add_pods(pods)
    assert plain.sign() == traced.sign()


def test_trace_records_sign_and_check() -> None:
    status = TraceStatus()
    fp = Fingerprint(trace=status)
    fp.add("ns-a", "pod-1")

    signature = fp.sign()
    assert status.fingerprint_computed == signature

    fp.check(signature)
    assert status.fingerprint_expected == signature
    assert status.check_outcome == "match"


@pytest.mark.parametrize(
    ("candidate", "error", "outcome"),
    [
        ("pfp0v0010000000000000000", SignatureMismatchError, "signature-mismatch"),
        ("pfp0v0020000000000000000", IncompatibleVersionError, "incompatible-version"),
    ],
)
def test_trace_records_failed_check(
    candidate: str, error: type[Exception], outcome: str
) -> None:
    status = TraceStatus()
    fp = Fingerprint(trace=status)
    fp.add("ns-a", "pod-1")
    with pytest.raises(error):
        fp.check(candidate)
    assert status.fingerprint_expected == candidate
    assert status.fingerprint_computed == fp.sign()
    assert status.check_outcome == outcome


def test_trace_decodes_bytes_identities() -> None:
    status = TraceStatus()
    fp = Fingerprint(trace=status)
    fp.add(b"ns", b"pod-\xff")
    assert status.pods == [NamespacedName(namespace="ns", name="pod-\\xff")]


def test_start_resets_status() -> None:
    status = TraceStatus()
    fp = Fingerprint(trace=status)
    fp.add("ns", "pod")
    fp.check(fp.sign())

    status.start("node-b")
    assert status.pods == []
    assert status.fingerprint_computed == ""
    assert status.fingerprint_expected == ""
    assert status.check_outcome == ""
    assert status.node_name == "node-b"


def test_merge_carries_traced_pods() -> None:
    left_status, right_status = TraceStatus(), TraceStatus()
    left = Fingerprint(trace=left_status)
    right = Fingerprint(trace=right_status)
    left.add("ns", "a")
    right.add("ns", "b")
    left.merge(right)
    assert [pod.name for pod in left_status.pods] == ["a", "b"]


def test_report_lists_everything() -> None:
    status = TraceStatus()
    status.start("node-a1")
    fp = Fingerprint(trace=status)
    fp.add("ns-a", "pod-1")
    fp.add("ns-b", "pod-2")
    signature = fp.sign()
    fp.check(signature)

    report = status.report()
    assert report.splitlines() == [
        "> processing node 'node-a1'",
        "> processing 2 pods",
        "+ ns-a/pod-1",
        "+ ns-b/pod-2",
        f"= {signature}",
        f"V {signature}",
        "? match",
    ]


def test_status_serialises_to_json() -> None:
    status = TraceStatus()
    status.start("node-a1")
    fp = Fingerprint(trace=status)
    fp.add("ns-a", "pod-1")
    fp.sign()

    payload = json.loads(status.model_dump_json())
    assert payload["node_name"] == "node-a1"
    assert payload["pods"] == [{"namespace": "ns-a", "name": "pod-1"}]
    assert TraceStatus.model_validate(payload) == status
