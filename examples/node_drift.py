#!/usr/bin/env python3
"""
Node Drift Example

This example demonstrates:
- Fingerprinting the pods placed on a node
- Publishing the signature
- Detecting drift after the pod set changes
- Combining fingerprints built by concurrent producers
"""

from concurrent.futures import ThreadPoolExecutor

from podfingerprint import Fingerprint, FingerprintError, TraceStatus


def observe(pods, trace=None):
    """Fingerprint a list of (namespace, name) pairs."""
    fp = Fingerprint(len(pods), trace=trace)
    for namespace, name in pods:
        fp.add(namespace, name)
    return fp


def main():
    pods = [
        ("kube-system", "kube-proxy-5jq8w"),
        ("monitoring", "node-exporter-2rbvn"),
        ("default", "nginx-deployment-66b6c48dd5-4fjzr"),
        ("payments", "ledger-worker-0"),
    ]

    published = observe(pods).sign()
    print(f"Published signature: {published}")

    # Same pods, different enumeration order
    observe(list(reversed(pods))).check(published)
    print("Reordered observation matches")

    # One pod rescheduled elsewhere
    status = TraceStatus()
    status.start("node-a1")
    try:
        observe(pods[1:], trace=status).check(published)
    except FingerprintError as exc:
        print(f"Drift detected ({exc.kind})")
        print(status.report())

    # Independent producers, merged afterwards
    halves = [pods[:2], pods[2:]]
    with ThreadPoolExecutor(max_workers=2) as pool:
        partials = list(pool.map(observe, halves))
    merged = Fingerprint()
    for partial in partials:
        merged.merge(partial)
    print(f"Merged signature matches: {merged.sign() == published}")


if __name__ == "__main__":
    main()
