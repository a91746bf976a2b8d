"""Command-line utilities for podfingerprint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .errors import FingerprintError
from .fingerprint import Fingerprint
from .logging_pipeline import configure_from_settings, shutdown_listeners
from .settings import get_settings
from .status import TraceStatus

logger = logging.getLogger(__name__)


def _read_stdin() -> str | None:
    """Read the JSON payload from stdin if available."""
    try:
        if sys.stdin and not sys.stdin.isatty():
            return sys.stdin.read()
    except OSError as e:
        print(f"Error reading stdin: {e}", file=sys.stderr)
    return None


def _load_json(path: str | None, stdin_payload: str | None) -> object:
    """Load JSON data from file or stdin."""
    if path:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    if stdin_payload:
        return json.loads(stdin_payload)
    raise ValueError("No input provided. Use --input or pipe JSON via stdin.")


def _iter_entries(data: object) -> list[tuple[str, str]]:
    """Extract (namespace, name) pairs from a pod list payload.

    Accepts either a JSON array of ``{"namespace", "name"}`` objects or a
    Kubernetes ``PodList``-shaped object whose ``items`` carry ``metadata``.
    """

    if isinstance(data, dict):
        items = data.get("items")
        if not isinstance(items, list):
            raise ValueError("Input object must carry an 'items' array.")
        data = [item.get("metadata") if isinstance(item, dict) else item for item in items]
    if not isinstance(data, list):
        raise ValueError("Input JSON must be an array of pods or a pod list object.")

    entries: list[tuple[str, str]] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ValueError(f"Pod #{index} is not an object.")
        namespace = item.get("namespace", "")
        name = item.get("name")
        if not isinstance(namespace, str) or not isinstance(name, str):
            raise ValueError(f"Pod #{index} must have string 'namespace' and 'name'.")
        entries.append((namespace, name))
    return entries


def main(argv: list[str] | None = None) -> int:
    """Compute or verify the fingerprint of a pod list."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="podfingerprint",
        description="Compute or verify the fingerprint of a pod list.",
    )
    parser.add_argument(
        "--input",
        "-i",
        help="Path to a JSON pod list. If omitted, reads from stdin.",
    )
    parser.add_argument(
        "--check",
        "-c",
        metavar="SIGNATURE",
        help="Verify the pod list against a previously published signature.",
    )
    parser.add_argument(
        "--node-name",
        "-n",
        default=settings.node_name,
        help="Node name recorded in the trace status.",
    )
    parser.add_argument(
        "--trace",
        "-t",
        action="store_true",
        default=settings.trace,
        help="Include the trace status in the output.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Quiet mode: suppress output, just return exit code.",
    )

    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    listener = configure_from_settings(settings)
    try:
        entries = _iter_entries(_load_json(args.input, _read_stdin()))

        status = TraceStatus() if args.trace else None
        if status is not None:
            status.start(args.node_name or "")
        fp = Fingerprint(len(entries), trace=status)
        for namespace, name in entries:
            fp.add(namespace, name)

        result: dict[str, object] = {"signature": fp.sign(), "count": len(entries)}
        exit_code = 0
        if args.check is not None:
            try:
                fp.check(args.check)
            except FingerprintError as exc:
                logger.info("Fingerprint drift detected: %s", exc)
                result.update(valid=False, error=exc.kind)
                exit_code = 1
            else:
                result.update(valid=True, error=None)
        if status is not None:
            result["trace"] = status.model_dump()

        if not args.quiet:
            print(json.dumps(result, separators=(",", ":")))
        return exit_code

    except Exception as exc:
        if not args.quiet:
            print(str(exc), file=sys.stderr)
        return 1
    finally:
        if listener is not None:
            shutdown_listeners([listener])


if __name__ == "__main__":
    raise SystemExit(main())
