"""podfingerprint - order-independent fingerprints of the workloads on a node."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "Fingerprint",
    "FingerprintError",
    "IncompatibleVersionError",
    "MalformedSignatureError",
    "PodIdentifier",
    "PREFIX",
    "SignatureFormat",
    "SignatureMismatchError",
    "TraceStatus",
    "VERSION",
    "is_version_compatible",
]

if TYPE_CHECKING:
    from .errors import (
        FingerprintError,
        IncompatibleVersionError,
        MalformedSignatureError,
        SignatureMismatchError,
    )
    from .fingerprint import Fingerprint, PodIdentifier
    from .signature import PREFIX, VERSION, SignatureFormat, is_version_compatible
    from .status import TraceStatus


def __getattr__(name: str) -> Any:
    """Lazily import submodules so the codec loads without pydantic."""

    module_map = {
        "Fingerprint": "fingerprint",
        "PodIdentifier": "fingerprint",
        "FingerprintError": "errors",
        "IncompatibleVersionError": "errors",
        "MalformedSignatureError": "errors",
        "SignatureMismatchError": "errors",
        "PREFIX": "signature",
        "VERSION": "signature",
        "SignatureFormat": "signature",
        "is_version_compatible": "signature",
        "TraceStatus": "status",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
