"""Entry hashing for pod fingerprints.

Each (namespace, name) pair maps to an unsigned 64-bit xxHash64 value. The
namespace is prefixed with its byte length so the field boundary is part of
the hashed input: ``("ab", "c")`` and ``("a", "bc")`` never share an input.
"""

from __future__ import annotations

import struct
from typing import Final

import xxhash

__all__ = ["DIGEST_BITS", "DIGEST_MASK", "DIGEST_SIZE", "hash_entry", "to_bytes"]

DIGEST_SIZE: Final[int] = 8
DIGEST_BITS: Final[int] = DIGEST_SIZE * 8
DIGEST_MASK: Final[int] = (1 << DIGEST_BITS) - 1

_LENGTH_PREFIX: Final[struct.Struct] = struct.Struct("<Q")


def to_bytes(value: str | bytes) -> bytes:
    """Return the byte form of an identity field.

    Args:
        value: Namespace or name, either text (UTF-8 encoded) or raw bytes.

    Returns:
        The bytes fed to the hash function.

    Raises:
        TypeError: If ``value`` is neither ``str`` nor ``bytes``.
    """

    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"identity fields must be str or bytes, not {type(value).__name__}")


def hash_entry(namespace: str | bytes, name: str | bytes) -> int:
    """Hash one workload identity to an unsigned 64-bit integer.

    Args:
        namespace: Namespace of the workload. May be empty.
        name: Name of the workload. May be empty.

    Returns:
        Deterministic hash in ``[0, 2**64)``, stable across processes and runs.
    """

    ns = to_bytes(namespace)
    hasher = xxhash.xxh64(seed=0)
    hasher.update(_LENGTH_PREFIX.pack(len(ns)))
    hasher.update(ns)
    hasher.update(to_bytes(name))
    return hasher.intdigest()
