"""Pytest configuration and fixtures."""

from __future__ import annotations

import json
import os
import random
import string
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

TESTDATA = Path(__file__).resolve().parent / "testdata"


@dataclass(frozen=True)
class PodIdent:
    """Workload identity exposing the accessor interface."""

    namespace: str
    name: str

    def get_namespace(self) -> str:
        return self.namespace

    def get_name(self) -> str:
        return self.name


def random_pods(
    count: int,
    *,
    seed: int = 0,
    namespace_len: int = 52,
    name_len: int = 72,
) -> list[PodIdent]:
    """Return ``count`` pods with random ASCII identities."""

    rng = random.Random(seed)
    letters = string.ascii_letters
    return [
        PodIdent(
            namespace="".join(rng.choices(letters, k=namespace_len)),
            name="".join(rng.choices(letters, k=name_len)),
        )
        for _ in range(count)
    ]


@pytest.fixture(scope="session")
def pods() -> list[PodIdent]:
    """Pods of a realistic node, loaded from ``testdata/pods.json``."""

    payload = json.loads((TESTDATA / "pods.json").read_text(encoding="utf-8"))
    return [PodIdent(namespace=item["namespace"], name=item["name"]) for item in payload]


@pytest.fixture
def shuffled_pods(pods: list[PodIdent]) -> list[PodIdent]:
    """The same pods as :func:`pods`, in a different order."""

    local = list(pods)
    random.Random(1234).shuffle(local)
    assert local != pods
    return local
