"""
Root-level shared test fixtures.

Inherited by every suite: an in-memory backend seeded with two vaults, and
the adapter and session built on top of it.

Vault https://v1.example:
    A — x (newer), y (older)
    B — p (no created), q (older), r (newer)   server order p, q, r
    C — no versions
    D — x is denied ("forbidden"), y readable
Vault https://v2.example:
    E — e1
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from kvv.session import Session
from kvv.vault.adapter import VaultAdapter
from kvv.vault.memory import MemoryBackend

V1 = "https://v1.example"
V2 = "https://v2.example"

T1 = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)
T2 = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove kvv env vars that leak between tests."""
    for key in ["KVV_CONFIG", "KVV_PAGE_TIMEOUT", "KVV_LOG_FILE", "KVV_LOG_LEVEL"]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def backend() -> MemoryBackend:
    backend = MemoryBackend(page_size=2)
    backend.add_secret(V1, "A", [("x", T2, "alpha-x"), ("y", T1, "alpha-y")])
    backend.add_secret(V1, "B", [("p", None, "bravo-p"), ("q", T1, "bravo-q"), ("r", T2, "bravo-r")])
    backend.add_secret(V1, "C", [])
    backend.add_secret(V1, "D", [("x", T2, "delta-x"), ("y", T1, "delta-y")])
    backend.deny(V1, "D", "x", "forbidden")
    backend.add_secret(V2, "E", [("e1", T1, "echo")])
    return backend


@pytest.fixture
def adapter(backend) -> VaultAdapter:
    return VaultAdapter(backend, page_timeout=1.0)


@pytest.fixture
def session(adapter) -> Session:
    return Session(adapter, [V1, V2])
