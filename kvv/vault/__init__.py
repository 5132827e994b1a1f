"""
kvv vault layer — the secret-store capability surface and its adapter.

Public API:
    VaultAdapter(backend)            → bind/list/fetch against one vault at a time
    adapter.open_vault(url)          → rebind to another vault (no I/O)
    adapter.fetch_all_secrets()      → every secret name, server page order
    adapter.fetch_all_versions(name) → every version of one secret
    adapter.fetch_value(name, id)    → FetchedValue (never raises)
"""

from __future__ import annotations

from kvv.vault.adapter import DEFAULT_PAGE_TIMEOUT, VaultAdapter
from kvv.vault.models import FetchedValue, SecretSummary, SecretVersion
from kvv.vault.store import SecretBackend, SecretStore

__all__ = [
    "DEFAULT_PAGE_TIMEOUT",
    "FetchedValue",
    "SecretBackend",
    "SecretStore",
    "SecretSummary",
    "SecretVersion",
    "VaultAdapter",
]
