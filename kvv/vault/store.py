"""
Secret store protocols.

A SecretBackend holds the process-wide credential and opens one SecretStore
per vault URL. Stores expose the paged listings as async generators that
yield one list per server page; a page failure raises from the generator.

Error contract for implementations:
- unknown secret name → SecretNotFound
- value unreadable    → ValueUnavailable(reason)
- anything else       → any exception (the adapter treats it as VaultUnavailable)
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Protocol

from kvv.vault.models import SecretSummary, SecretVersion


class SecretStore(Protocol):
    """Capability surface of one remote vault."""

    vault_url: str

    def list_secret_pages(self) -> AsyncGenerator[list[SecretSummary], None]: ...

    def list_version_pages(self, name: str) -> AsyncGenerator[list[SecretVersion], None]: ...

    async def get_secret_value(self, name: str, version: str) -> str: ...

    async def close(self) -> None: ...


class SecretBackend(Protocol):
    """Factory for SecretStores sharing one credential."""

    def open(self, vault_url: str) -> SecretStore:
        """Bind a store to vault_url. Must not perform I/O."""
        ...

    async def verify_credential(self) -> None:
        """Raise CredentialUnavailable if no token can be acquired."""
        ...

    async def close(self) -> None: ...
