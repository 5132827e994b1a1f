"""
In-memory secret backend.

Serves the same paged surface as the Azure backend from plain Python data,
with hooks for the failures a real vault produces: unreachable vaults,
failing pages, denied values and missing credentials. Every store call is
recorded in `calls` so tests can assert on the I/O that was (not) issued.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from datetime import datetime

from kvv.errors import CredentialUnavailable, SecretNotFound, ValueUnavailable
from kvv.vault.models import SecretSummary, SecretVersion


@dataclass
class MemorySecret:
    """One secret: versions in server order plus their values."""

    versions: list[SecretVersion] = field(default_factory=list)
    values: dict[str, str] = field(default_factory=dict, repr=False)
    denied: dict[str, str] = field(default_factory=dict)


class MemoryStore:
    """SecretStore over one vault held by a MemoryBackend."""

    def __init__(self, backend: MemoryBackend, vault_url: str) -> None:
        self.backend = backend
        self.vault_url = vault_url
        self.closed = False

    def _vault(self) -> dict[str, MemorySecret]:
        error = self.backend.unreachable.get(self.vault_url)
        if error is not None:
            raise error
        if self.vault_url not in self.backend.vaults:
            raise ConnectionError(f"no such vault: {self.vault_url}")
        return self.backend.vaults[self.vault_url]

    async def _page_boundary(self, page_number: int) -> None:
        if self.backend.delay:
            await asyncio.sleep(self.backend.delay)
        error = self.backend.page_failures.get((self.vault_url, page_number))
        if error is not None:
            raise error

    async def list_secret_pages(self) -> AsyncGenerator[list[SecretSummary], None]:
        self.backend.calls.append(("list_secrets", self.vault_url))
        names = list(self._vault())
        size = self.backend.page_size
        for number, start in enumerate(range(0, len(names), size)):
            await self._page_boundary(number)
            yield [SecretSummary(name=n) for n in names[start : start + size]]

    async def list_version_pages(self, name: str) -> AsyncGenerator[list[SecretVersion], None]:
        self.backend.calls.append(("list_versions", self.vault_url, name))
        secret = self._vault().get(name)
        if secret is None:
            raise SecretNotFound(name)
        size = self.backend.page_size
        for number, start in enumerate(range(0, len(secret.versions), size)):
            await self._page_boundary(number)
            yield list(secret.versions[start : start + size])

    async def get_secret_value(self, name: str, version: str) -> str:
        self.backend.calls.append(("get_value", self.vault_url, name, version))
        if self.backend.delay:
            await asyncio.sleep(self.backend.delay)
        secret = self._vault().get(name)
        if secret is None:
            raise SecretNotFound(name)
        if version in secret.denied:
            raise ValueUnavailable(secret.denied[version])
        if version not in secret.values:
            raise ValueUnavailable(f"version {version} not found")
        return secret.values[version]

    async def close(self) -> None:
        self.closed = True


class MemoryBackend:
    """SecretBackend over a dict of vault URL → secret name → MemorySecret."""

    def __init__(self, *, page_size: int = 2, delay: float = 0.0) -> None:
        self.vaults: dict[str, dict[str, MemorySecret]] = {}
        self.page_size = page_size
        self.delay = delay
        self.calls: list[tuple[str, ...]] = []
        self.opened: list[MemoryStore] = []
        self.unreachable: dict[str, Exception] = {}
        self.page_failures: dict[tuple[str, int], Exception] = {}
        self.credential_error: str | None = None
        self.closed = False

    def add_vault(self, vault_url: str) -> None:
        self.vaults.setdefault(vault_url, {})

    def add_secret(
        self,
        vault_url: str,
        name: str,
        versions: list[tuple[str, datetime | None, str]] | None = None,
    ) -> MemorySecret:
        """Add a secret whose versions are (id, created, value) in server order."""
        secret = MemorySecret()
        for version_id, created, value in versions or []:
            secret.versions.append(SecretVersion(id=version_id, created=created))
            secret.values[version_id] = value
        self.vaults.setdefault(vault_url, {})[name] = secret
        return secret

    def deny(self, vault_url: str, name: str, version_id: str, reason: str) -> None:
        self.vaults[vault_url][name].denied[version_id] = reason

    def open(self, vault_url: str) -> MemoryStore:
        store = MemoryStore(self, vault_url)
        self.opened.append(store)
        return store

    async def verify_credential(self) -> None:
        if self.credential_error is not None:
            raise CredentialUnavailable(f"failed to obtain a credential: {self.credential_error}")

    async def close(self) -> None:
        self.closed = True
