"""
Secret Catalog — the in-memory snapshot of the current vault.

Holds at most one secrets list (for the open vault) and one versions list
(for one secret). Loads are guarded by generation counters: a load that
finishes after a newer load or clear started returns None and leaves the
snapshot untouched.
"""

from __future__ import annotations

import logging

from kvv.vault.adapter import VaultAdapter
from kvv.vault.models import FetchedValue, SecretSummary, SecretVersion

logger = logging.getLogger(__name__)


def sort_newest_first(versions: list[SecretVersion]) -> list[SecretVersion]:
    """Return a copy sorted by descending creation time.

    Versions without a creation time keep their server order at the end.
    Equal timestamps keep server order too (sorted() is stable, also with reverse=True).
    """
    dated = [v for v in versions if v.created is not None]
    undated = [v for v in versions if v.created is None]
    return sorted(dated, key=lambda v: v.created, reverse=True) + undated  # type: ignore[arg-type,return-value]


class SecretCatalog:
    """Owns the secrets and versions lists; reads through to the adapter for values."""

    def __init__(self, adapter: VaultAdapter) -> None:
        self._adapter = adapter
        self.secrets: list[SecretSummary] = []
        self.versions: list[SecretVersion] = []
        self.vault: str | None = None  # vault the secrets list belongs to
        self.versions_of: str | None = None  # secret the versions list belongs to
        self._secrets_generation = 0
        self._versions_generation = 0

    def clear(self) -> None:
        self._secrets_generation += 1
        self.secrets = []
        self.vault = None
        self.clear_versions()

    def clear_versions(self) -> None:
        self._versions_generation += 1
        self.versions = []
        self.versions_of = None

    async def load_secrets(self) -> list[SecretSummary] | None:
        """Replace the secrets list from the bound vault; clears versions.

        Raises VaultUnavailable (lists stay empty). Returns None if superseded.
        """
        self.clear()
        generation = self._secrets_generation
        vault = self._adapter.vault_url
        secrets = await self._adapter.fetch_all_secrets()
        if generation != self._secrets_generation:
            logger.debug("Discarding stale secrets list for %s", vault)
            return None
        self.secrets = secrets
        self.vault = vault
        return self.secrets

    async def load_versions(self, name: str) -> list[SecretVersion] | None:
        """Replace the versions list with name's versions, newest first.

        Raises SecretNotFound or VaultUnavailable (list stays empty).
        Returns None if superseded.
        """
        self.clear_versions()
        generation = self._versions_generation
        versions = await self._adapter.fetch_all_versions(name)
        if generation != self._versions_generation:
            logger.debug("Discarding stale versions list for %s", name)
            return None
        self.versions = sort_newest_first(versions)
        self.versions_of = name
        return self.versions

    async def value(self, name: str, version_id: str) -> FetchedValue:
        return await self._adapter.fetch_value(name, version_id)

    def find_secret(self, name: str) -> SecretSummary | None:
        return next((s for s in self.secrets if s.name == name), None)

    def find_version(self, version_id: str) -> SecretVersion | None:
        return next((v for v in self.versions if v.id == version_id), None)
