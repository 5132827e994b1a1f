"""
Session — the browsing state machine.

Owns the adapter, the catalog, the current Selection and the value on
display. Each intent clears the lower selection levels before loading
anything, and every await is followed by an identity check so results that
arrive for a selection the user has already left are dropped.

`on_change` is called after every state change, including the clearing step
that precedes a load, so a view never shows data for a selection that is no
longer current.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from kvv.catalog import SecretCatalog
from kvv.errors import SecretNotFound, VaultUnavailable
from kvv.selection import Selection
from kvv.vault.adapter import VaultAdapter
from kvv.vault.models import FetchedValue

logger = logging.getLogger(__name__)


class Session:
    """State for one kvv run."""

    def __init__(self, adapter: VaultAdapter, endpoints: list[str]) -> None:
        self.adapter = adapter
        self.endpoints = list(endpoints)
        self.catalog = SecretCatalog(adapter)
        self.selection = Selection()
        self.value: FetchedValue | None = None
        self.error: str | None = None  # last interactive failure, for the UI to surface
        self.on_change: Callable[[], None] | None = None

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    async def start(self) -> None:
        """Verify the credential, then open the first endpoint.

        CredentialUnavailable propagates; it is the only fatal error.
        """
        await self.adapter.check_credential()
        if self.endpoints:
            await self.select_vault(self.endpoints[0])

    async def select_vault(self, vault: str) -> None:
        self.selection = self.selection.with_vault(vault)
        self.value = None
        self.error = None
        self.catalog.clear()
        self._changed()
        try:
            await self.adapter.open_vault(vault)
            await self.catalog.load_secrets()
        except VaultUnavailable as e:
            if self.selection.vault == vault:
                self.error = str(e)
        self._changed()

    async def select_secret(self, name: str) -> None:
        """Select name, load its versions and auto-select the newest one.

        No-op when no vault is open or name is not in the current list.
        """
        if self.selection.vault is None or self.catalog.find_secret(name) is None:
            return
        self.selection = self.selection.with_secret(name)
        self.value = None
        self.error = None
        self.catalog.clear_versions()
        self._changed()
        try:
            versions = await self.catalog.load_versions(name)
        except (SecretNotFound, VaultUnavailable) as e:
            if self.selection.secret == name:
                self.error = str(e)
                self._changed()
            return
        if not versions or self.selection.secret != name:
            self._changed()
            return
        await self.select_version(versions[0].id)

    async def select_version(self, version_id: str) -> None:
        name = self.selection.secret
        if name is None or self.catalog.find_version(version_id) is None:
            return
        self.selection = self.selection.with_version(version_id)
        self.value = None
        self._changed()
        fetched = await self.catalog.value(name, version_id)
        if self.selection.secret != name or self.selection.version != version_id:
            logger.debug("Discarding stale value for %s/%s", name, version_id)
            return
        self.value = fetched
        self._changed()

    def dismiss_versions(self) -> None:
        if self.selection.secret is None:
            return
        self.selection = self.selection.without_version()
        self.catalog.clear_versions()
        self.value = None
        self._changed()

    def copyable_text(self) -> str | None:
        """Plaintext of the displayed value, or None if nothing copyable is shown."""
        if self.value is None or not self.value.text:
            return None
        return self.value.text

    async def close(self) -> None:
        await self.adapter.close()
