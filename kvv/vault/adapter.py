"""
Vault Client Adapter — drains the store's pagers into plain lists.

List operations are all-or-nothing: any page failure (or a page that takes
longer than page_timeout) fails the whole call with VaultUnavailable, and no
partial list escapes. Value fetches never raise; the failure reason is
returned in a FetchedValue so the UI can show it in place of the value.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing
from typing import TypeVar

from kvv.errors import SecretNotFound, ValueUnavailable, VaultUnavailable
from kvv.vault.models import FetchedValue, SecretSummary, SecretVersion
from kvv.vault.store import SecretBackend, SecretStore

logger = logging.getLogger(__name__)

DEFAULT_PAGE_TIMEOUT = 30.0

T = TypeVar("T")


class VaultAdapter:
    """Binds a SecretBackend to one vault at a time."""

    def __init__(
        self, backend: SecretBackend, *, page_timeout: float = DEFAULT_PAGE_TIMEOUT
    ) -> None:
        self.backend = backend
        self.page_timeout = page_timeout
        self._store: SecretStore | None = None

    @property
    def vault_url(self) -> str | None:
        return self._store.vault_url if self._store else None

    async def check_credential(self) -> None:
        """Raises CredentialUnavailable when the ambient credential cannot issue a token."""
        await self.backend.verify_credential()

    async def open_vault(self, vault_url: str) -> None:
        """Bind to vault_url, replacing (and closing) any previous binding."""
        previous, self._store = self._store, None
        if previous is not None:
            try:
                await previous.close()
            except Exception as e:
                logger.warning("Closing vault %s failed: %r", previous.vault_url, e)
        try:
            self._store = self.backend.open(vault_url)
        except Exception as e:
            logger.warning("Cannot open vault %s: %r", vault_url, e)
            raise VaultUnavailable(f"cannot open vault {vault_url}: {_describe(e)}") from e

    def _require_store(self) -> SecretStore:
        if self._store is None:
            raise VaultUnavailable("no vault is open")
        return self._store

    async def _drain(self, pages: AsyncGenerator[list[T], None]) -> list[T]:
        items: list[T] = []
        async with aclosing(pages):
            while True:
                try:
                    async with asyncio.timeout(self.page_timeout):
                        page = await anext(pages)
                except StopAsyncIteration:
                    return items
                items.extend(page)

    async def fetch_all_secrets(self) -> list[SecretSummary]:
        store = self._require_store()
        try:
            secrets = await self._drain(store.list_secret_pages())
        except Exception as e:
            logger.warning("Listing secrets in %s failed: %r", store.vault_url, e)
            raise VaultUnavailable(f"failed to get paged secrets: {_describe(e)}") from e
        logger.info("Loaded %d secrets from %s", len(secrets), store.vault_url)
        return secrets

    async def fetch_all_versions(self, name: str) -> list[SecretVersion]:
        store = self._require_store()
        try:
            versions = await self._drain(store.list_version_pages(name))
        except SecretNotFound:
            logger.warning("Secret %s not found in %s", name, store.vault_url)
            raise
        except Exception as e:
            logger.warning("Listing versions of %s failed: %r", name, e)
            raise VaultUnavailable(f"failed to get paged secret versions: {_describe(e)}") from e
        logger.info("Loaded %d versions of %s", len(versions), name)
        return versions

    async def fetch_value(self, name: str, version_id: str) -> FetchedValue:
        try:
            store = self._require_store()
            async with asyncio.timeout(self.page_timeout):
                text = await store.get_secret_value(name, version_id)
        except ValueUnavailable as e:
            logger.info("Value of %s/%s unavailable: %s", name, version_id, e.reason)
            return FetchedValue(reason=e.reason)
        except Exception as e:
            logger.warning("Fetching %s/%s failed: %r", name, version_id, e)
            return FetchedValue(reason=_describe(e))
        return FetchedValue(text=text)

    async def close(self) -> None:
        if self._store is not None:
            await self._store.close()
            self._store = None
        await self.backend.close()


def _describe(exc: BaseException) -> str:
    # TimeoutError and friends stringify to ""
    return str(exc) or type(exc).__name__
