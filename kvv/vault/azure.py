"""
Azure Key Vault backend.

Uses the async clients from azure-identity and azure-keyvault-secrets so that
paging happens on the Textual event loop without blocking rendering.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator

from azure.core.exceptions import (
    ClientAuthenticationError,
    HttpResponseError,
    ResourceNotFoundError,
)
from azure.identity.aio import DefaultAzureCredential
from azure.keyvault.secrets.aio import SecretClient

from kvv.errors import CredentialUnavailable, SecretNotFound, ValueUnavailable
from kvv.vault.models import SecretSummary, SecretVersion

logger = logging.getLogger(__name__)

KEY_VAULT_SCOPE = "https://vault.azure.net/.default"


def create_credential() -> DefaultAzureCredential:
    """Build the ambient credential chain (environment, workload identity, developer sign-in)."""
    try:
        return DefaultAzureCredential()
    except Exception as e:
        raise CredentialUnavailable(f"failed to obtain a credential: {e}") from e


class AzureSecretStore:
    """SecretStore over one Key Vault."""

    def __init__(self, vault_url: str, credential: DefaultAzureCredential) -> None:
        self.vault_url = vault_url
        self._client = SecretClient(vault_url=vault_url, credential=credential)

    async def list_secret_pages(self) -> AsyncGenerator[list[SecretSummary], None]:
        pages = self._client.list_properties_of_secrets().by_page()
        async for page in pages:
            yield [SecretSummary(name=item.name) async for item in page if item.name]

    async def list_version_pages(self, name: str) -> AsyncGenerator[list[SecretVersion], None]:
        pages = self._client.list_properties_of_secret_versions(name).by_page()
        try:
            async for page in pages:
                yield [
                    SecretVersion(id=item.version, created=item.created_on)
                    async for item in page
                    if item.version
                ]
        except ResourceNotFoundError as e:
            raise SecretNotFound(name) from e

    async def get_secret_value(self, name: str, version: str) -> str:
        try:
            secret = await self._client.get_secret(name, version)
        except ResourceNotFoundError as e:
            raise SecretNotFound(name) from e
        except HttpResponseError as e:
            raise ValueUnavailable(e.message or str(e)) from e
        return secret.value or ""

    async def close(self) -> None:
        await self._client.close()


class AzureBackend:
    """SecretBackend sharing one DefaultAzureCredential across vaults."""

    def __init__(self, credential: DefaultAzureCredential | None = None) -> None:
        self.credential = credential or create_credential()

    def open(self, vault_url: str) -> AzureSecretStore:
        logger.info("Opening vault %s", vault_url)
        return AzureSecretStore(vault_url, self.credential)

    async def verify_credential(self) -> None:
        try:
            await self.credential.get_token(KEY_VAULT_SCOPE)
        except ClientAuthenticationError as e:
            raise CredentialUnavailable(f"failed to obtain a credential: {e.message or e}") from e

    async def close(self) -> None:
        await self.credential.close()
