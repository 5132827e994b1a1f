"""Tests for VaultAdapter — paging, failure mapping and store lifecycle."""

from __future__ import annotations

import pytest

from kvv.errors import CredentialUnavailable, SecretNotFound, VaultUnavailable
from kvv.vault.adapter import VaultAdapter
from kvv.vault.memory import MemoryBackend

V1 = "https://v1.example"
V2 = "https://v2.example"


class TestFetchAllSecrets:
    @pytest.mark.asyncio
    async def test_drains_every_page_in_order(self, backend, adapter):
        await adapter.open_vault(V1)
        secrets = await adapter.fetch_all_secrets()
        assert [s.name for s in secrets] == ["A", "B", "C", "D"]

    @pytest.mark.asyncio
    async def test_single_page(self):
        backend = MemoryBackend(page_size=10)
        for name in ["one", "two", "three"]:
            backend.add_secret(V1, name)
        adapter = VaultAdapter(backend)
        await adapter.open_vault(V1)
        assert [s.name for s in await adapter.fetch_all_secrets()] == ["one", "two", "three"]

    @pytest.mark.asyncio
    async def test_empty_vault(self, backend, adapter):
        backend.add_vault("https://empty.example")
        await adapter.open_vault("https://empty.example")
        assert await adapter.fetch_all_secrets() == []

    @pytest.mark.asyncio
    async def test_later_page_failure_fails_whole_list(self, backend, adapter):
        """Page 0 succeeds, page 1 fails: nothing partial is returned."""
        backend.page_failures[(V1, 1)] = ConnectionError("reset by peer")
        await adapter.open_vault(V1)
        with pytest.raises(VaultUnavailable, match="failed to get paged secrets: reset by peer"):
            await adapter.fetch_all_secrets()

    @pytest.mark.asyncio
    async def test_slow_page_times_out(self, backend):
        backend.delay = 0.2
        adapter = VaultAdapter(backend, page_timeout=0.01)
        await adapter.open_vault(V1)
        with pytest.raises(VaultUnavailable, match="TimeoutError"):
            await adapter.fetch_all_secrets()

    @pytest.mark.asyncio
    async def test_no_vault_open(self, adapter):
        with pytest.raises(VaultUnavailable, match="no vault is open"):
            await adapter.fetch_all_secrets()


class TestFetchAllVersions:
    @pytest.mark.asyncio
    async def test_server_order_across_pages(self, adapter):
        await adapter.open_vault(V1)
        versions = await adapter.fetch_all_versions("B")
        assert [v.id for v in versions] == ["p", "q", "r"]

    @pytest.mark.asyncio
    async def test_zero_versions(self, adapter):
        await adapter.open_vault(V1)
        assert await adapter.fetch_all_versions("C") == []

    @pytest.mark.asyncio
    async def test_missing_secret_stays_distinct(self, adapter):
        await adapter.open_vault(V1)
        with pytest.raises(SecretNotFound, match="secret not found: ghost"):
            await adapter.fetch_all_versions("ghost")

    @pytest.mark.asyncio
    async def test_page_failure(self, backend, adapter):
        backend.page_failures[(V1, 1)] = ConnectionError("throttled")
        await adapter.open_vault(V1)
        with pytest.raises(VaultUnavailable, match="throttled"):
            await adapter.fetch_all_versions("B")


class TestFetchValue:
    @pytest.mark.asyncio
    async def test_value(self, adapter):
        await adapter.open_vault(V1)
        fetched = await adapter.fetch_value("A", "y")
        assert fetched.ok
        assert fetched.text == "alpha-y"

    @pytest.mark.asyncio
    async def test_denied_value_never_raises(self, adapter):
        await adapter.open_vault(V1)
        fetched = await adapter.fetch_value("D", "x")
        assert not fetched.ok
        assert fetched.text is None
        assert fetched.reason == "forbidden"

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_reason(self, backend, adapter):
        await adapter.open_vault(V1)
        backend.unreachable[V1] = ConnectionError("connection refused")
        fetched = await adapter.fetch_value("A", "x")
        assert fetched.reason == "connection refused"

    @pytest.mark.asyncio
    async def test_no_vault_open(self, adapter):
        fetched = await adapter.fetch_value("A", "x")
        assert fetched.reason == "no vault is open"

    def test_value_hidden_from_repr(self):
        from kvv.vault.models import FetchedValue

        assert "hunter2" not in repr(FetchedValue(text="hunter2"))


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_open_replaces_and_closes_previous(self, backend, adapter):
        await adapter.open_vault(V1)
        await adapter.open_vault(V2)
        first, second = backend.opened
        assert first.closed is True
        assert second.closed is False
        assert adapter.vault_url == V2

    @pytest.mark.asyncio
    async def test_close_failure_does_not_block_rebind(self, backend, adapter):
        await adapter.open_vault(V1)
        first = backend.opened[0]

        async def broken_close():
            raise ConnectionError("socket already closed")

        first.close = broken_close
        await adapter.open_vault(V2)
        assert adapter.vault_url == V2
        assert [s.name for s in await adapter.fetch_all_secrets()] == ["E"]

    @pytest.mark.asyncio
    async def test_open_failure(self, adapter, monkeypatch, backend):
        def refuse(url):
            raise ValueError("invalid vault url")

        monkeypatch.setattr(backend, "open", refuse)
        with pytest.raises(VaultUnavailable, match="cannot open vault"):
            await adapter.open_vault("not a url")
        assert adapter.vault_url is None

    @pytest.mark.asyncio
    async def test_check_credential(self, backend, adapter):
        await adapter.check_credential()
        backend.credential_error = "expired"
        with pytest.raises(CredentialUnavailable, match="expired"):
            await adapter.check_credential()

    @pytest.mark.asyncio
    async def test_close(self, backend, adapter):
        await adapter.open_vault(V1)
        await adapter.close()
        assert backend.opened[0].closed is True
        assert backend.closed is True
        assert adapter.vault_url is None
