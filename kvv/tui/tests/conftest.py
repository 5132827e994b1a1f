"""Test fixtures for the kvv TUI."""

from __future__ import annotations

import pytest

from kvv.tui.app import KvvApp


@pytest.fixture
def app(session) -> KvvApp:
    """A KvvApp over the in-memory backend from the root conftest."""
    return KvvApp(session)


@pytest.fixture
def settle():
    """Let outstanding browse workers finish and the screen catch up."""

    async def _settle(app: KvvApp, pilot) -> None:
        await app.workers.wait_for_complete()
        await pilot.pause()

    return _settle
