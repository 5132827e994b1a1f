"""
KvvApp — main Textual application for kvv.

Lays out the vault selector, key help and logo above the secrets pane, with
the value pane and versions pane to its right. Keys become Intents (see
kvv.tui.keys); intents that touch the vault run as workers in one exclusive
group, so starting a new one cancels whatever fetch is still outstanding.
"""

from __future__ import annotations

import logging
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Select

from kvv.clipboard import copy_to_clipboard
from kvv.errors import EXIT_NO_CREDENTIAL, CredentialUnavailable
from kvv.session import Session
from kvv.tui.binder import ViewBinder
from kvv.tui.keys import FocusTarget, Intent, global_bindings
from kvv.tui.widgets import (
    KeyHelp,
    Logo,
    SecretsTable,
    ValuePane,
    VaultSelector,
    VersionsTable,
)

logger = logging.getLogger(__name__)

CSS_PATH = Path(__file__).parent / "theme.tcss"

BROWSE_GROUP = "browse"


class KvvApp(App):
    """Terminal browser for one or more key vaults."""

    TITLE = "kvv"
    CSS_PATH = CSS_PATH
    ENABLE_COMMAND_PALETTE = False

    BINDINGS = global_bindings()

    def __init__(self, session: Session, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.binder: ViewBinder | None = None
        self._started = False

    def compose(self) -> ComposeResult:
        with Horizontal(id="top"):
            with Vertical(id="controls"):
                yield VaultSelector(self.session.endpoints, id="vaults")
                yield KeyHelp(id="key-help")
            yield Logo(id="logo")
        with Horizontal(id="body"):
            yield SecretsTable(id="secrets")
            with Vertical(id="detail"):
                yield ValuePane(id="value")
                yield VersionsTable(id="versions")

    def on_mount(self) -> None:
        self.binder = ViewBinder(
            self.session,
            self.query_one(VaultSelector),
            self.query_one(SecretsTable),
            self.query_one(VersionsTable),
            self.query_one(ValuePane),
        )
        self.session.on_change = self.binder.render
        self.binder.render()
        self.binder.focus(FocusTarget.SECRETS)
        self._browse(self._startup())

    def _browse(self, work: Coroutine[Any, Any, None]) -> None:
        self.run_worker(work, group=BROWSE_GROUP, exclusive=True)

    async def _startup(self) -> None:
        """Verify the credential and load the first vault."""
        try:
            await self.session.start()
        except CredentialUnavailable as e:
            logger.error("%s", e)
            self.exit(return_code=EXIT_NO_CREDENTIAL, message=str(e))
            return
        self._started = True
        self._vault_loaded()

    async def _open_vault(self, vault: str) -> None:
        await self.session.select_vault(vault)
        self._vault_loaded()

    def _vault_loaded(self) -> None:
        if self.session.error:
            self.notify(self.session.error, title="Vault unavailable", severity="error")
            # Blank the dropdown so choosing the same vault again retries
            self.query_one(VaultSelector).clear()
        self.binder.focus(FocusTarget.SECRETS)

    async def _open_secret(self, name: str) -> None:
        await self.session.select_secret(name)
        if self.session.error:
            self.notify(self.session.error, severity="warning")
        if self.session.catalog.versions:
            self.binder.focus(FocusTarget.VERSIONS)
        else:
            self.binder.focus(FocusTarget.SECRETS)

    def on_select_changed(self, event: Select.Changed) -> None:
        if not self._started or event.select.is_blank():
            return
        if event.value == self.session.catalog.vault:
            return
        self._browse(self._open_vault(str(event.value)))

    def action_dispatch(self, intent: str) -> None:
        """Carry out one Intent from the key tables."""
        action = Intent(intent)
        if action is Intent.COPY:
            self._copy_value()
        elif action is Intent.FOCUS_VAULTS:
            self.binder.focus(FocusTarget.VAULTS)
        elif action is Intent.FOCUS_SECRETS:
            self.binder.focus(FocusTarget.SECRETS)
        elif action is Intent.QUIT:
            self.exit()
        elif action is Intent.SELECT_SECRET:
            name = self.binder.highlighted_secret()
            if name is not None:
                self._browse(self._open_secret(name))
        elif action is Intent.SELECT_VERSION:
            version_id = self.binder.highlighted_version()
            if version_id is not None:
                self._browse(self.session.select_version(version_id))
        elif action is Intent.DISMISS_VERSIONS and self.session.selection.secret is not None:
            self.workers.cancel_group(self, BROWSE_GROUP)
            self.session.dismiss_versions()
            self.binder.focus(FocusTarget.SECRETS)

    def _copy_value(self) -> None:
        text = self.session.copyable_text()
        if text is None:
            return
        if copy_to_clipboard(text):
            self.notify("Secret copied to clipboard")

    async def on_unmount(self) -> None:
        """Close the vault client and credential."""
        self.workers.cancel_group(self, BROWSE_GROUP)
        await self.session.close()
