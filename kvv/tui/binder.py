"""
View Binder — projects the session onto the three panes.

Panes are only ever redrawn from here, and only from the session's catalog
and selection; the binder never talks to the vault itself.
"""

from __future__ import annotations

from datetime import datetime

from textual.widget import Widget
from textual.widgets import DataTable
from textual.widgets.data_table import RowDoesNotExist

from kvv.session import Session
from kvv.tui.keys import FocusTarget
from kvv.tui.widgets import SecretsTable, ValuePane, VaultSelector, VersionsTable

ERROR_PREFIX = "error getting secret: "


def format_created(created: datetime | None) -> str:
    """Local-time rendering of a version's creation time; empty when unknown."""
    if created is None:
        return ""
    return created.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")


class ViewBinder:
    def __init__(
        self,
        session: Session,
        vaults: VaultSelector,
        secrets: SecretsTable,
        versions: VersionsTable,
        value: ValuePane,
    ) -> None:
        self.session = session
        self.vaults = vaults
        self.secrets = secrets
        self.versions = versions
        self.value = value
        secrets.add_column("Secret", key="name")
        versions.add_column("Version", key="id")
        versions.add_column("Created", key="created")
        # Lists last drawn; the catalog replaces rather than mutates its lists
        self._shown_secrets: list | None = None
        self._shown_versions: list | None = None

    def render(self) -> None:
        self.render_secrets()
        self.render_versions()
        self.render_value()

    def render_secrets(self) -> None:
        if self._shown_secrets is self.session.catalog.secrets:
            return
        self._shown_secrets = self.session.catalog.secrets
        self.secrets.clear()
        for secret in self.session.catalog.secrets:
            self.secrets.add_row(secret.name, key=secret.name)
        _move_cursor(self.secrets, self.session.selection.secret)

    def render_versions(self) -> None:
        if self._shown_versions is self.session.catalog.versions:
            return
        self._shown_versions = self.session.catalog.versions
        self.versions.clear()
        for version in self.session.catalog.versions:
            self.versions.add_row(version.id, format_created(version.created), key=version.id)
        _move_cursor(self.versions, self.session.selection.version)

    def render_value(self) -> None:
        value = self.session.value
        if value is None:
            self.value.clear()
        elif value.ok:
            self.value.show_text(value.text or "")
        else:
            self.value.show_text(f"{ERROR_PREFIX}{value.reason}")

    def highlighted_secret(self) -> str | None:
        return _highlighted(self.secrets)

    def highlighted_version(self) -> str | None:
        return _highlighted(self.versions)

    def _pane(self, target: FocusTarget) -> Widget:
        return {
            FocusTarget.VAULTS: self.vaults,
            FocusTarget.SECRETS: self.secrets,
            FocusTarget.VERSIONS: self.versions,
        }[target]

    def focus(self, target: FocusTarget) -> None:
        # Focus styling follows via the :focus / :focus-within rules in theme.tcss
        self._pane(target).focus()

    @property
    def focused(self) -> FocusTarget | None:
        current = self.secrets.app.focused
        if current is None:
            return None
        for target in FocusTarget:
            pane = self._pane(target)
            if current is pane or pane in current.ancestors:
                return target
        return None


def _move_cursor(table: DataTable, key: str | None) -> None:
    if table.row_count == 0:
        return
    row = 0
    if key is not None:
        try:
            row = table.get_row_index(key)
        except RowDoesNotExist:
            row = 0
    table.move_cursor(row=row)


def _highlighted(table: DataTable) -> str | None:
    if table.row_count == 0:
        return None
    row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
    return row_key.value
