"""
Custom Textual widgets for the kvv TUI.

VaultSelector — dropdown of configured vault URIs.
SecretsTable — one row per secret name.
VersionsTable — one row per version: id and creation time.
ValuePane — plaintext of the selected version (never markup-rendered).
KeyHelp — the global key reminders.
Logo — vanity banner with the version.
"""

from __future__ import annotations

from textual.content import Content
from textual.widgets import DataTable, Select, Static

from kvv import __version__
from kvv.tui.keys import FocusTarget, help_lines, pane_bindings

VANITY_LOGO = r"""   __ ___   ___   __
  / //_/ | / / | / /
 / ,<  | |/ /| |/ /
/_/|_| |___/ |___/
Key Vault Viewer
"""


class VaultSelector(Select[str]):
    """Dropdown of vault URIs; the first one starts selected."""

    BINDINGS = pane_bindings(FocusTarget.VAULTS)

    def __init__(
        self,
        endpoints: list[str],
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(
            [(uri, uri) for uri in endpoints],
            prompt="Choose a vault",
            allow_blank=True,
            value=endpoints[0] if endpoints else Select.NULL,
            name=name,
            id=id,
            classes=classes,
        )
        self.border_title = "Vault"


class SecretsTable(DataTable):
    """Secret names in catalog order. Enter selects the highlighted secret."""

    BINDINGS = pane_bindings(FocusTarget.SECRETS)

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(show_header=False, cursor_type="row", name=name, id=id, classes=classes)


class VersionsTable(DataTable):
    """Versions newest first. Enter shows a version, Escape dismisses the list."""

    BINDINGS = pane_bindings(FocusTarget.VERSIONS)

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(show_header=False, cursor_type="row", name=name, id=id, classes=classes)


class ValuePane(Static):
    """Shows one secret value as plain text."""

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        self._text = ""
        super().__init__(Content(""), name=name, id=id, classes=classes)

    @property
    def text(self) -> str:
        return self._text

    def show_text(self, text: str) -> None:
        self._text = text
        self.update(Content(text))

    def clear(self) -> None:
        self.show_text("")


class KeyHelp(Static):
    """Bold reminders for the global keys."""

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(
            Content("\n".join(help_lines())).stylize("bold"),
            name=name,
            id=id,
            classes=classes,
        )


class Logo(Static):
    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(
            Content(f"{VANITY_LOGO}Version {__version__}"),
            name=name,
            id=id,
            classes=classes,
        )
