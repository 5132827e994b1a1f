"""
Key routing for the kvv TUI.

Global keys are App-level priority bindings, so they are handled before the
focused pane sees the key. Pane keys are bound on the pane widgets and only
fire while that pane has focus. Both tables resolve to an Intent that
KvvApp.action_dispatch() carries out. Navigation keys inside tables and the
dropdown are left to Textual.
"""

from __future__ import annotations

from enum import StrEnum

from textual.binding import Binding


class Intent(StrEnum):
    COPY = "copy"
    FOCUS_VAULTS = "focus_vaults"
    FOCUS_SECRETS = "focus_secrets"
    QUIT = "quit"
    IGNORE = "ignore"
    SELECT_SECRET = "select_secret"
    SELECT_VERSION = "select_version"
    DISMISS_VERSIONS = "dismiss_versions"


class FocusTarget(StrEnum):
    VAULTS = "vaults"
    SECRETS = "secrets"
    VERSIONS = "versions"


# Global key → (intent, help text). Empty help text keeps a key off the help panel.
GLOBAL_KEYS: dict[str, tuple[Intent, str]] = {
    "v": (Intent.FOCUS_VAULTS, "Change vault"),
    "c": (Intent.COPY, "Copy selected secret"),
    "q": (Intent.QUIT, "Quit KVV"),
    # Secret values are on screen; ctrl+c must not be one slip away from `c`
    "ctrl+c": (Intent.IGNORE, ""),
}

PANE_KEYS: dict[FocusTarget, dict[str, Intent]] = {
    FocusTarget.VAULTS: {"escape": Intent.FOCUS_SECRETS},
    FocusTarget.SECRETS: {"enter": Intent.SELECT_SECRET},
    FocusTarget.VERSIONS: {
        "enter": Intent.SELECT_VERSION,
        "escape": Intent.DISMISS_VERSIONS,
    },
}


def global_bindings() -> list[Binding]:
    return [
        Binding(key, f"dispatch('{intent}')", help_text or intent, show=False, priority=True)
        for key, (intent, help_text) in GLOBAL_KEYS.items()
    ]


def pane_bindings(focus: FocusTarget) -> list[Binding]:
    return [
        Binding(key, f"app.dispatch('{intent}')", intent, show=False)
        for key, intent in PANE_KEYS[focus].items()
    ]


def help_lines() -> list[str]:
    return [f"<{key}> {text}" for key, (_, text) in GLOBAL_KEYS.items() if text]
