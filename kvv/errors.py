"""
Error taxonomy for kvv.

Startup errors (credential, config) are fatal. Everything raised while the
TUI is running is caught by the session and turned into an empty pane or an
inline diagnostic.
"""

from __future__ import annotations

# Process exit codes
EXIT_NO_VAULTS = 1
EXIT_BAD_CONFIG = 2
EXIT_NO_CREDENTIAL = 3


class KvvError(Exception):
    """Base class for all kvv errors."""


class CredentialUnavailable(KvvError):
    """The ambient cloud identity chain produced no usable credential."""


class ConfigError(KvvError):
    pass


class ConfigUnreadable(ConfigError):
    pass


class ConfigMalformed(ConfigError):
    pass


class VaultUnavailable(KvvError):
    """A list call against the vault failed or timed out."""


class SecretNotFound(KvvError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"secret not found: {name}")


class ValueUnavailable(KvvError):
    """A single secret value could not be read (permission, disabled, ...)."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class SelectionError(KvvError):
    """An illegal vault/secret/version transition was requested."""
