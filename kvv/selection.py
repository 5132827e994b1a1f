"""
Selection — which vault, secret and version are current.

Plain identifiers only. Every transition returns a new Selection and clears
the levels below the one being set, so a version can never outlive its
secret and a secret can never outlive its vault.
"""

from __future__ import annotations

from dataclasses import dataclass

from kvv.errors import SelectionError


@dataclass(frozen=True)
class Selection:
    vault: str | None = None
    secret: str | None = None
    version: str | None = None

    def __post_init__(self) -> None:
        if self.secret is not None and self.vault is None:
            raise SelectionError("a secret requires a vault")
        if self.version is not None and self.secret is None:
            raise SelectionError("a version requires a secret")

    def with_vault(self, vault: str) -> Selection:
        return Selection(vault=vault)

    def with_secret(self, secret: str) -> Selection:
        if self.vault is None:
            raise SelectionError(f"cannot select secret {secret!r} without a vault")
        return Selection(vault=self.vault, secret=secret)

    def with_version(self, version: str) -> Selection:
        if self.secret is None:
            raise SelectionError(f"cannot select version {version!r} without a secret")
        return Selection(vault=self.vault, secret=self.secret, version=version)

    def without_version(self) -> Selection:
        return Selection(vault=self.vault, secret=self.secret)
