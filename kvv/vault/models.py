"""Vault data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class SecretSummary(BaseModel):
    """A secret as listed in a vault (name only — never the value)."""

    model_config = ConfigDict(frozen=True)

    name: str


class SecretVersion(BaseModel):
    """One historical version of a secret. `created` is None when the service omits it."""

    model_config = ConfigDict(frozen=True)

    id: str
    created: datetime | None = None


@dataclass(frozen=True)
class FetchedValue:
    """Result of reading one version: the plaintext, or why it could not be read."""

    text: str | None = field(default=None, repr=False)
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.reason is None
