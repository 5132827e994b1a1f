"""
Configuration for kvv.

Runtime settings come from environment variables with sensible defaults.
The vault list comes from an optional YAML file ($HOME/.kvv by default):

    vaults:
      - https://my-vault.vault.azure.net/
      - https://other-vault.vault.azure.net/

Usage:
    from kvv.config import get_config, load_vaults_file, merge_endpoints
    cfg = get_config()
    endpoints = merge_endpoints(cli_uri, load_vaults_file(cfg.config_path).vaults)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, ValidationError

from kvv.errors import ConfigMalformed, ConfigUnreadable
from kvv.vault.adapter import DEFAULT_PAGE_TIMEOUT


def _default_config_path() -> Path | None:
    try:
        return Path.home() / ".kvv"
    except RuntimeError:
        return None


@dataclass(frozen=True)
class Config:
    """Runtime configuration."""

    config_path: Path | None = field(default_factory=_default_config_path)
    page_timeout: float = DEFAULT_PAGE_TIMEOUT
    log_file: Path | None = None
    log_level: str = "WARNING"


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the singleton config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _load_from_env() -> Config:
    config_path = os.environ.get("KVV_CONFIG")
    log_file = os.environ.get("KVV_LOG_FILE")
    return Config(
        config_path=Path(config_path) if config_path else _default_config_path(),
        page_timeout=float(os.environ.get("KVV_PAGE_TIMEOUT", str(DEFAULT_PAGE_TIMEOUT))),
        log_file=Path(log_file) if log_file else None,
        log_level=os.environ.get("KVV_LOG_LEVEL", "WARNING").upper(),
    )


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None


class VaultsFile(BaseModel):
    """Contents of the vaults file. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    vaults: list[str] = []


def load_vaults_file(path: Path | None) -> VaultsFile:
    """Load the vaults file; a missing file yields an empty list."""
    if path is None or not path.exists():
        return VaultsFile()
    try:
        text = path.read_text()
    except OSError as e:
        raise ConfigUnreadable(f"error reading config file at {path}: {e}") from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigMalformed(f"error unmarshalling config file at {path}: {e}") from e
    if data is None:
        return VaultsFile()
    if not isinstance(data, dict):
        raise ConfigMalformed(f"error unmarshalling config file at {path}: expected a mapping")
    if data.get("vaults") is None:
        data = {**data, "vaults": []}
    try:
        return VaultsFile.model_validate(data)
    except ValidationError as e:
        raise ConfigMalformed(f"error unmarshalling config file at {path}: {e}") from e


def merge_endpoints(cli_uri: str | None, configured: list[str]) -> list[str]:
    """CLI URI first, then configured vaults in file order, without duplicates."""
    endpoints: list[str] = []
    for uri in [cli_uri, *configured]:
        if uri and uri not in endpoints:
            endpoints.append(uri)
    return endpoints
