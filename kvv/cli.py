"""
kvv CLI — entry point.

Usage:
    kvv                      # open the vaults listed in ~/.kvv
    kvv https://x.vault.azure.net/   # open this vault first, then the configured ones
    kvv --version
"""

from __future__ import annotations

import argparse
import logging
import sys

from kvv.config import Config, get_config, load_vaults_file, merge_endpoints
from kvv.errors import (
    EXIT_BAD_CONFIG,
    EXIT_NO_CREDENTIAL,
    EXIT_NO_VAULTS,
    ConfigError,
    CredentialUnavailable,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="kvv",
        description="Key Vault Viewer — browse secrets and their versions in a terminal.",
    )
    parser.add_argument("vault", nargs="?", help="Vault URI to open first")
    parser.add_argument("--version", action="store_true", help="Show version and exit")

    args = parser.parse_args(argv)

    if args.version:
        from kvv import __version__

        print(f"kvv {__version__}")
        return 0

    cfg = get_config()
    _configure_logging(cfg)

    try:
        vaults_file = load_vaults_file(cfg.config_path)
    except ConfigError as e:
        print(f"Error: {e}")
        return EXIT_BAD_CONFIG

    endpoints = merge_endpoints(args.vault, vaults_file.vaults)
    if not endpoints:
        print("No vaults to open, exiting")
        return EXIT_NO_VAULTS

    try:
        from kvv.vault.azure import AzureBackend

        backend = AzureBackend()
    except CredentialUnavailable as e:
        print(f"Error: {e}")
        return EXIT_NO_CREDENTIAL

    return _run_tui(backend, endpoints, cfg)


def _configure_logging(cfg: Config) -> None:
    level = getattr(logging, cfg.log_level, logging.WARNING)
    if cfg.log_file is not None:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=cfg.log_file)
    else:
        from textual.logging import TextualHandler

        logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[TextualHandler()])


def _run_tui(backend, endpoints: list[str], cfg: Config) -> int:
    from kvv.session import Session
    from kvv.tui.app import KvvApp
    from kvv.vault.adapter import VaultAdapter

    logger.info("Starting kvv with %d vault(s)", len(endpoints))
    session = Session(VaultAdapter(backend, page_timeout=cfg.page_timeout), endpoints)
    app = KvvApp(session)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
