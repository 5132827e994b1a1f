"""Clipboard sink — writes plaintext to the host clipboard via pyperclip."""

from __future__ import annotations

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """Copy text; returns False instead of raising when no clipboard is available."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.debug("Clipboard unavailable: %s", e)
        return False
    return True
