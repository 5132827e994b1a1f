"""Tests for kvv.clipboard — the clipboard sink."""

from unittest.mock import patch

import pyperclip

from kvv.clipboard import copy_to_clipboard


class TestCopy:
    def test_copies_text(self):
        with patch("kvv.clipboard.pyperclip.copy") as copy:
            assert copy_to_clipboard("s3cret") is True
        copy.assert_called_once_with("s3cret")

    def test_missing_clipboard_is_silent(self):
        """No clipboard mechanism on the host: no exception, just False."""
        with patch(
            "kvv.clipboard.pyperclip.copy",
            side_effect=pyperclip.PyperclipException("no copy/paste mechanism"),
        ):
            assert copy_to_clipboard("s3cret") is False
