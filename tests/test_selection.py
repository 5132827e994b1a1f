"""Tests for kvv.selection — the pure selection transitions."""

import pytest

from kvv.errors import SelectionError
from kvv.selection import Selection


class TestInvariants:
    def test_empty(self):
        sel = Selection()
        assert (sel.vault, sel.secret, sel.version) == (None, None, None)

    def test_secret_requires_vault(self):
        with pytest.raises(SelectionError):
            Selection(secret="A")

    def test_version_requires_secret(self):
        with pytest.raises(SelectionError):
            Selection(vault="v", version="x")

    def test_frozen(self):
        sel = Selection(vault="v")
        with pytest.raises(AttributeError):
            sel.vault = "w"  # type: ignore[misc]


class TestTransitions:
    def test_with_vault_clears_lower_levels(self):
        sel = Selection(vault="v", secret="A", version="x").with_vault("w")
        assert sel == Selection(vault="w")

    def test_reselecting_same_vault_clears_lower_levels(self):
        sel = Selection(vault="v", secret="A", version="x").with_vault("v")
        assert sel == Selection(vault="v")

    def test_with_secret_clears_version(self):
        sel = Selection(vault="v", secret="A", version="x").with_secret("B")
        assert sel == Selection(vault="v", secret="B")

    def test_with_secret_without_vault(self):
        with pytest.raises(SelectionError):
            Selection().with_secret("A")

    def test_with_version(self):
        sel = Selection(vault="v", secret="A").with_version("x").with_version("y")
        assert sel == Selection(vault="v", secret="A", version="y")

    def test_with_version_without_secret(self):
        with pytest.raises(SelectionError):
            Selection(vault="v").with_version("x")

    def test_without_version(self):
        sel = Selection(vault="v", secret="A", version="x").without_version()
        assert sel == Selection(vault="v", secret="A")
