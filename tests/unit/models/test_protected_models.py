"""Unit tests for protected path models."""

import pytest
from gitfresh.models.protected import ProtectedPathSet, normalize_protected_path


class TestNormalizeProtectedPath:
    """Tests for normalize_protected_path."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (".env", ".env"),
            ("config/.env", "config/.env"),
            ("./config/.env", "config/.env"),
            ("config/", "config"),
            ("config//nested/./file", "config/nested/file"),
            ("config\\windows\\file", "config/windows/file"),
            ("  padded.local  ", "padded.local"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        """Paths are forward-slash separated without dots or trailing slashes."""
        assert normalize_protected_path(raw) == expected

    @pytest.mark.parametrize("raw", ["", "   ", ".", "./"])
    def test_rejects_empty_or_root(self, raw: str) -> None:
        """Empty paths and the root itself cannot be protected."""
        with pytest.raises(ValueError):
            normalize_protected_path(raw)

    def test_rejects_absolute(self) -> None:
        """Absolute paths are rejected."""
        with pytest.raises(ValueError, match="relative"):
            normalize_protected_path("/etc/passwd")

    @pytest.mark.parametrize("raw", ["../outside", "config/../../outside", ".."])
    def test_rejects_parent_references(self, raw: str) -> None:
        """Paths pointing outside the root are rejected."""
        with pytest.raises(ValueError, match="outside"):
            normalize_protected_path(raw)


class TestProtectedPathSet:
    """Tests for ProtectedPathSet."""

    def test_empty(self) -> None:
        """An empty set has no members."""
        protected = ProtectedPathSet()
        assert len(protected) == 0
        assert list(protected) == []
        assert not protected.is_protected(".env")

    def test_duplicates_collapse(self) -> None:
        """Equivalent spellings of a path collapse into one entry."""
        protected = ProtectedPathSet(["config/.env", "./config/.env", "config/.env/"])
        assert len(protected) == 1
        assert "config/.env" in protected

    def test_insertion_order_preserved(self) -> None:
        """Iteration follows first-seen order."""
        protected = ProtectedPathSet(["b.local", "a.local", "b.local", "c.local"])
        assert protected.as_tuple() == ("b.local", "a.local", "c.local")

    def test_equality_ignores_order(self) -> None:
        """Sets with the same members are equal regardless of order."""
        assert ProtectedPathSet(["a", "b"]) == ProtectedPathSet(["b", "a"])
        assert hash(ProtectedPathSet(["a", "b"])) == hash(ProtectedPathSet(["b", "a"]))

    def test_has_protected_descendant(self) -> None:
        """Ancestor directories of protected paths are detected."""
        protected = ProtectedPathSet(["config/nested/.env"])
        assert protected.has_protected_descendant("config") is True
        assert protected.has_protected_descendant("config/nested") is True
        assert protected.has_protected_descendant("config/nested/.env") is False

    def test_descendant_check_uses_path_boundaries(self) -> None:
        """A sibling sharing a name prefix is not an ancestor."""
        protected = ProtectedPathSet(["configuration/.env"])
        assert protected.has_protected_descendant("config") is False

    def test_invalid_path_rejected(self) -> None:
        """Invalid members raise on construction."""
        with pytest.raises(ValueError):
            ProtectedPathSet(["../secret"])
