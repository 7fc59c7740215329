"""Protected path models.

This module defines how paths that must survive a reset are represented:
relative to the repository root, forward-slash separated, and collected
into an ordered, de-duplicated set.
"""

from collections.abc import Iterable, Iterator
from pathlib import PurePosixPath

# Name of the Git metadata directory. Never a candidate for deletion.
GIT_DIR_NAME = ".git"


def normalize_protected_path(path: str) -> str:
    """Normalize a path relative to the repository root.

    Backslashes are converted to forward slashes, ``.`` components and
    trailing slashes are dropped.

    Args:
        path: Path relative to the repository root.

    Returns:
        Normalized relative path (e.g. ``config/.env``).

    Raises:
        ValueError: If the path is empty, absolute, or points outside the root.
    """
    raw = path.strip().replace("\\", "/")
    if not raw:
        msg = "Protected path cannot be empty"
        raise ValueError(msg)

    pure = PurePosixPath(raw)
    if pure.is_absolute():
        msg = f"Protected path must be relative to the repository root: {path}"
        raise ValueError(msg)

    parts = [part for part in pure.parts if part not in ("", ".")]
    if not parts:
        msg = f"Protected path cannot refer to the repository root: {path}"
        raise ValueError(msg)
    if ".." in parts:
        msg = f"Protected path cannot point outside the repository root: {path}"
        raise ValueError(msg)

    return "/".join(parts)


class ProtectedPathSet:
    """Immutable, ordered set of protected paths.

    Paths are normalized on construction. Duplicates collapse while the
    first-seen order is kept for display. Membership and ancestor checks
    operate on the normalized form.

    Example:
        >>> protected = ProtectedPathSet(["config/.env", "./config/.env/"])
        >>> len(protected)
        1
        >>> protected.has_protected_descendant("config")
        True
    """

    __slots__ = ("_lookup", "_paths")

    def __init__(self, paths: Iterable[str] = ()) -> None:
        ordered: dict[str, None] = {}
        for path in paths:
            ordered.setdefault(normalize_protected_path(path), None)
        self._paths: tuple[str, ...] = tuple(ordered)
        self._lookup: frozenset[str] = frozenset(ordered)

    def is_protected(self, path: str) -> bool:
        """Check if a relative path is exactly a protected path."""
        return path in self._lookup

    def has_protected_descendant(self, path: str) -> bool:
        """Check if a relative path is an ancestor directory of a protected path."""
        prefix = f"{path}/"
        return any(protected.startswith(prefix) for protected in self._paths)

    def as_tuple(self) -> tuple[str, ...]:
        """Return protected paths in insertion order."""
        return self._paths

    def __contains__(self, path: object) -> bool:
        return path in self._lookup

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProtectedPathSet):
            return NotImplemented
        return self._lookup == other._lookup

    def __hash__(self) -> int:
        return hash(self._lookup)

    def __repr__(self) -> str:
        return f"ProtectedPathSet({list(self._paths)!r})"
