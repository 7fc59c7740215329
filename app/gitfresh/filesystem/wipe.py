"""Selective wipe of the working tree.

Deletes everything under the repository root except the Git metadata
directory, protected paths, and directories that contain a protected
path. Ancestor directories are kept as containers and their children
are processed recursively instead of being removed in one operation.
"""

import logging
import shutil
from enum import Enum
from pathlib import Path

from gitfresh.models.protected import GIT_DIR_NAME, ProtectedPathSet
from gitfresh.models.reset import WipeResult, WipeWarning

logger = logging.getLogger(__name__)


class WipeDecision(str, Enum):
    """What the wipe does with a single entry.

    Attributes:
        SKIP: Keep the entry untouched.
        RECURSE: Keep the directory, process its children.
        DELETE: Remove the entry (recursively for directories).
    """

    SKIP = "skip"
    RECURSE = "recurse"
    DELETE = "delete"


def decide(path: str, is_dir: bool, protected: ProtectedPathSet) -> WipeDecision:
    """Decide what to do with an entry during the wipe.

    Pure function over the entry's relative path, so the traversal logic
    can be checked against a virtual tree.

    Args:
        path: Entry path relative to the repository root.
        is_dir: True for real directories (symlinks are not directories here).
        protected: Paths that must survive the wipe.

    Returns:
        The decision for this entry.
    """
    name = path.rsplit("/", 1)[-1]
    if name == GIT_DIR_NAME:
        return WipeDecision.SKIP
    if protected.is_protected(path):
        return WipeDecision.SKIP
    if protected.has_protected_descendant(path):
        # A symlink cannot be traversed without leaving the tree; keep it whole.
        return WipeDecision.RECURSE if is_dir else WipeDecision.SKIP
    return WipeDecision.DELETE


class SelectiveWiper:
    """Deletes the working tree except .git and protected paths.

    Deletion is best-effort per entry: failures are recorded as warnings
    and the walk continues. All warnings are returned in the WipeResult.

    Attributes:
        _root: Repository root to wipe.
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(self, root: Path, *, dry_run: bool = False) -> None:
        """Initialize the SelectiveWiper.

        Args:
            root: Repository root to wipe.
            dry_run: If True, report what would be deleted without deleting.
        """
        self._root = root
        self._dry_run = dry_run

    def wipe(self, protected: ProtectedPathSet) -> WipeResult:
        """Wipe the working tree, preserving protected paths.

        Args:
            protected: Paths that must survive the wipe.

        Returns:
            WipeResult listing removed entries and warnings.
        """
        removed: list[str] = []
        warnings: list[WipeWarning] = []

        self._process_directory(self._root, "", protected, removed, warnings)

        if warnings:
            logger.warning("Wipe finished with %d warning(s)", len(warnings))
        return WipeResult(
            removed=tuple(removed),
            warnings=tuple(warnings),
            dry_run=self._dry_run,
        )

    def _process_directory(
        self,
        directory: Path,
        relative_dir: str,
        protected: ProtectedPathSet,
        removed: list[str],
        warnings: list[WipeWarning],
    ) -> None:
        """Apply wipe decisions to the children of one directory."""
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as e:
            logger.warning("Could not read directory %s: %s", directory, e)
            warnings.append(WipeWarning(path=relative_dir or ".", error=str(e)))
            return

        for entry in entries:
            relative = f"{relative_dir}/{entry.name}" if relative_dir else entry.name

            try:
                is_dir = entry.is_dir() and not entry.is_symlink()
            except OSError as e:
                warnings.append(WipeWarning(path=relative, error=str(e)))
                continue

            decision = decide(relative, is_dir, protected)
            logger.debug("%s: %s", decision.value, relative)

            if decision == WipeDecision.SKIP:
                continue
            if decision == WipeDecision.RECURSE:
                self._process_directory(entry, relative, protected, removed, warnings)
                continue

            if self._dry_run:
                removed.append(relative)
                continue

            try:
                self._delete(entry, is_dir)
            except OSError as e:
                logger.warning("Could not remove %s: %s", relative, e)
                warnings.append(WipeWarning(path=relative, error=str(e)))
                continue
            removed.append(relative)

    def _delete(self, entry: Path, is_dir: bool) -> None:
        """Delete a single entry.

        Directories (but not symlinks to directories) use shutil.rmtree;
        files, symlinks and dead symlinks use Path.unlink.
        """
        if is_dir:
            shutil.rmtree(entry)
        else:
            entry.unlink()
