"""Git operations used by the reset protocol.

Wraps the git executable for repository detection, dirty checks,
stash push/pop and restore. Every operation can be restricted by a set
of excluded paths so that protected files never enter the stash and are
never overwritten by a restore.
"""

import logging
import subprocess
from collections.abc import Iterable
from pathlib import Path

from gitfresh.utils.shell import CommandResult, command_exists, run_command

logger = logging.getLogger(__name__)

DEFAULT_STASH_MESSAGE = "git-fresh: temporary stash"

# Git operations on large trees can be slow; fail instead of hanging forever.
DEFAULT_GIT_TIMEOUT = 300.0


class GitError(Exception):
    """Raised when a Git command fails."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = "") -> None:
        """Initialize Git error.

        Args:
            message: Error message
            returncode: Git command return code
            stderr: Standard error output
        """
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def build_pathspec(exclude: Iterable[str] = ()) -> list[str]:
    """Build a pathspec covering the whole tree minus excluded paths.

    Excluded paths use literal matching so file names containing glob
    characters are not reinterpreted by Git.

    Args:
        exclude: Paths relative to the repository root.

    Returns:
        Arguments starting with ``--`` to append to a git command.
    """
    return ["--", ".", *(f":(exclude,literal){path}" for path in exclude)]


class GitRepository:
    """Git CLI operations for one working tree.

    Args:
        working_dir: Directory git commands run in (default: cwd).
        timeout: Maximum time in seconds for a single git command.
    """

    def __init__(self, working_dir: Path | None = None, *, timeout: float = DEFAULT_GIT_TIMEOUT):
        self.working_dir = working_dir or Path.cwd()
        self._timeout = timeout

    def is_available(self) -> bool:
        """Check if the git executable is installed."""
        return command_exists("git")

    def _run(self, args: list[str], *, check: bool = True) -> CommandResult:
        """Run a git command in the working directory.

        Raises:
            GitError: If git is missing, times out, or (with check) fails.
        """
        command = ["git", *args]
        logger.debug("Running %s in %s", " ".join(command), self.working_dir)
        try:
            result = run_command(command, timeout=self._timeout, cwd=self.working_dir)
        except FileNotFoundError as e:
            raise GitError("Git is not installed or not in PATH") from e
        except subprocess.TimeoutExpired as e:
            raise GitError(f"Git command timed out: git {args[0]}") from e

        if check and not result.success:
            raise GitError(
                f"Git command failed: git {' '.join(args)}",
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
        return result

    def find_root(self) -> Path | None:
        """Return the top-level directory of the repository, or None outside one."""
        result = self._run(["rev-parse", "--show-toplevel"], check=False)
        if not result.success:
            logger.debug("Not a git repository: %s", result.stderr.strip())
            return None
        root = result.stdout.strip()
        return Path(root) if root else None

    def has_changes(self, exclude: Iterable[str] = ()) -> bool:
        """Check for uncommitted changes, including untracked files.

        Args:
            exclude: Paths ignored by the check.

        Raises:
            GitError: If the status cannot be determined.
        """
        result = self._run(
            ["status", "--porcelain", "--untracked-files=all", *build_pathspec(exclude)]
        )
        return bool(result.stdout.strip())

    def stash_ref(self) -> str | None:
        """Return the commit id of the newest stash entry, or None if there is none."""
        result = self._run(["rev-parse", "-q", "--verify", "refs/stash"], check=False)
        if not result.success:
            return None
        return result.stdout.strip() or None

    def stash_push(
        self,
        message: str = DEFAULT_STASH_MESSAGE,
        exclude: Iterable[str] = (),
    ) -> str | None:
        """Stash tracked and untracked changes.

        Args:
            message: Stash entry message.
            exclude: Paths left out of the stash.

        Returns:
            Commit id of the created stash entry, or None if nothing was stashed.

        Raises:
            GitError: If the stash command fails.
        """
        before = self.stash_ref()
        self._run(
            ["stash", "push", "--include-untracked", "-m", message, *build_pathspec(exclude)]
        )
        after = self.stash_ref()
        if after is None or after == before:
            return None
        return after

    def has_tracked_files(self, exclude: Iterable[str] = ()) -> bool:
        """Check if the index contains any files outside the excluded paths."""
        result = self._run(["ls-files", *build_pathspec(exclude)])
        return bool(result.stdout.strip())

    def restore(self, exclude: Iterable[str] = ()) -> bool:
        """Restore tracked files into the working tree.

        Args:
            exclude: Paths left untouched.

        Returns:
            False if there was nothing to restore, True otherwise.

        Raises:
            GitError: If the restore fails.
        """
        excluded = tuple(exclude)
        if not self.has_tracked_files(excluded):
            logger.info("No tracked files to restore")
            return False
        self._run(["restore", "--worktree", *build_pathspec(excluded)])
        return True

    def stash_pop(self) -> None:
        """Re-apply and drop the newest stash entry.

        On failure Git keeps the entry in the stash list.

        Raises:
            GitError: If the stash could not be applied.
        """
        self._run(["stash", "pop"])

    def stash_list(self) -> list[str]:
        """Return the stash entries, newest first."""
        result = self._run(["stash", "list"])
        return [line for line in result.stdout.splitlines() if line.strip()]
