"""Reset protocol orchestration.

Drives a run through its phases in a fixed order:

    Init -> DirtyCheck -> (Stashing) -> Wiping -> Restoring -> (Popping) -> Done

The wipe never starts unless uncommitted work outside the protected
paths has been stashed. Once the wipe has started the run does not
abort; a failed restore is fatal but leaves the stash in place, and a
failed pop is reported as a warning with the stash kept for manual
resolution.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gitfresh.core.errors import (
    DirtyCheckError,
    IllegalTransitionError,
    NotARepositoryError,
    RestoreError,
    StashError,
)
from gitfresh.filesystem.wipe import SelectiveWiper
from gitfresh.models.reset import (
    Phase,
    PopOutcome,
    RepoState,
    ResetSummary,
    StashRecord,
    WipeResult,
)
from gitfresh.vcs.git import DEFAULT_STASH_MESSAGE, GitError, GitRepository

if TYPE_CHECKING:
    from gitfresh.models.protected import ProtectedPathSet

logger = logging.getLogger(__name__)

# Legal forward transitions of the reset protocol.
ALLOWED_TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.INIT: frozenset({Phase.DIRTY_CHECK}),
    Phase.DIRTY_CHECK: frozenset({Phase.STASHING, Phase.WIPING}),
    Phase.STASHING: frozenset({Phase.WIPING}),
    Phase.WIPING: frozenset({Phase.RESTORING}),
    Phase.RESTORING: frozenset({Phase.POPPING, Phase.DONE}),
    Phase.POPPING: frozenset({Phase.DONE}),
    Phase.DONE: frozenset(),
}


class PhaseTracker:
    """Tracks the current phase and rejects illegal transitions."""

    def __init__(self) -> None:
        self._history: list[Phase] = [Phase.INIT]

    @property
    def current(self) -> Phase:
        """The phase the run is in."""
        return self._history[-1]

    @property
    def history(self) -> tuple[Phase, ...]:
        """Phases entered so far, in order."""
        return tuple(self._history)

    def advance(self, phase: Phase) -> None:
        """Move to the next phase.

        Raises:
            IllegalTransitionError: If the transition is not allowed.
        """
        if phase not in ALLOWED_TRANSITIONS[self.current]:
            raise IllegalTransitionError(self.current, phase)
        logger.debug("Phase %s -> %s", self.current.value, phase.value)
        self._history.append(phase)


class ResetReporter:
    """Receives progress notifications from the orchestrator.

    The base implementation ignores every notification.
    """

    def phase_started(self, phase: Phase, message: str) -> None:
        """A phase began."""

    def phase_succeeded(self, phase: Phase, message: str) -> None:
        """A phase completed successfully."""

    def phase_warned(self, phase: Phase, message: str) -> None:
        """A phase completed with a non-fatal problem."""

    def phase_failed(self, phase: Phase, message: str) -> None:
        """A phase failed fatally."""

    def phase_skipped(self, phase: Phase, message: str) -> None:
        """A phase was not needed."""


class ResetOrchestrator:
    """Runs the stash, wipe, restore and pop protocol on a repository.

    Args:
        git: Git operations for the working directory.
        reporter: Progress receiver. Defaults to a silent reporter.
        stash_message: Message of the temporary stash.
    """

    def __init__(
        self,
        git: GitRepository,
        *,
        reporter: ResetReporter | None = None,
        stash_message: str = DEFAULT_STASH_MESSAGE,
    ) -> None:
        self._git = git
        self._reporter = reporter or ResetReporter()
        self._stash_message = stash_message
        self._tracker = PhaseTracker()
        self._root: Path | None = None

    @property
    def phase(self) -> Phase:
        """The current phase."""
        return self._tracker.current

    def initialize(self) -> Path:
        """Verify the working directory belongs to a Git repository.

        Nothing is modified. Safe to call more than once.

        Returns:
            The repository root.

        Raises:
            NotARepositoryError: If git is missing or no repository is found.
        """
        if self._root is not None:
            return self._root

        if not self._git.is_available():
            raise NotARepositoryError("Git is not installed or not in PATH.")

        try:
            root = self._git.find_root()
        except GitError as e:
            raise NotARepositoryError(f"Cannot detect Git repository: {e.message}") from e
        if root is None:
            raise NotARepositoryError()

        logger.info("Repository root: %s", root)
        # Pathspecs and protected paths are root-relative.
        self._git.working_dir = root
        self._root = root
        return root

    def plan(self, protected: ProtectedPathSet) -> WipeResult:
        """List what the wipe would remove without changing anything."""
        root = self.initialize()
        return SelectiveWiper(root, dry_run=True).wipe(protected)

    def run(self, protected: ProtectedPathSet) -> ResetSummary:
        """Run the full reset protocol.

        Args:
            protected: Paths that survive the wipe and are kept out of the stash.

        Returns:
            ResetSummary describing the completed run.

        Raises:
            NotARepositoryError: If not inside a Git repository.
            DirtyCheckError: If uncommitted changes cannot be detected.
            StashError: If uncommitted changes cannot be stashed.
            RestoreError: If tracked files cannot be restored after the wipe.
        """
        root = self.initialize()
        excluded = protected.as_tuple()

        self._tracker.advance(Phase.DIRTY_CHECK)
        repo_state = self._check_dirty(excluded)

        stash = StashRecord(created=False)
        if repo_state == RepoState.DIRTY:
            self._tracker.advance(Phase.STASHING)
            stash = self._stash(excluded)
        else:
            self._reporter.phase_skipped(Phase.STASHING, "No changes to stash")

        self._tracker.advance(Phase.WIPING)
        wipe = self._wipe(root, protected)

        self._tracker.advance(Phase.RESTORING)
        self._restore(excluded, stash)

        pop_outcome = PopOutcome.SKIPPED
        if stash.created:
            self._tracker.advance(Phase.POPPING)
            pop_outcome = self._pop()

        self._tracker.advance(Phase.DONE)
        return ResetSummary(
            root=root,
            repo_state=repo_state,
            protected=protected,
            stash=stash,
            wipe=wipe,
            pop_outcome=pop_outcome,
            phases=self._tracker.history,
        )

    def _check_dirty(self, excluded: tuple[str, ...]) -> RepoState:
        try:
            dirty = self._git.has_changes(excluded)
        except GitError as e:
            self._reporter.phase_failed(Phase.DIRTY_CHECK, "Could not check for changes")
            raise DirtyCheckError(
                f"Cannot determine whether there are uncommitted changes: {e.message}. "
                "Nothing was changed."
            ) from e
        return RepoState.DIRTY if dirty else RepoState.CLEAN

    def _stash(self, excluded: tuple[str, ...]) -> StashRecord:
        self._reporter.phase_started(Phase.STASHING, "Stashing current changes...")
        try:
            commit = self._git.stash_push(self._stash_message, excluded)
        except GitError as e:
            self._reporter.phase_failed(Phase.STASHING, "Failed to stash changes")
            raise StashError(
                "Cannot proceed: Failed to stash changes. Your files are safe, but "
                f"git-fresh cannot continue without successfully stashing changes. ({e.message})"
            ) from e

        try:
            still_dirty = self._git.has_changes(excluded)
        except GitError as e:
            self._reporter.phase_failed(Phase.STASHING, "Could not verify the stash")
            raise StashError(
                f"Cannot proceed: Could not verify the stash ({e.message}). Nothing was "
                f"deleted. {self._return_stash(commit)}"
            ) from e

        if still_dirty:
            self._reporter.phase_failed(Phase.STASHING, "Failed to stash changes")
            raise StashError(
                "Cannot proceed: Some changes were not stashed. Nothing was deleted. "
                f"{self._return_stash(commit)}"
            )

        if commit is None:
            self._reporter.phase_skipped(Phase.STASHING, "No changes to stash")
            return StashRecord(created=False)

        self._reporter.phase_succeeded(Phase.STASHING, "Changes stashed successfully")
        return StashRecord(created=True, commit=commit, message=self._stash_message)

    def _return_stash(self, commit: str | None) -> str:
        """Re-apply a stash created by an aborted run; return the user hint."""
        if commit is None:
            return 'Check "git status".'
        try:
            self._git.stash_pop()
        except GitError as e:
            logger.warning("Could not re-apply stash %s: %s", commit, e.message)
            return (
                f"Your changes are kept in stash {commit}; "
                'run "git stash pop" to re-apply them.'
            )
        return "Your stashed changes were re-applied."

    def _wipe(self, root: Path, protected: ProtectedPathSet) -> WipeResult:
        self._reporter.phase_started(
            Phase.WIPING, "Removing files except .git and protected files..."
        )
        result = SelectiveWiper(root).wipe(protected)
        if result.warnings:
            self._reporter.phase_warned(
                Phase.WIPING,
                f"Removed {result.removed_count} item(s), "
                f"{result.warning_count} could not be removed",
            )
        else:
            self._reporter.phase_succeeded(Phase.WIPING, "Files removed successfully")
        return result

    def _restore(self, excluded: tuple[str, ...], stash: StashRecord) -> None:
        self._reporter.phase_started(Phase.RESTORING, "Restoring files from Git...")
        try:
            restored = self._git.restore(excluded)
        except GitError as e:
            self._reporter.phase_failed(Phase.RESTORING, "Failed to restore files")
            hint = 'Run "git restore ." to restore tracked files'
            if stash.created:
                hint += ', then "git stash pop" to re-apply your changes'
            raise RestoreError(
                f"Failed to restore files from Git after the wipe: {e.message}. {hint}."
            ) from e

        if restored:
            self._reporter.phase_succeeded(Phase.RESTORING, "Files restored successfully")
        else:
            self._reporter.phase_succeeded(Phase.RESTORING, "No tracked files to restore")

    def _pop(self) -> PopOutcome:
        self._reporter.phase_started(Phase.POPPING, "Applying stashed changes...")
        try:
            self._git.stash_pop()
        except GitError as e:
            logger.warning("Stash pop failed: %s %s", e.message, e.stderr)
            self._reporter.phase_warned(
                Phase.POPPING,
                "Could not apply stashed changes (conflicts may exist). "
                'Run "git stash list" to see your stashed changes.',
            )
            return PopOutcome.CONFLICTED

        self._reporter.phase_succeeded(Phase.POPPING, "Stashed changes applied successfully")
        return PopOutcome.APPLIED
