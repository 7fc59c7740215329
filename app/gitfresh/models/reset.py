"""Reset run models.

This module defines the data structures produced while resetting a
working tree: the protocol phases, the repository state detected at the
start of a run, the stash created by the run, and the outcome of the
wipe phase.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from gitfresh.models.protected import ProtectedPathSet


class Phase(str, Enum):
    """Phases of the reset protocol, in execution order.

    Attributes:
        INIT: Verify the current directory belongs to a Git repository.
        DIRTY_CHECK: Detect uncommitted changes (including untracked files).
        STASHING: Stash uncommitted changes (only when dirty).
        WIPING: Delete everything except .git and protected paths.
        RESTORING: Restore tracked files from Git.
        POPPING: Re-apply the stash created by this run.
        DONE: Run completed.
    """

    INIT = "init"
    DIRTY_CHECK = "dirty_check"
    STASHING = "stashing"
    WIPING = "wiping"
    RESTORING = "restoring"
    POPPING = "popping"
    DONE = "done"


class RepoState(str, Enum):
    """Working tree state detected once per run."""

    CLEAN = "clean"
    DIRTY = "dirty"


class PopOutcome(str, Enum):
    """Outcome of re-applying the stash at the end of a run.

    Attributes:
        APPLIED: The stash was popped successfully.
        SKIPPED: No stash was created by this run.
        CONFLICTED: The pop failed; the stash entry was left in place.
    """

    APPLIED = "applied"
    SKIPPED = "skipped"
    CONFLICTED = "conflicted"


@dataclass(frozen=True, slots=True)
class StashRecord:
    """Whether this run created a stash.

    Pre-existing stashes are never tracked, only the one pushed by the run.

    Attributes:
        created: True if a stash entry was created by this run.
        commit: Commit id of the created stash entry, None if not created.
        message: Message the stash was pushed with.
    """

    created: bool
    commit: str | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        """Validate stash record consistency."""
        if self.created and not self.commit:
            msg = "A created stash must have a commit id"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class WipeWarning:
    """An entry the wipe phase could not remove or read."""

    path: str
    error: str


@dataclass(frozen=True, slots=True)
class WipeResult:
    """Outcome of the wipe phase.

    Attributes:
        removed: Relative paths removed as a unit (a directory counts once).
        warnings: Entries that could not be removed, non-fatal.
        dry_run: True if nothing was actually deleted.
    """

    removed: tuple[str, ...] = ()
    warnings: tuple[WipeWarning, ...] = ()
    dry_run: bool = False

    @property
    def removed_count(self) -> int:
        """Number of removed entries."""
        return len(self.removed)

    @property
    def warning_count(self) -> int:
        """Number of entries that could not be removed."""
        return len(self.warnings)


@dataclass(frozen=True, slots=True)
class ResetSummary:
    """Final report of a completed reset run.

    Attributes:
        root: Repository root the run operated on.
        repo_state: State detected during the dirty check.
        protected: Protected paths preserved by the wipe.
        stash: Stash created by the run.
        wipe: Result of the wipe phase.
        pop_outcome: Whether the stash was applied, skipped or conflicted.
        phases: Phases the run went through, in order.
    """

    root: Path
    repo_state: RepoState
    protected: ProtectedPathSet
    stash: StashRecord
    wipe: WipeResult
    pop_outcome: PopOutcome
    phases: tuple[Phase, ...] = field(default_factory=tuple)

    @property
    def protected_count(self) -> int:
        """Number of protected paths."""
        return len(self.protected)

    @property
    def has_warnings(self) -> bool:
        """Check if the run finished with wipe warnings or a pop conflict."""
        return self.wipe.warning_count > 0 or self.pop_outcome == PopOutcome.CONFLICTED
