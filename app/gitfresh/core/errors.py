"""Errors raised by the reset protocol.

Every error carries the phase it occurred in so the CLI can report
where the run stopped and what the user has to do next.
"""

from gitfresh.models.reset import Phase


class GitFreshError(Exception):
    """Base exception for fatal reset errors."""

    def __init__(self, message: str, phase: Phase) -> None:
        self.message = message
        self.phase = phase
        super().__init__(message)


class NotARepositoryError(GitFreshError):
    """Raised when the current directory is not inside a Git repository."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "This is not a Git repository. Please run this command in a Git repository.",
            Phase.INIT,
        )


class DirtyCheckError(GitFreshError):
    """Raised when uncommitted changes cannot be detected."""

    def __init__(self, message: str) -> None:
        super().__init__(message, Phase.DIRTY_CHECK)


class StashError(GitFreshError):
    """Raised when uncommitted changes cannot be stashed. Nothing was deleted."""

    def __init__(self, message: str) -> None:
        super().__init__(message, Phase.STASHING)


class RestoreError(GitFreshError):
    """Raised when tracked files cannot be restored after the wipe."""

    def __init__(self, message: str) -> None:
        super().__init__(message, Phase.RESTORING)


class IllegalTransitionError(GitFreshError):
    """Raised when the protocol attempts an out-of-order phase transition."""

    def __init__(self, current: Phase, requested: Phase) -> None:
        self.current = current
        self.requested = requested
        super().__init__(
            f"Illegal phase transition: {current.value} -> {requested.value}",
            current,
        )
