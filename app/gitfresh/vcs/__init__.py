"""Version control operations.

This module exports the Git wrapper used by the reset protocol.
"""

from gitfresh.vcs.git import DEFAULT_STASH_MESSAGE, GitError, GitRepository, build_pathspec

__all__ = [
    "DEFAULT_STASH_MESSAGE",
    "GitError",
    "GitRepository",
    "build_pathspec",
]
