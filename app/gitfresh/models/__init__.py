"""Data models for git-fresh.

This module exports the protected path and reset run models.
"""

from gitfresh.models.protected import GIT_DIR_NAME, ProtectedPathSet, normalize_protected_path
from gitfresh.models.reset import (
    Phase,
    PopOutcome,
    RepoState,
    ResetSummary,
    StashRecord,
    WipeResult,
    WipeWarning,
)

__all__ = [
    "GIT_DIR_NAME",
    "Phase",
    "PopOutcome",
    "ProtectedPathSet",
    "RepoState",
    "ResetSummary",
    "StashRecord",
    "WipeResult",
    "WipeWarning",
    "normalize_protected_path",
]
