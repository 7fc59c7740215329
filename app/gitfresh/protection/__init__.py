"""Protected path matching and resolution.

This module provides glob matching against the working tree, secret
file detection, and merging of all protection sources.
"""

from gitfresh.protection.matcher import (
    DEFAULT_EXCLUDED_DIRS,
    SECRET_FILE_PATTERNS,
    MatchResult,
    PatternError,
    find_secret_files,
    match_pattern,
    match_patterns,
)
from gitfresh.protection.resolver import (
    ProtectAll,
    ProtectedPathResolver,
    ProtectionReport,
    ProtectionRequest,
    ProtectNone,
    ProtectSelected,
    SecretChoice,
    SecretFileSelector,
    SecretSelection,
    apply_selection,
)

__all__ = [
    "DEFAULT_EXCLUDED_DIRS",
    "SECRET_FILE_PATTERNS",
    "MatchResult",
    "PatternError",
    "ProtectAll",
    "ProtectNone",
    "ProtectSelected",
    "ProtectedPathResolver",
    "ProtectionReport",
    "ProtectionRequest",
    "SecretChoice",
    "SecretFileSelector",
    "SecretSelection",
    "apply_selection",
    "find_secret_files",
    "match_pattern",
    "match_patterns",
]
