"""Glob matching of protected paths.

Resolves glob-style patterns against the repository root into sorted
lists of existing relative paths. The Git metadata directory and
dependency caches (node_modules) are never matched.

Hidden entries only match when the pattern component itself starts
with a dot (``.env*`` matches ``.env.local``, ``*`` does not). When the
last component starts with a dot, ``**`` also descends into hidden
directories, so ``**/.env`` finds ``.devcontainer/.env``.
"""

import glob
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from gitfresh.models.protected import GIT_DIR_NAME, normalize_protected_path

logger = logging.getLogger(__name__)

# Well-known secret and environment file conventions.
SECRET_FILE_PATTERNS: tuple[str, ...] = (
    ".env",
    ".env.*",
    "*.env",
    ".*.env",
    "**/.env",
    "**/.env.*",
    "**/.*env",
    "**/*.env",
)

# Directories never considered for matching. .git is always added.
DEFAULT_EXCLUDED_DIRS: tuple[str, ...] = ("node_modules",)


class PatternError(ValueError):
    """Raised when a glob pattern cannot be evaluated safely."""


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Paths matched by one or more patterns.

    Attributes:
        paths: Sorted, de-duplicated relative paths.
        warnings: Non-fatal messages for patterns that could not be processed.
    """

    paths: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


def validate_pattern(pattern: str) -> str:
    """Validate a glob pattern before evaluation.

    Args:
        pattern: Glob pattern relative to the repository root.

    Returns:
        The pattern with surrounding whitespace removed.

    Raises:
        PatternError: If the pattern is empty, absolute, or escapes the root.
    """
    cleaned = pattern.strip()
    if not cleaned:
        raise PatternError("Pattern is empty")

    pure = PurePosixPath(cleaned.replace("\\", "/"))
    if pure.is_absolute():
        raise PatternError("Pattern must be relative to the repository root")
    if ".." in pure.parts:
        raise PatternError("Pattern cannot point outside the repository root")

    return cleaned


def _requests_hidden(pattern: str) -> bool:
    """A pattern naming a dot-file also searches hidden directories."""
    return PurePosixPath(pattern.replace("\\", "/")).name.startswith(".")


def _effective_excluded(excluded_dirs: Iterable[str]) -> frozenset[str]:
    return frozenset((GIT_DIR_NAME, *excluded_dirs))


def _is_excluded(path: str, excluded: frozenset[str]) -> bool:
    return any(part in excluded for part in path.split("/"))


def match_pattern(
    pattern: str,
    root: Path,
    *,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
) -> MatchResult:
    """Find existing paths under root that match a glob pattern.

    ``*`` and ``?`` never cross a ``/``; ``**`` matches any number of
    directories. Matching has no side effects. A malformed pattern
    produces an empty result with a warning instead of an error.

    Args:
        pattern: Glob pattern relative to root.
        root: Directory the pattern is evaluated in.
        excluded_dirs: Directory names never matched (in addition to .git).

    Returns:
        MatchResult with sorted relative paths.
    """
    try:
        cleaned = validate_pattern(pattern)
        raw_matches = glob.glob(
            cleaned,
            root_dir=root,
            recursive=True,
            include_hidden=_requests_hidden(cleaned),
        )
    except (PatternError, OSError) as e:
        logger.warning("Could not process glob pattern %r: %s", pattern, e)
        return MatchResult(warnings=(f'Could not process glob pattern "{pattern}": {e}',))

    excluded = _effective_excluded(excluded_dirs)
    paths: set[str] = set()
    for raw in raw_matches:
        try:
            normalized = normalize_protected_path(raw)
        except ValueError:
            continue
        if _is_excluded(normalized, excluded):
            continue
        paths.add(normalized)

    logger.debug("Pattern %r matched %d path(s)", pattern, len(paths))
    return MatchResult(paths=tuple(sorted(paths)))


def match_patterns(
    patterns: Sequence[str],
    root: Path,
    *,
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
) -> MatchResult:
    """Evaluate patterns independently and union their matches.

    Args:
        patterns: Glob patterns relative to root.
        root: Directory the patterns are evaluated in.
        excluded_dirs: Directory names never matched (in addition to .git).

    Returns:
        MatchResult with the sorted union and all warnings.
    """
    excluded = tuple(excluded_dirs)
    paths: set[str] = set()
    warnings: list[str] = []

    for pattern in patterns:
        result = match_pattern(pattern, root, excluded_dirs=excluded)
        paths.update(result.paths)
        warnings.extend(result.warnings)

    return MatchResult(paths=tuple(sorted(paths)), warnings=tuple(warnings))


def find_secret_files(
    root: Path,
    *,
    extra_patterns: Sequence[str] = (),
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
) -> MatchResult:
    """Find environment and secret files by naming convention.

    Args:
        root: Repository root.
        extra_patterns: Additional patterns appended to SECRET_FILE_PATTERNS.
        excluded_dirs: Directory names never matched (in addition to .git).

    Returns:
        MatchResult with the sorted, de-duplicated secret files.
    """
    return match_patterns(
        (*SECRET_FILE_PATTERNS, *extra_patterns),
        root,
        excluded_dirs=excluded_dirs,
    )
