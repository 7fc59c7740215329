"""Protected path resolution.

Merges the protection sources of a run into one ProtectedPathSet:
user-supplied glob patterns and, optionally, secret files detected by
naming convention. Secret files go through a selection strategy that is
either applied automatically (non-interactive) or chosen by the user.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gitfresh.models.protected import ProtectedPathSet
from gitfresh.protection.matcher import (
    DEFAULT_EXCLUDED_DIRS,
    find_secret_files,
    match_pattern,
)

logger = logging.getLogger(__name__)


class SecretChoice(str, Enum):
    """Choices offered when secret files are detected interactively."""

    ALL = "all"
    SELECT = "select"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class ProtectAll:
    """Protect every detected secret file."""


@dataclass(frozen=True, slots=True)
class ProtectNone:
    """Protect no detected secret file."""


@dataclass(frozen=True, slots=True)
class ProtectSelected:
    """Protect an individually selected subset of detected secret files."""

    paths: tuple[str, ...]


SecretSelection = ProtectAll | ProtectNone | ProtectSelected

# Presents the detected secret files and returns the user's selection.
SecretFileSelector = Callable[[Sequence[str]], SecretSelection]


def apply_selection(selection: SecretSelection, detected: Sequence[str]) -> tuple[str, ...]:
    """Apply a selection strategy to the detected secret files.

    Selected paths that were not detected are ignored.

    Args:
        selection: Strategy chosen for the detected files.
        detected: Secret files found in the working tree.

    Returns:
        The secret files to protect, in detection order.
    """
    if isinstance(selection, ProtectAll):
        return tuple(detected)
    if isinstance(selection, ProtectNone):
        return ()
    chosen = set(selection.paths)
    return tuple(path for path in detected if path in chosen)


@dataclass(frozen=True, slots=True)
class ProtectionRequest:
    """Inputs that determine the protected paths of a run.

    Attributes:
        glob_patterns: User-supplied glob patterns, evaluated independently.
        protect_secret_files: Whether to detect and protect secret files.
        interactive: Whether the user chooses which secret files to protect.
        extra_secret_patterns: Additional secret-file conventions.
    """

    glob_patterns: tuple[str, ...] = ()
    protect_secret_files: bool = False
    interactive: bool = True
    extra_secret_patterns: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ProtectionReport:
    """Resolved protected paths and how they were obtained.

    Attributes:
        protected: Union of all protected paths.
        pattern_matches: Matches per glob pattern, in pattern order.
        secret_files: Secret files detected (empty if not requested).
        protected_secret_files: Secret files chosen for protection.
        warnings: Non-fatal matcher warnings.
    """

    protected: ProtectedPathSet
    pattern_matches: tuple[tuple[str, tuple[str, ...]], ...] = ()
    secret_files: tuple[str, ...] = ()
    protected_secret_files: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class ProtectedPathResolver:
    """Builds the ProtectedPathSet for a run.

    Performs no I/O of its own beyond delegating to the matcher and the
    injected selector.

    Args:
        root: Repository root the patterns are evaluated in.
        selector: Callback used for interactive secret-file selection.
        excluded_dirs: Directory names never matched (in addition to .git).
    """

    def __init__(
        self,
        root: Path,
        *,
        selector: SecretFileSelector | None = None,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ) -> None:
        self._root = root
        self._selector = selector
        self._excluded_dirs = tuple(excluded_dirs)

    def resolve(self, request: ProtectionRequest) -> ProtectionReport:
        """Resolve the protected paths for a request.

        Args:
            request: Protection sources to evaluate.

        Returns:
            ProtectionReport with the merged protected set.

        Raises:
            ValueError: If interactive selection is needed but no selector is set.
        """
        accumulated: list[str] = []
        warnings: list[str] = []
        pattern_matches: list[tuple[str, tuple[str, ...]]] = []

        for pattern in request.glob_patterns:
            result = match_pattern(pattern, self._root, excluded_dirs=self._excluded_dirs)
            pattern_matches.append((pattern, result.paths))
            accumulated.extend(result.paths)
            warnings.extend(result.warnings)

        secret_files: tuple[str, ...] = ()
        protected_secrets: tuple[str, ...] = ()
        if request.protect_secret_files:
            found = find_secret_files(
                self._root,
                extra_patterns=request.extra_secret_patterns,
                excluded_dirs=self._excluded_dirs,
            )
            secret_files = found.paths
            warnings.extend(found.warnings)

            if secret_files:
                selection = self._select(secret_files, interactive=request.interactive)
                protected_secrets = apply_selection(selection, secret_files)
                accumulated.extend(protected_secrets)
            else:
                logger.info("No secret files found")

        protected = ProtectedPathSet(accumulated)
        logger.debug("Resolved %d protected path(s)", len(protected))

        return ProtectionReport(
            protected=protected,
            pattern_matches=tuple(pattern_matches),
            secret_files=secret_files,
            protected_secret_files=protected_secrets,
            warnings=tuple(warnings),
        )

    def _select(self, detected: tuple[str, ...], *, interactive: bool) -> SecretSelection:
        if not interactive:
            return ProtectAll()
        if self._selector is None:
            msg = "Interactive secret file selection requires a selector"
            raise ValueError(msg)
        return self._selector(detected)
