"""User configuration for git-fresh.

Defaults for the command-line flags and the protection rules can be set
in ~/.config/git-fresh/config.toml:

    ignore_env_files = true
    protect_patterns = ["*.local", "certs/**"]
    secret_patterns = ["**/secrets.json"]
    excluded_dirs = ["node_modules", ".venv"]
    stash_message = "git-fresh: temporary stash"

A missing file means defaults. Flags given on the command line enable
features on top of the configured defaults.
"""

import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gitfresh.core.paths import get_config_path
from gitfresh.models.protected import GIT_DIR_NAME
from gitfresh.protection.matcher import DEFAULT_EXCLUDED_DIRS
from gitfresh.vcs.git import DEFAULT_STASH_MESSAGE

logger = logging.getLogger(__name__)


class FreshConfig(BaseModel):
    """Configuration for a git-fresh run.

    Attributes:
        protect_patterns: Glob patterns always protected.
        ignore_env_files: Protect secret files by default.
        skip_confirmation: Protect all secret files without prompting.
        secret_patterns: Extra secret-file conventions.
        excluded_dirs: Directory names never matched by patterns.
        stash_message: Message of the temporary stash.
    """

    model_config = ConfigDict(extra="forbid")

    protect_patterns: Annotated[
        list[str],
        Field(description="Glob patterns always protected from the wipe"),
    ] = []
    ignore_env_files: Annotated[
        bool,
        Field(description="Protect environment files by default"),
    ] = False
    skip_confirmation: Annotated[
        bool,
        Field(description="Protect all environment files without prompting"),
    ] = False
    secret_patterns: Annotated[
        list[str],
        Field(description="Extra environment/secret file patterns"),
    ] = []
    excluded_dirs: Annotated[
        list[str],
        Field(description="Directory names never matched by patterns"),
    ] = list(DEFAULT_EXCLUDED_DIRS)
    stash_message: Annotated[
        str,
        Field(min_length=1, description="Message of the temporary stash"),
    ] = DEFAULT_STASH_MESSAGE

    @field_validator("protect_patterns", "secret_patterns")
    @classmethod
    def strip_patterns(cls, v: list[str]) -> list[str]:
        """Drop blank patterns and surrounding whitespace."""
        return [pattern.strip() for pattern in v if pattern.strip()]

    @field_validator("excluded_dirs")
    @classmethod
    def validate_excluded_dirs(cls, v: list[str]) -> list[str]:
        """Excluded entries must be plain directory names."""
        for name in v:
            if not name or "/" in name or name in (".", ".."):
                msg = f"excluded_dirs entries must be directory names, got {name!r}"
                raise ValueError(msg)
        # .git is always excluded by the matcher; listing it is redundant.
        return [name for name in v if name != GIT_DIR_NAME]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed."""


def load_config(path: Path | None = None) -> FreshConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FreshConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return FreshConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return FreshConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e
