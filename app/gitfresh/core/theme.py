"""Console colors for git-fresh.

Colors ship in ``gitfresh/data/theme.toml``. Any subset can be replaced
from the user's ``theme.toml``; an override that fails validation is
ignored as a whole and the bundled colors stay in effect.
"""

import logging
import re
import tomllib
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from gitfresh.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"#(?:[0-9a-fA-F]{3}){1,2}")


class ThemeColors(BaseModel):
    """Hex colors for each kind of console output."""

    model_config = ConfigDict(extra="forbid")

    muted: str = "#b2bec3"
    accent: str = "#0ec1c8"
    header: str = "#69B9A1"
    border: str = "#29526d"
    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    protected: str = "#c1ff62"
    removed: str = "#f53263"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object) -> str:
        if not isinstance(value, str) or not _HEX_COLOR.fullmatch(value.strip()):
            raise ValueError(f"expected a #RGB or #RRGGBB color, got {value!r}")
        return value.strip()

    def styles(self) -> dict[str, str]:
        """Map Rich style names used in console markup to style definitions."""
        return {
            "muted": self.muted,
            "dim": self.muted,
            "title": f"bold {self.accent}",
            "bold_header": f"bold {self.header}",
            "border": self.border,
            "success": self.success,
            "warning": self.warning,
            "error": f"bold {self.error}",
            "protected": self.protected,
            "removed": self.removed,
        }


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped inside the package."""
    return Path(str(resources.files("gitfresh.data").joinpath("theme.toml")))


def read_theme_file(path: Path) -> dict[str, object]:
    """Return the ``[colors]`` table of a theme file.

    A missing file is an empty table. Unreadable or malformed files are
    logged and also treated as empty.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] must be a table", path)
        return {}
    return colors


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Build the theme from the bundled colors and the user's overrides.

    Args:
        user_path: Override file; defaults to the XDG config location.
    """
    bundled = ThemeColors.model_validate(read_theme_file(get_bundled_theme_path()))

    path = user_path or get_user_theme_path()
    overrides = read_theme_file(path)
    if not overrides:
        return bundled

    try:
        return ThemeColors.model_validate({**bundled.model_dump(), **overrides})
    except ValidationError as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return bundled


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Create a Rich theme from colors, loading them when not given."""
    return Theme((colors or load_theme()).styles())


_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the process-wide Rich theme, building it on first use."""
    global _theme
    if _theme is None:
        _theme = get_rich_theme()
    return _theme
