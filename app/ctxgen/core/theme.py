"""Color theme for the ctxgen CLI.

Selection markers and entry names are colored by style name. Colors come
from the bundled ``data/theme.toml``, overridden key by key by the user's
``theme.toml`` in the config directory.
"""

import logging
import string
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from ctxgen.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

# Rich style name -> (color field, bold)
_STYLE_FIELDS: dict[str, tuple[str, bool]] = {
    "text": ("text", False),
    "muted": ("muted", False),
    "dim": ("muted", False),
    "header": ("header", False),
    "bold_header": ("header", True),
    "border": ("border", False),
    "success": ("success", False),
    "warning": ("warning", False),
    "error": ("error", True),
    "info": ("info", False),
    "selected": ("selected", True),
    "partial": ("partial", False),
    "unselected": ("unselected", False),
    "directory": ("directory", True),
    "file": ("file", False),
}


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the CLI."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # Selection markers
    selected: str = "#03b971"
    partial: str = "#faf870"
    unselected: str = "#b2bec3"

    directory: str = "#0e8ac8"
    file: str = "#ffffff"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a #RGB or #RRGGBB string."""
        field = info.field_name
        if not isinstance(v, str):
            raise ValueError(f"{field}: color must be a string")

        color = v.strip()
        digits = color.removeprefix("#")
        if digits == color:
            raise ValueError(f"{field}: color must start with '#'")
        if len(digits) not in (3, 6):
            raise ValueError(f"{field}: color must be #RGB or #RRGGBB format")
        if not set(digits) <= set(string.hexdigits):
            raise ValueError(f"{field}: invalid hex color '{color}'")
        return color


def get_bundled_theme_path() -> Path:
    """Path of the theme file shipped in ``ctxgen.data``."""
    return resources.files("ctxgen.data").joinpath("theme.toml")  # type: ignore[return-value]


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the string entries of a theme file's ``[colors]`` table.

    Returns None when the file is missing, unreadable or malformed.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse TOML file %s: %s", path, e)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    section = data.get("colors", {})
    if not isinstance(section, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {str(key): value for key, value in section.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge the bundled colors with the user's overrides.

    Falls back to the model defaults when the merged colors do not
    validate.
    """
    colors = _load_toml_colors(Path(get_bundled_theme_path()))
    if colors is None:
        logger.error("Failed to load bundled theme - installation may be corrupted")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d theme override(s) from %s", len(overrides), user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors(**colors)
    except ValidationError as e:
        logger.warning("Theme validation failed, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme for ``colors`` (loaded from disk if omitted)."""
    colors = colors or load_theme()
    styles: dict[str, str] = {}
    for style, (field, bold) in _STYLE_FIELDS.items():
        color = getattr(colors, field)
        styles[style] = f"bold {color}" if bold else color
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Rich theme shared by the CLI consoles, loaded once per process."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme
