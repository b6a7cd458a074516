"""Tree configuration and settings.

This module provides the configuration model and I/O functions for the
selection tree: hidden-entry filtering and the optional file-set cache.

Configuration is stored in ~/.config/ctxgen/config.toml
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ctxgen.core.paths import get_config_path

logger = logging.getLogger(__name__)


class TreeConfig(BaseModel):
    """Configuration for the selection tree.

    Attributes:
        exclude_hidden: Leave hidden entries out of directory listings.
        hidden_prefix: Name prefix that marks an entry as hidden.
        cache_file_sets: Memoize descendant file lists between refreshes.
    """

    model_config = ConfigDict(extra="forbid")

    exclude_hidden: Annotated[
        bool,
        Field(description="Exclude hidden entries from listings"),
    ] = True
    hidden_prefix: Annotated[
        str,
        Field(min_length=1, description="Name prefix marking hidden entries"),
    ] = "."
    cache_file_sets: Annotated[
        bool,
        Field(description="Memoize descendant file lists until refresh"),
    ] = False


class ConfigError(Exception):
    """Base exception for tree configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_tree_config(path: Path | None = None) -> TreeConfig:
    """Load tree configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TreeConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return TreeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_tree_config_or_default(path: Path | None = None) -> TreeConfig:
    """Load tree configuration, falling back to defaults.

    A missing file silently yields defaults; an unreadable or invalid file
    is logged and also yields defaults.
    """
    try:
        return load_tree_config(path)
    except ConfigNotFoundError:
        return TreeConfig()
    except ConfigError as e:
        logger.warning("Ignoring config, using defaults: %s", e)
        return TreeConfig()


def save_tree_config(config: TreeConfig, path: Path | None = None) -> Path:
    """Save tree configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TreeConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: TreeConfig) -> dict[str, object]:
    """Convert TreeConfig to a dictionary for TOML serialization.

    Only non-default values are included to keep the file clean.
    """
    return config.model_dump(exclude_defaults=True)
