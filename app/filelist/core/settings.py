"""List sizing settings.

This module provides the settings model and I/O functions controlling
how file lists and loop guards grow. Settings are stored in
~/.config/filelist/config.toml; a missing file means defaults.

Example config.toml::

    initial_capacity = 512
    max_entries = 1048576
"""

import logging
import os
import sys
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from filelist.core.paths import get_settings_path

logger = logging.getLogger(__name__)

# Largest element count a list may be configured for (one slot is the terminator)
MAX_ADDRESSABLE_ENTRIES = sys.maxsize - 1

DEFAULT_INITIAL_CAPACITY = 512
DEFAULT_MAX_ENTRIES = 1_048_576


class ListSettings(BaseModel):
    """Growth settings for file lists and loop guards.

    Attributes:
        initial_capacity: Number of slots a new file list starts with.
        max_entries: Hard maximum number of entries in a file list.
        growth_factor: Capacity multiplier applied when a list is full.
        guard_initial_capacity: Number of slots a new loop guard starts with.
    """

    model_config = ConfigDict(extra="forbid")

    initial_capacity: Annotated[
        int,
        Field(ge=1, description="Initial file list capacity"),
    ] = DEFAULT_INITIAL_CAPACITY
    max_entries: Annotated[
        int,
        Field(ge=1, le=MAX_ADDRESSABLE_ENTRIES, description="Maximum file list size"),
    ] = DEFAULT_MAX_ENTRIES
    growth_factor: Annotated[
        int,
        Field(ge=2, le=16, description="Capacity multiplier (2-16)"),
    ] = 2
    guard_initial_capacity: Annotated[
        int,
        Field(ge=1, description="Initial loop guard capacity"),
    ] = 512

    @model_validator(mode="after")
    def validate_capacity_bounds(self) -> "ListSettings":
        """Validate that the initial capacity does not exceed the maximum."""
        if self.initial_capacity > self.max_entries:
            msg = (
                f"initial_capacity ({self.initial_capacity}) cannot exceed "
                f"max_entries ({self.max_entries})"
            )
            raise ValueError(msg)
        return self


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> ListSettings:
    """Load list settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated ListSettings; defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or the content doesn't match the schema.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return ListSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return ListSettings.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: ListSettings, path: Path | None = None) -> Path:
    """Save list settings to a TOML file.

    The file is written to a temporary file in the same directory and
    then moved into place with os.replace().

    Args:
        settings: The settings to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
