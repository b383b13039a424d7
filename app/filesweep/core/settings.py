"""Defaults file I/O.

This module loads and saves the optional ``config.toml`` holding
default values for the sweep options. Command-line flags override
these values; a missing file means built-in defaults.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from filesweep.core.paths import get_settings_path


class SettingsError(Exception):
    """Base exception for settings-related errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when the settings content is invalid."""


class SweepDefaults(BaseModel):
    """Defaults for the sweep options.

    Attributes:
        root: Traversal root.
        ext: Extension filter (e.g. ".log"); empty matches any.
        size: Minimum file size in bytes.
        log: Audit log file; empty writes audit records to standard output.
    """

    model_config = ConfigDict(extra="forbid")

    root: Annotated[str, Field(description="Traversal root")] = "."
    ext: Annotated[str, Field(description="Extension filter")] = ""
    size: Annotated[int, Field(ge=0, description="Minimum file size in bytes")] = 0
    log: Annotated[str, Field(description="Audit log file")] = ""


class Settings(BaseModel):
    """Complete settings file."""

    model_config = ConfigDict(extra="forbid")

    sweep: Annotated[SweepDefaults, Field(default_factory=SweepDefaults)]


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings from a TOML file.

    Args:
        path: Settings file. If None, uses the default settings path.

    Returns:
        Validated Settings; built-in defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Settings()
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings {settings_path}: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings in {settings_path}: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written to a temporary file in the same directory and
    moved into place with os.replace(). The temporary file is removed
    on failure.

    Args:
        settings: Settings to save.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = _settings_to_dict(settings)

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
            tomli_w.dump(data, f)
        os.replace(tmp_path, settings_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Convert Settings to a dictionary suitable for TOML serialization."""
    return {"sweep": settings.sweep.model_dump()}
