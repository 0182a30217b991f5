# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for dirzip.

This module defines dataclasses representing all configurable aspects of dirzip,
including environment variables, archiver and extractor options, presentation
settings, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by dirzip."""

    # Enables dirzip debug mode.
    debug_mode: str = "DZ_DEBUG"


@dataclass
class ArchiverSettings:
    """Settings for Archiver operations."""

    # Deflate compression level (0-9).
    compress_level: int = 6
    # Size (in bytes) of the blocks streamed from source files into the archive.
    chunk_size: int = 1024 * 1024
    # Delete the partially written archive if archiving fails.
    remove_partial_archive: bool = True
    # Unix mode bits stored for file entries.
    file_mode: int = 0o644
    # Unix mode bits stored for directory entries.
    dir_mode: int = 0o755


@dataclass
class ExtractorSettings:
    """Settings for Extractor operations."""

    # Size (in bytes) of the blocks streamed from the archive into destination files.
    chunk_size: int = 1024 * 1024


@dataclass
class ListPresenterSettings:
    """Settings for ListPresenter."""

    # Style used for table headers.
    headers_style: str = "default"
    # Style used for file entries.
    file_style: str = "white"
    # Style used for directory entries.
    dir_style: str = "bright_blue"
    # Style used for the summary line.
    summary_style: str = "grey70"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by dirzip.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of dirzip commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for dirzip."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    archiver: ArchiverSettings = field(default_factory=ArchiverSettings)
    extractor: ExtractorSettings = field(default_factory=ExtractorSettings)
    list_presenter: ListPresenterSettings = field(
        default_factory=ListPresenterSettings
    )
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the dirzip binary.
    binary_name: str = "dirzip"
    # Suffix of archives created by dirzip when no archive path is given.
    archive_suffix: str = ".zip"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read dirzip config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path) if (env_path := os.getenv("DZ_CONFIG")) else None,
            # 2. Current working directory (for development/override)
            Path.cwd() / "dirzip_config.toml",
            # 3. XDG config home (standard user config location)
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "dirzip"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Handles nested dataclasses properly.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        field_name = field_info.name
        field_type = field_info.type

        if field_name in data:
            value = data[field_name]
            if is_dataclass(field_type) and isinstance(value, dict):
                field_values[field_name] = _dict_to_dataclass(field_type, value)
            else:
                field_values[field_name] = value

    return cls(**field_values)


# Global configuration for dirzip.
CFG = Config.load()
