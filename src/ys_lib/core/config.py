# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for ys.

This module defines dataclasses representing the configurable aspects of ys
itself: names of session files, environment variables, presentation settings,
date formats, and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance. Note that this is the
configuration of the tool, not the cluster configuration that ys resolves.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class FileNames:
    """File names used by ys."""

    # Prefix of the session properties file (`.<prefix>-properties-<user>`).
    properties_prefix: str = "yarn"
    # Name of the base cluster configuration file inside a configuration directory.
    base_config: str = "config.yaml"

    def propertiesFile(self, user: str) -> str:
        """Name of the session properties file for the given user."""
        return f".{self.properties_prefix}-properties-{user}"


@dataclass
class EnvironmentVariables:
    """Environment variable names used by ys."""

    # Enables ys debug mode.
    debug_mode: str = "YS_DEBUG"
    # Path to the ys config file.
    config: str = "YS_CONFIG"
    # Directory containing the base cluster configuration.
    conf_dir: str = "YS_CONF_DIR"


@dataclass
class SessionSettings:
    """Settings for session properties files."""

    # Key holding the application ID of the session.
    application_id_key: str = "applicationID"
    # Key holding the `host:port` address of the job manager.
    job_manager_key: str = "jobManager"
    # Key holding dynamic properties of the session.
    dynamic_properties_key: str = "dynamicPropertiesString"
    # Separator of dynamic properties in the session file.
    dynamic_properties_separator: str = "@@"


@dataclass
class PlanPanelSettings:
    """Settings for the panel showing the resolved cluster plan."""

    # Maximal width of the panel.
    max_width: int | None = None
    # Minimal width of the panel.
    min_width: int | None = 80
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style of the separators between individual sections of the panel.
    rule_style: str = "white"
    # Style used for the keys.
    key_style: str = "default bold"
    # Style used for values.
    value_style: str = "white"
    # Style used for notes.
    notes_style: str = "grey50"


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used by ys.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of ys commands.
    default: int = 91
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class SizeOptions:
    """Options associated with the MemorySize dataclass."""

    # Maximal error acceptable when rounding MemorySize values for display.
    max_rounding_error: float = 0.1


@dataclass
class Config:
    """Main configuration for ys."""

    file_names: FileNames = field(default_factory=FileNames)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    session: SessionSettings = field(default_factory=SessionSettings)
    plan_panel: PlanPanelSettings = field(default_factory=PlanPanelSettings)
    date_formats: DateFormats = field(default_factory=DateFormats)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    size: SizeOptions = field(default_factory=SizeOptions)

    # Name of the ys binary.
    binary_name: str = "ys"

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
            raise ValueError(f"Could not read ys config '{config_path}': {e}.")

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
            Path(env_path) if (env_path := os.getenv("YS_CONFIG")) else None,
            # 2. Current working directory
            Path.cwd() / "ys_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "ys"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Unknown keys are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        name = field_info.name
        if name not in data:
            continue

        value = data[name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            field_values[name] = _dict_to_dataclass(field_info.type, value)
        else:
            field_values[name] = value

    return cls(**field_values)


# Global configuration for ys.
CFG = Config.load()
