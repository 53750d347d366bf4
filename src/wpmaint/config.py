"""Configuration management for wpmaint."""

import os
import re
from pathlib import Path
from typing import Optional, Dict, Any

import toml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wpmaint.core.exceptions import MaintenanceError
from wpmaint.core.path_utils import (
    DEFAULT_SENTINEL_NAME,
    get_installation_dir,
    get_sentinel_path,
)
from wpmaint.core.sentinel import DEFAULT_VARIABLE

CONFIG_FILE_NAME = "wpmaint.toml"
DEFAULT_DURATION = 600

_IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ConfigError(MaintenanceError):
    """Raised when configuration cannot be loaded or is invalid."""

    pass


class MaintenanceSettings(BaseModel):
    """Settings for one installation, optionally stored in wpmaint.toml."""

    model_config = ConfigDict(extra="forbid")

    installation_dir: Path = Field(description="Installation root directory")
    default_duration: int = Field(
        default=DEFAULT_DURATION,
        description="Window in seconds during which a stored timestamp counts as active",
    )
    sentinel_name: str = Field(
        default=DEFAULT_SENTINEL_NAME, description="File name of the sentinel"
    )
    variable: str = Field(
        default=DEFAULT_VARIABLE, description="Variable assigned in the sentinel"
    )

    @field_validator("default_duration")
    @classmethod
    def _positive_duration(cls, value: int) -> int:
        if value < 1:
            raise ValueError("default_duration must be greater than zero")
        return value

    @field_validator("sentinel_name")
    @classmethod
    def _plain_file_name(cls, value: str) -> str:
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"sentinel_name must be a plain file name, got '{value}'")
        return value

    @field_validator("variable")
    @classmethod
    def _identifier(cls, value: str) -> str:
        if not _IDENTIFIER_PATTERN.match(value):
            raise ValueError(f"variable must be a valid identifier, got '{value}'")
        return value

    @property
    def sentinel_path(self) -> Path:
        """Full path to the sentinel file."""
        return get_sentinel_path(self.installation_dir, self.sentinel_name)


class Config:
    """Resolves wpmaint settings for an installation."""

    def __init__(
        self,
        installation_dir: Optional[Path] = None,
        config_file: Optional[Path] = None,
    ):
        """Initialize config manager.

        Args:
            installation_dir: Installation root. If None, uses WPMAINT_PATH env var or current directory.
            config_file: Explicit settings file. If None, uses wpmaint.toml in the installation root.
        """
        self.installation_dir = get_installation_dir(installation_dir)
        self.explicit_config = config_file is not None
        self.config_path = (
            Path(config_file)
            if config_file is not None
            else self.installation_dir / CONFIG_FILE_NAME
        )
        self._settings: Optional[MaintenanceSettings] = None

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.is_file()

    def load(self) -> MaintenanceSettings:
        """Load settings from disk, with environment variable overrides."""
        data: Dict[str, Any] = {}

        if self.exists:
            try:
                with open(self.config_path, "r") as f:
                    raw = toml.load(f)
            except toml.TomlDecodeError as e:
                raise ConfigError(f"Invalid config file {self.config_path}: {e}") from e
            section = raw.get("maintenance", {})
            if not isinstance(section, dict):
                raise ConfigError(
                    f"Invalid config file {self.config_path}: [maintenance] must be a table"
                )
            data.update(section)
        elif self.explicit_config:
            raise FileNotFoundError(f"Config file not found at {self.config_path}")

        # Apply environment variable overrides
        self._apply_env_overrides(data)

        # The installation root always comes from the resolved path
        data["installation_dir"] = self.installation_dir

        try:
            self._settings = MaintenanceSettings(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid maintenance settings: {e}") from e
        return self._settings

    def _apply_env_overrides(self, data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to settings data."""
        if env_duration := os.environ.get("WPMAINT_DEFAULT_DURATION"):
            data["default_duration"] = env_duration

        if env_name := os.environ.get("WPMAINT_SENTINEL_NAME"):
            data["sentinel_name"] = env_name

        if env_variable := os.environ.get("WPMAINT_VARIABLE"):
            data["variable"] = env_variable
