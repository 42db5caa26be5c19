"""
Configuration management for cmdctl.

Provides a configuration file at ~/.cmdctl/config.json for default settings.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


# Default values - single source of truth
DEFAULTS = {
    "max_workers": 4,
    "log_level": "WARNING",
    "log_file": None,
    "simple": False,
    "prompt": "> ",
}


class Config(BaseModel):
    """Configuration settings for cmdctl.

    All settings are optional. Use DEFAULTS for default values.
    """

    model_config = {"extra": "ignore", "validate_assignment": True}  # Ignore unknown fields like _comment

    # Execution settings
    max_workers: Optional[int] = Field(
        default=None,
        ge=1,
        description="Worker threads used to run commands"
    )

    # Logging settings
    log_level: Optional[str] = Field(
        default=None,
        description="Console log level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Append full logs to this file"
    )

    # REPL settings
    simple: Optional[bool] = Field(
        default=None,
        description="Use simple REPL (no prompt_toolkit)"
    )
    prompt: Optional[str] = Field(
        default=None,
        description="REPL prompt string"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Get a config value with fallback to DEFAULTS, then to provided default."""
        value = getattr(self, key, None)
        if value is not None:
            return value
        return DEFAULTS.get(key, default)


class ConfigManager:
    """Manages loading and saving configuration."""

    CONFIG_DIR = Path.home() / ".cmdctl"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def __init__(self):
        self._config: Optional[Config] = None

    def _ensure_dir(self) -> None:
        self.CONFIG_DIR.mkdir(parents=True, exist_ok=True)

    def _read_raw(self) -> dict[str, Any]:
        if not self.CONFIG_FILE.exists():
            return {}
        try:
            data = json.loads(self.CONFIG_FILE.read_text())
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}

    @property
    def config(self) -> Config:
        """Get the current config, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self, create_if_missing: bool = True) -> Config:
        """Load configuration from file.

        Args:
            create_if_missing: If True, create default config file if it doesn't exist.

        Returns:
            Config object with loaded settings, or defaults if file doesn't exist.
        """
        if not self.CONFIG_FILE.exists():
            if create_if_missing:
                self._create_default_config()
            return Config()

        try:
            data = json.loads(self.CONFIG_FILE.read_text())
            return Config.model_validate(data)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"Invalid config file {self.CONFIG_FILE} ({e}), using defaults")
            return Config()

    def _create_default_config(self) -> None:
        """Create default config file with actual default values."""
        self._ensure_dir()
        default_config = {"_comment": "cmdctl configuration file", **DEFAULTS}
        self.CONFIG_FILE.write_text(json.dumps(default_config, indent=2) + "\n")

    def save(self, config: Optional[Config] = None) -> Path:
        """Save configuration to file, preserving existing structure.

        Args:
            config: Config to save. If None, saves current config.

        Returns:
            Path to saved config file.
        """
        self._ensure_dir()
        if config is not None:
            self._config = config

        if self._config is None:
            self._config = Config()

        existing_data = self._read_raw()
        for key, value in self._config.model_dump().items():
            if value is not None:
                existing_data[key] = value

        self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")
        return self.CONFIG_FILE

    def set(self, key: str, value: Any) -> None:
        """Set a config value and save.

        Raises:
            ValueError: For unknown keys or values the model rejects.
        """
        self._config = self.load(create_if_missing=True)

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        setattr(self._config, key, value)
        self.save()

    def unset(self, key: str) -> None:
        """Remove a config value (reset to default)."""
        self._config = self.load(create_if_missing=True)

        if key not in Config.model_fields:
            raise ValueError(f"Unknown config key: {key}")

        setattr(self._config, key, None)

        existing_data = self._read_raw()
        if key in existing_data:
            existing_data[key] = None

        self._ensure_dir()
        self.CONFIG_FILE.write_text(json.dumps(existing_data, indent=2) + "\n")

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def list_settings(self) -> dict[str, Any]:
        """List user-customized settings (values that differ from defaults)."""
        result = {}
        for k, v in self.config.model_dump().items():
            if v is None:
                continue
            if k not in DEFAULTS or v != DEFAULTS[k]:
                result[k] = v
        return result

    def reset(self) -> None:
        """Reset configuration to defaults."""
        self._config = Config()
        if self.CONFIG_FILE.exists():
            self.CONFIG_FILE.unlink()


# Singleton instance
_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the singleton ConfigManager instance."""
    global _manager
    if _manager is None:
        _manager = ConfigManager()
    return _manager


def get_config() -> Config:
    """Get the current configuration."""
    return get_config_manager().config
