"""Centralized configuration management for Notexia.

Supports:
- Built-in defaults
- User overrides from notexia.yaml (or the file named by NOTEXIA_CONFIG)
- Environment variable overrides (NOTEXIA_*)
- Nested key access with dot notation
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

__all__ = [
    "DEFAULTS",
    "Config",
    "ConfigError",
    "default_config_path",
    "get_config",
    "load_config",
    "reset_config",
    "save_config",
    "set_config_value",
]

DEFAULT_CONFIG_FILE = "notexia.yaml"

DEFAULTS: dict[str, Any] = {
    "vault": {"path": None},
    "logging": {"level": "INFO", "dir": None},
}

# Environment variable -> dotted config key
ENV_MAPPINGS = {
    "NOTEXIA_VAULT_PATH": "vault.path",
    "NOTEXIA_LOG_LEVEL": "logging.level",
    "NOTEXIA_LOG_DIR": "logging.dir",
}

_config_instance: Config | None = None


def default_config_path() -> Path:
    """User config file: $NOTEXIA_CONFIG or notexia.yaml in the working directory."""
    return Path(os.environ.get("NOTEXIA_CONFIG", DEFAULT_CONFIG_FILE))


class ConfigError(Exception):
    """Raised when a configuration file is unreadable or malformed."""


class Config:
    """Configuration with defaults, file overrides and env vars.

    Configuration priority (highest to lowest):
    1. Environment variables (NOTEXIA_*)
    2. User config (notexia.yaml)
    3. Built-in defaults

    Example:
        >>> config = Config.load()
        >>> vault_path = config.get("vault.path")
        >>> level = config.get("logging.level", "INFO")
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}

    @classmethod
    def load(cls, config_path: str | Path | None = None) -> Config:
        """Load configuration from file and environment.

        Parameters
        ----------
        config_path
            Path to user config file (default: $NOTEXIA_CONFIG or notexia.yaml)

        Returns
        -------
        Config
            Loaded configuration instance

        Raises
        ------
        ConfigError
            If the config file exists but cannot be parsed
        """
        if config_path is None:
            config_path = default_config_path()

        path = Path(config_path)
        user_config = cls._load_yaml_file(path) if path.exists() else {}

        merged = cls._deep_merge(copy.deepcopy(DEFAULTS), user_config)
        merged = cls._apply_env_overrides(merged)

        return cls(merged)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key.

        ``"vault.path"`` reads ``config["vault"]["path"]``. Returns
        ``default`` when the key is missing or set to null.
        """
        value: Any = self._data

        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return default if value is None else value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value by dotted key."""
        parts = key.split(".")
        data = self._data

        for part in parts[:-1]:
            if not isinstance(data.get(part), dict):
                data[part] = {}
            data = data[part]

        data[parts[-1]] = value

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    @property
    def vault_path(self) -> Path | None:
        value = self.get("vault.path")
        return Path(value).expanduser() if value else None

    @property
    def log_dir(self) -> Path | None:
        value = self.get("logging.dir")
        return Path(value).expanduser() if value else None

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    @staticmethod
    def _load_yaml_file(path: Path) -> dict[str, Any]:
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Failed to load config from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")

        return data

    @staticmethod
    def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = Config._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
        result = config.copy()

        for env_var, config_key in ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value is None:
                continue

            parts = config_key.split(".")
            data = result
            for part in parts[:-1]:
                if not isinstance(data.get(part), dict):
                    data[part] = {}
                data = data[part]
            data[parts[-1]] = value

        return result


def get_config() -> Config:
    """Get global configuration instance (loaded on first use)."""
    global _config_instance

    if _config_instance is None:
        _config_instance = Config.load()

    return _config_instance


def reset_config() -> None:
    """Drop the cached global configuration."""
    global _config_instance
    _config_instance = None


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from disk and environment, bypassing the cache."""
    return Config.load(config_path=config_path)


def save_config(config: Config | dict[str, Any], config_path: str | Path | None = None) -> Path:
    """Write configuration to a YAML file.

    Returns
    -------
    Path
        File written

    Raises
    ------
    ConfigError
        If the file cannot be written
    """
    path = Path(config_path) if config_path else default_config_path()
    data = config.to_dict() if isinstance(config, Config) else config

    try:
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=True)
    except OSError as exc:
        raise ConfigError(f"Failed to save config to {path}: {exc}") from exc

    return path


def set_config_value(key: str, value: Any, config_path: str | Path | None = None) -> Path:
    """Set one dotted key in the user config file and save it.

    Only the file is rewritten: defaults and environment overrides are not
    copied into it.

    Example:
        >>> set_config_value("vault.path", "~/notes")
        PosixPath('notexia.yaml')

    Raises
    ------
    ConfigError
        If the existing file is malformed or the file cannot be written
    """
    path = Path(config_path) if config_path else default_config_path()
    config = Config(Config._load_yaml_file(path) if path.exists() else {})
    config.set(key, value)
    return save_config(config, path)
