"""
Configuration management for brokermeta.

Handles loading and merging configuration from:
- Built-in defaults
- A YAML configuration file (explicit path or BROKERMETA_CONFIG)
- Environment variables
- Command-line arguments (applied by the caller through set())
"""

import os
from typing import Any, Dict, Optional

import yaml

from brokermeta.errors import ConfigError

DEFAULT_CONFIG: Dict[str, Any] = {
    "kafka": {
        "brokers": ["localhost:9092"],
        "client_id": "brokermeta",
        "request_timeout_ms": 10000,
        "metadata_version": 5,
    },
    "logging": {
        "level": "WARNING",
        "format": "console",
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("console", "json")


def split_brokers(value: str) -> list:
    """Split a comma separated broker list, dropping blanks."""
    return [b.strip() for b in value.split(",") if b.strip()]


class Config:
    """Configuration manager for brokermeta."""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to a YAML configuration file. If None, the
                BROKERMETA_CONFIG environment variable is consulted.

        Raises:
            ConfigError: If the file is missing or a value is invalid
        """
        self._config: Dict[str, Any] = self._deep_merge({}, DEFAULT_CONFIG)

        config_file = config_file or os.getenv("BROKERMETA_CONFIG")
        if config_file:
            self._load_config_file(config_file)

        self._apply_env_overrides()
        self._validate_logging()

    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from YAML file.

        Args:
            config_file: Path to YAML configuration file
        """
        try:
            with open(config_file, "r") as f:
                file_config = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"cannot read {config_file}: {e.strerror}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_file}: {e}") from e

        if file_config is None:
            return
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_file} must contain a mapping")
        self._merge_config(file_config)

    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        self._config = self._deep_merge(self._config, new_config)

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            elif isinstance(value, dict):
                result[key] = self._deep_merge({}, value)
            else:
                result[key] = value
        return result

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if brokers := os.getenv("BROKERMETA_BROKERS"):
            self.set("kafka.brokers", split_brokers(brokers))

        if client_id := os.getenv("BROKERMETA_CLIENT_ID"):
            self.set("kafka.client_id", client_id)

        if timeout := os.getenv("BROKERMETA_REQUEST_TIMEOUT_MS"):
            self.set("kafka.request_timeout_ms", self._to_int("BROKERMETA_REQUEST_TIMEOUT_MS", timeout))

        if version := os.getenv("BROKERMETA_METADATA_VERSION"):
            self.set("kafka.metadata_version", self._to_int("BROKERMETA_METADATA_VERSION", version))

        if log_level := os.getenv("LOG_LEVEL"):
            self.set("logging.level", log_level)

        if log_format := os.getenv("LOG_FORMAT"):
            self.set("logging.format", log_format)

    @staticmethod
    def _to_int(name: str, value: str) -> int:
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"{name} must be an integer, got {value!r}") from None

    def _validate_logging(self) -> None:
        """Normalize and check the logging.* settings."""
        level = str(self.get("logging.level")).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"logging.level must be one of {', '.join(LOG_LEVELS)}, got {self.get('logging.level')!r}"
            )
        self.set("logging.level", level)

        log_format = self.get("logging.format")
        if log_format not in LOG_FORMATS:
            raise ConfigError(
                f"logging.format must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}"
            )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key: Configuration key in dot notation (e.g., "kafka.brokers")
            default: Default value if key not found

        Returns:
            Configuration value
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.

        Args:
            key: Configuration key in dot notation
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value


# Global configuration instance
_config: Optional[Config] = None


def get_config(config_file: Optional[str] = None) -> Config:
    """
    Get global configuration instance.

    Args:
        config_file: Optional configuration file path

    Returns:
        Configuration instance
    """
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
