#!/usr/bin/env python3
"""Hierarchical configuration manager for ResourceFilter.

This module provides configuration management with:
- 6-level precedence hierarchy
- YAML configuration files
- Environment variable overrides (RESOURCEFILTER_*)
- Dot-notation lookup and deep-merged views
- Thread-safe operations

Example:
    >>> config = ConfigManager()
    >>> config.load_file("resourcefilter.yaml")
    >>> config.get("resourcefilter.query.default_limit", default=50)
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from resourcefilter.core.constants import DEFAULT_CONFIG, ErrorCode
from resourcefilter.core.validators import ValidationError, validate_config

ENV_PREFIX = "RESOURCEFILTER_"
ROOT_KEY = "resourcefilter"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    CLI_ARGS = 5
    RUNTIME = 6  # Highest precedence


class ConfigError(Exception):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ConfigManager:
    """Thread-safe hierarchical configuration manager.

    Manages configuration from multiple sources with precedence:
    1. Compiled defaults (lowest)
    2. System config (/etc/resourcefilter/config.yaml)
    3. User config (~/.config/resourcefilter/config.yaml)
    4. Environment variables (RESOURCEFILTER_*)
    5. CLI arguments
    6. Runtime updates (highest)

    All keys live under the top-level ``resourcefilter`` key.
    """

    DEFAULT_CONFIG = {ROOT_KEY: DEFAULT_CONFIG}

    def __init__(self, config_file: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_file: Optional config file to load
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_file(config_file)

        self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser().resolve()

        if not path.exists():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}", ErrorCode.INVALID_INPUT)
        except OSError as e:
            raise ConfigError(f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR)

        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}", ErrorCode.INVALID_INPUT)

        if ROOT_KEY not in config_data:
            config_data = {ROOT_KEY: config_data}

        with self._lock:
            self._config[source] = config_data

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from dictionary.

        Args:
            config_data: Configuration dictionary, with or without the root key
            source: Configuration source level
        """
        if ROOT_KEY not in config_data:
            config_data = {ROOT_KEY: config_data}
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Environment variables in format: RESOURCEFILTER_SECTION_KEY=value.
        A double underscore keeps an underscore inside a key, so
        RESOURCEFILTER_QUERY_DEFAULT__LIMIT=20 sets query.default_limit.
        """
        env_config: Dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            raw = key[len(ENV_PREFIX):].lower().replace("__", "\0")
            parts = [p.replace("\0", "_") for p in raw.split("_")]

            current = env_config
            for part in parts[:-1]:
                current = current.setdefault(part, {})

            current[parts[-1]] = self._parse_env_value(value)

        if env_config:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ROOT_KEY: env_config}

    def _parse_env_value(self, value: str) -> Any:
        """Parse environment variable value into bool, int, float or str."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "resourcefilter.root_path")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def _get_nested(self, config: Dict[str, Any], key: str) -> Optional[Any]:
        current = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})
            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources.

        Returns:
            Merged configuration dictionary
        """
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def section(self) -> Dict[str, Any]:
        """Merged contents of the ``resourcefilter`` key."""
        return self.get_all().get(ROOT_KEY, {})

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def validate(self) -> bool:
        """Validate the merged configuration.

        Raises:
            ConfigError: If validation fails
        """
        try:
            return validate_config(self.section())
        except ValidationError as e:
            raise ConfigError(str(e), e.error_code) from e

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source in self._config and source != ConfigSource.COMPILED_DEFAULTS:
                    del self._config[source]
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create global configuration manager.

    Args:
        config_file: Optional config file to load

    Returns:
        Global configuration manager
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set the global configuration manager.

    Args:
        config: Configuration manager to use globally (None resets it)
    """
    global _global_config
    _global_config = config
