"""
================================================================================
Configuration Loader
================================================================================

Typed settings for the suite: built-in defaults, overlaid by
config/config.yaml, overlaid by environment variables.

Features:
    - Every known key has a typed default (DEFAULTS), so callers can read
      `timeouts.action` without repeating its fallback
    - Environment variable override (SITE_BASE_URL overrides site.base_url),
      converted to the type of the key's default
    - Dot notation path access

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file path (repository root / config / config.yaml)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

_MISSING = object()

# Built-in settings; their types decide how string overrides are converted
DEFAULTS: Dict[str, Dict[str, Any]] = {
    "site": {
        "base_url": "https://www.arthursenko.com",
    },
    "browser": {
        "type": "chromium",
        "headless": True,
        "viewport_width": 1280,
        "viewport_height": 720,
        "mobile_viewport_width": 390,
        "mobile_viewport_height": 844,
        "availability_attempts": 3,
    },
    "timeouts": {
        "action": 5000,
        "navigation": 30000,
        "settle": 1000,
        "menu_settle": 300,
        "settle_poll_interval": 100,
    },
    "responsive": {
        "mobile_breakpoint": 768,
    },
    "rate_limit": {
        "max_retries": 3,
        "delay": 1.0,
        "backoff": 2.0,
    },
    "reporting": {
        "project": "Playwright",
        "raw_results": "test-results/results.json",
        "output": "test-results/test-result.json",
        "upload_timeout": 60,
    },
    "logging": {
        "level": "INFO",
        "rotation": "10 MB",
        "retention": "7 days",
    },
}

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay override onto a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _lookup(data: Dict[str, Any], key: str) -> Any:
    value: Any = data
    for part in key.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def convert(key: str, value: str, reference: Any) -> Any:
    """
    Convert a string setting to the type of its reference value.

    Raises:
        ConfigurationError: The string is not a valid value of that type
    """
    if reference is None or isinstance(reference, str):
        return value

    text = value.strip()
    try:
        if isinstance(reference, bool):
            lowered = text.lower()
            if lowered in TRUE_VALUES:
                return True
            if lowered in FALSE_VALUES:
                return False
            raise ValueError(f"not a boolean: {value!r}")
        if isinstance(reference, int):
            return int(text)
        if isinstance(reference, float):
            return float(text)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid value for {key}: expected {type(reference).__name__}, got {value!r}"
        ) from e

    return value


class ConfigLoader:
    """
    Configuration loader with defaults, YAML and environment variables.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (SITE_BASE_URL)
        2. YAML configuration file
        3. DEFAULTS, then the default passed to get()

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("site.base_url")
        'https://www.arthursenko.com'

        >>> config.get("timeouts.action")
        5000

    Environment Variable Mapping:
        - site.base_url -> SITE_BASE_URL
        - timeouts.settle -> TIMEOUTS_SETTLE
        - reporting.upload_url -> REPORTING_UPLOAD_URL
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton pattern - configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: Path to YAML configuration file.
                        Uses CONFIG_PATH env var, then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        env_path = os.environ.get("CONFIG_PATH")
        self._config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH)
        self._values = _merge(DEFAULTS, self._read_file())
        self._initialized = True

    def _read_file(self) -> Dict[str, Any]:
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must hold a mapping: {self._config_path}"
            )

        unknown = sorted(set(data) - set(DEFAULTS))
        if unknown:
            logger.debug(f"Sections without built-in defaults: {unknown}")
        logger.debug(f"Loaded configuration from: {self._config_path}")
        return data

    @property
    def config_path(self) -> Path:
        """Path of the loaded configuration file."""
        return self._config_path

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        String values (always the case for environment overrides) are
        converted to the type of the built-in default for the key, or of
        `default` when the key has no built-in default.

        Args:
            key: Dot-notation path (e.g., "site.base_url")
            default: Returned when the key is set nowhere

        Raises:
            ConfigurationError: A string value does not convert to the
                key's type
        """
        reference = _lookup(DEFAULTS, key)
        if reference is _MISSING:
            reference = default

        env_value = os.environ.get(key.upper().replace(".", "_"))
        if env_value is not None:
            return convert(key, env_value, reference)

        value = _lookup(self._values, key)
        if value is _MISSING or value is None:
            return default
        if isinstance(value, str):
            return convert(key, value, reference)
        return value

    @classmethod
    def reset(cls) -> None:
        """Drop the shared instance so the next ConfigLoader() reloads."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULTS",
    "DEFAULT_CONFIG_PATH",
    "convert",
]
