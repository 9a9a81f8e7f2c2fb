"""
================================================================================
Portfolio Tools Common Utilities
================================================================================

Shared configuration and logging setup for the suite and its tools.

Exports:
    - ConfigLoader: Singleton YAML + environment configuration
    - get_config: Convenience function to get configuration values
    - init_logger: Initialize loguru with the configured level/format

Usage:
    from portfolio_tools.common import get_config, init_logger

    init_logger()
    base_url = get_config("site.base_url")

================================================================================
"""

from typing import Any

from .config_loader import ConfigLoader, ConfigurationError
from .global_config import get_logger, init_logger, reset_logger


def get_config(key: str, default: Any = None) -> Any:
    """
    Convenience function to get a configuration value.

    Example:
        upload_url = get_config("reporting.upload_url")
    """
    return ConfigLoader().get(key, default)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "get_config",
    "get_logger",
    "init_logger",
    "reset_logger",
]
