"""
Runtime Configuration Module

Provides configuration loading and management for the hashtree package.
"""

from .runtime import (
    HashingConfig,
    LoggingConfig,
    RuntimeConfig,
    configure_logging,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HashingConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "configure_logging",
    "get_default_config",
    "set_default_config",
]
