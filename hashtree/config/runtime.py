"""
Runtime Configuration

Central configuration for digest selection and logging.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class HashingConfig:
    """Configuration for the digest function used by trees and leaf lists."""
    algorithm: str = "md5"
    encoding: str = "utf-8"


@dataclass
class LoggingConfig:
    """Configuration for package logging."""
    level: str = "INFO"
    debug: bool = False


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the hashtree package.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_DIGEST_ALGORITHM: hashlib algorithm name (md5, sha256, ...)
        - HASHTREE_ENCODING: text encoding for str items
        - HASHTREE_LOG_LEVEL: logging level name
        - HASHTREE_DEBUG: Enable debug logging (true/false)
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_DIGEST_ALGORITHM"):
            overrides.setdefault("hashing", {})["algorithm"] = os.getenv("HASHTREE_DIGEST_ALGORITHM")
        if os.getenv("HASHTREE_ENCODING"):
            overrides.setdefault("hashing", {})["encoding"] = os.getenv("HASHTREE_ENCODING")

        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv("HASHTREE_LOG_LEVEL")
        if os.getenv("HASHTREE_DEBUG"):
            overrides.setdefault("logging", {})["debug"] = (
                os.getenv("HASHTREE_DEBUG", "false").lower() == "true"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hashing_data = data.get("hashing", {})
        logging_data = data.get("logging", {})

        hashing = HashingConfig(**hashing_data) if hashing_data else HashingConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            hashing=hashing,
            logging=log_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("hashing", {}).items():
            setattr(new_config.hashing, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hashing": {
                "algorithm": self.hashing.algorithm,
                "encoding": self.hashing.encoding,
            },
            "logging": {
                "level": self.logging.level,
                "debug": self.logging.debug,
            },
            "extra": self.extra,
        }


def resolve_log_level(config: RuntimeConfig) -> int:
    """Resolve the numeric log level, defaulting to INFO for unknown names."""
    if config.logging.debug:
        return logging.DEBUG
    return getattr(logging, (config.logging.level or "INFO").upper(), logging.INFO)


def configure_logging(config: Optional[RuntimeConfig] = None) -> None:
    """Configure root logging for applications embedding the package."""
    config = config or get_default_config()
    logging.basicConfig(level=resolve_log_level(config), format=LOG_FORMAT)


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration (None resets to env defaults)."""
    global _default_config
    _default_config = config
