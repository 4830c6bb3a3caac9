"""
Runtime Configuration

Central configuration for traversal strictness, codec limits and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from prooftree.schemas.errors import ConfigurationException

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "PROOFTREE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TraversalConfig:
    """Configuration for proof tree traversal."""
    strict_mode: bool = False


@dataclass
class CodecConfig:
    """Configuration for the binary proof codec."""
    hash_size: int = 32
    max_depth: int = 256

    def __post_init__(self) -> None:
        if self.hash_size <= 0:
            raise ConfigurationException(
                f"hash_size must be positive, got {self.hash_size}",
                field_path="codec.hash_size",
            )
        if self.max_depth <= 0:
            raise ConfigurationException(
                f"max_depth must be positive, got {self.max_depth}",
                field_path="codec.max_depth",
            )


@dataclass
class LoggingConfig:
    """Configuration for CLI logging."""
    level: str = "INFO"
    file: Optional[str] = None

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        if self.level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.level}",
                field_path="logging.level",
            )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigurationException(f"{name} must be a boolean, got {raw!r}", field_path=name)


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(
            f"{name} must be an integer, got {raw!r}", field_path=name
        ) from e


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (PROOFTREE_* prefix, .env supported)
    - YAML file
    - Programmatic construction
    """
    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    codec: CodecConfig = field(default_factory=CodecConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - PROOFTREE_STRICT_MODE: Raise on malformed nodes (true/false)
        - PROOFTREE_HASH_SIZE: Leaf hash width in bytes for the codec
        - PROOFTREE_MAX_DEPTH: Maximum nesting accepted by the decoder
        - PROOFTREE_LOG_LEVEL: CLI log level
        - PROOFTREE_LOG_FILE: Optional CLI log file
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}STRICT_MODE"):
            overrides.setdefault("traversal", {})["strict_mode"] = _parse_bool(
                f"{ENV_PREFIX}STRICT_MODE", os.environ[f"{ENV_PREFIX}STRICT_MODE"]
            )

        if os.getenv(f"{ENV_PREFIX}HASH_SIZE"):
            overrides.setdefault("codec", {})["hash_size"] = _parse_int(
                f"{ENV_PREFIX}HASH_SIZE", os.environ[f"{ENV_PREFIX}HASH_SIZE"]
            )
        if os.getenv(f"{ENV_PREFIX}MAX_DEPTH"):
            overrides.setdefault("codec", {})["max_depth"] = _parse_int(
                f"{ENV_PREFIX}MAX_DEPTH", os.environ[f"{ENV_PREFIX}MAX_DEPTH"]
            )

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.environ[f"{ENV_PREFIX}LOG_LEVEL"]
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.environ[f"{ENV_PREFIX}LOG_FILE"]

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

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(
                f"Invalid YAML in config file {path}: {e}",
                details={"path": str(path)},
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Config file must contain a mapping, got {type(data).__name__}",
                details={"path": str(path)},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Create configuration from a dictionary."""
        sections = {
            "traversal": TraversalConfig,
            "codec": CodecConfig,
            "logging": LoggingConfig,
        }
        unknown = set(data) - set(sections)
        if unknown:
            raise ConfigurationException(
                f"Unknown configuration sections: {', '.join(sorted(unknown))}",
                details={"sections": sorted(unknown)},
            )

        kwargs: dict[str, Any] = {}
        for name, section_cls in sections.items():
            section_data = data.get(name) or {}
            try:
                kwargs[name] = section_cls(**section_data)
            except TypeError as e:
                raise ConfigurationException(
                    f"Invalid '{name}' configuration: {e}",
                    field_path=name,
                ) from e
        return cls(**kwargs)

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        for section, values in overrides.items():
            merged[section].update(values)
        return self.from_dict(copy.deepcopy(merged))

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "traversal": {
                "strict_mode": self.traversal.strict_mode,
            },
            "codec": {
                "hash_size": self.codec.hash_size,
                "max_depth": self.codec.max_depth,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
        }


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
