"""
Runtime Configuration Module

Provides configuration loading and management for proof tree tooling.
"""

from .runtime import (
    CodecConfig,
    LoggingConfig,
    RuntimeConfig,
    TraversalConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "CodecConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "TraversalConfig",
    "get_default_config",
    "set_default_config",
]
