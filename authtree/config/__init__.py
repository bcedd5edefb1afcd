"""
Runtime Configuration Module

Provides configuration loading for trees, stores and logging.
"""

from .runtime import (
    ENV_PREFIX,
    LoggingConfig,
    RuntimeConfig,
    TreeConfig,
    get_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "LoggingConfig",
    "RuntimeConfig",
    "TreeConfig",
    "get_default_config",
]
