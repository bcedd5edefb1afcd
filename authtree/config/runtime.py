"""
Runtime Configuration

Central configuration for tree shape, storage backend and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "AUTHTREE_"


@dataclass
class TreeConfig:
    """Configuration for the tree and its node store."""
    backend: str = "file"  # "file" or "memory"
    store_path: str = ".authtree"
    depth: Optional[int] = None  # None: use the store's recorded depth
    hasher: Optional[str] = None  # None: use the store's recorded hasher

    def open_store(self):
        """Create the NodeStore this configuration points at."""
        from authtree.storage import FileNodeStore, MemoryNodeStore

        if self.backend == "memory":
            return MemoryNodeStore()
        if self.backend == "file":
            return FileNodeStore(self.store_path)
        raise ValueError(f"Unknown storage backend: {self.backend!r}")


@dataclass
class LoggingConfig:
    """Configuration for log output."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    tree: TreeConfig = field(default_factory=TreeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - AUTHTREE_BACKEND: Storage backend (file/memory)
        - AUTHTREE_STORE: Store directory for the file backend
        - AUTHTREE_DEPTH: Tree depth for new stores
        - AUTHTREE_HASHER: Hasher name for new stores
        - AUTHTREE_LOG_LEVEL: Log level
        - AUTHTREE_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}BACKEND"):
            overrides.setdefault("tree", {})["backend"] = os.getenv(f"{ENV_PREFIX}BACKEND")
        if os.getenv(f"{ENV_PREFIX}STORE"):
            overrides.setdefault("tree", {})["store_path"] = os.getenv(f"{ENV_PREFIX}STORE")
        if os.getenv(f"{ENV_PREFIX}DEPTH"):
            overrides.setdefault("tree", {})["depth"] = int(os.getenv(f"{ENV_PREFIX}DEPTH", "0"))
        if os.getenv(f"{ENV_PREFIX}HASHER"):
            overrides.setdefault("tree", {})["hasher"] = os.getenv(f"{ENV_PREFIX}HASHER")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

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
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        tree_data = data.get("tree", {})
        logging_data = data.get("logging", {})

        tree = TreeConfig(**tree_data) if tree_data else TreeConfig()
        log = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            tree=tree,
            logging=log,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """Return a new config with environment variable overrides applied."""
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("tree", {}).items():
            setattr(new_config.tree, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.logging, key, value)
        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "tree": {
                "backend": self.tree.backend,
                "store_path": self.tree.store_path,
                "depth": self.tree.depth,
                "hasher": self.tree.hasher,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config
