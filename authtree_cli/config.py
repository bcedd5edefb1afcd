"""
CLI Configuration

Locates and loads the configuration file, then overlays AUTHTREE_*
environment variables.
"""

from __future__ import annotations

import json
from pathlib import Path

from authtree.config import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Config files searched when --config is not given, in order."""
    return [
        Path.cwd() / "authtree.json",
        Path.cwd() / ".authtree.json",
        Path.home() / ".config" / "authtree" / "config.json",
    ]


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix in (".yaml", ".yml"):
        return RuntimeConfig.from_yaml(path)

    with open(path, "r") as f:
        data = json.load(f)
    return RuntimeConfig.from_dict(data)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "tree": {
    "backend": "file",
    "store_path": ".authtree",
    "depth": 20,
    "hasher": "sha256"
  },
  "logging": {
    "level": "INFO",
    "file": null
  }
}
"""
