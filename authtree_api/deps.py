"""
API Dependencies

Dependency injection for the API. The tree handle is created once per
process and shared; writes are serialised through a lock.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from authtree.config import RuntimeConfig
from authtree.storage import DEFAULT_DEPTH, KVMerkleTree

logger = logging.getLogger(__name__)


_tree: Optional[KVMerkleTree] = None
_tree_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from a config file, then overlay environment variables.

    Search order for config file:
      1. ./authtree.json
      2. ./.authtree.json
      3. ~/.config/authtree/config.json

    Environment variables always override config file values.
    """
    search_paths = [
        Path.cwd() / "authtree.json",
        Path.cwd() / ".authtree.json",
        Path.home() / ".config" / "authtree" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def build_tree(config: RuntimeConfig) -> KVMerkleTree:
    """
    Connect to the configured store, creating it on first use.

    A store without metadata is initialised with the configured depth and
    hasher (or the defaults).
    """
    store = config.tree.open_store()
    meta = store.read_meta()
    if meta:
        depth, hasher = config.tree.depth, config.tree.hasher
    else:
        depth = config.tree.depth or DEFAULT_DEPTH
        hasher = config.tree.hasher or "sha256"
        logger.info(f"Initialising new tree store (depth={depth}, hasher={hasher})")
    return KVMerkleTree.construct(store, store.read_root(), depth=depth, hasher=hasher)


def get_tree() -> KVMerkleTree:
    """FastAPI dependency returning the process-wide tree handle."""
    global _tree
    with _tree_lock:
        if _tree is None:
            _tree = build_tree(_load_runtime_config())
        return _tree


def get_write_lock() -> threading.Lock:
    """Lock held by handlers while they mutate the tree."""
    return _tree_lock


def reset_tree() -> None:
    """Drop the cached tree handle; the next request reconnects."""
    global _tree
    with _tree_lock:
        _tree = None
