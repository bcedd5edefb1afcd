"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from authtree.config import RuntimeConfig
from authtree.merkle.indexing import get_offset
from authtree.schemas.errors import StorageException
from authtree.storage import FileNodeStore, KVMerkleTree


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def open_tree(config: RuntimeConfig) -> KVMerkleTree:
    """
    Connect to the configured store at its current HEAD.

    Raises:
        StorageException: If the file store has not been initialised
    """
    store = config.tree.open_store()
    if isinstance(store, FileNodeStore) and not store.exists:
        raise StorageException(
            f"No tree store at {store.path}; run 'authtree init' first",
            path=str(store.path),
        )
    return KVMerkleTree.construct(
        store,
        store.read_root(),
        depth=config.tree.depth,
        hasher=config.tree.hasher,
    )


def resolve_index(tree: KVMerkleTree, value: int, as_offset: bool) -> int:
    """Turn a CLI index argument into a global leaf index."""
    if as_offset:
        return tree.leaf_index(value)
    return value


def leaf_summary(tree: KVMerkleTree, index: int) -> dict[str, Any]:
    return {
        "index": index,
        "offset": get_offset(index),
        "depth": tree.depth,
        "hasher": tree.hasher.name,
    }


def write_json(data: dict[str, Any], out: str | None) -> None:
    """Write JSON to a file if out is given."""
    if not out:
        return
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Wrote {out_path}")
