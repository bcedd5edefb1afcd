"""
CLI Init Command

Create a new tree store with every leaf at its default value.

Usage:
    authtree init [--depth N] [--hasher NAME] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from authtree.crypto.hashing import to_hex
from authtree.storage import DEFAULT_DEPTH, FileNodeStore, KVMerkleTree

from authtree_cli.commands.common import EXIT_RUNTIME_ERROR, EXIT_SUCCESS


def init_cmd(args: Namespace) -> int:
    """
    Execute the init command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    config = args.cli_config
    store = config.tree.open_store()

    if isinstance(store, FileNodeStore) and store.exists:
        print(f"Error: Tree store already exists: {store.path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    depth = args.depth or config.tree.depth or DEFAULT_DEPTH
    hasher = args.hasher or config.tree.hasher or "sha256"

    tree = KVMerkleTree.construct(store, None, depth=depth, hasher=hasher)
    store.write_root(tree.get_root_hash())

    summary = {
        "store": str(getattr(store, "path", "memory")),
        "depth": tree.depth,
        "hasher": tree.hasher.name,
        "root": to_hex(tree.get_root_hash()),
    }
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        for key, value in summary.items():
            print(f"{key}: {value}")
    return EXIT_SUCCESS
