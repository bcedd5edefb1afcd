"""
CLI Root Command

Show the current root of the tree store.

Usage:
    authtree root [--json]
"""

from __future__ import annotations

import json
from argparse import Namespace

from authtree.crypto.hashing import to_hex
from authtree.merkle.indexing import leaf_count

from authtree_cli.commands.common import EXIT_SUCCESS, open_tree


def root_cmd(args: Namespace) -> int:
    """Execute the root command."""
    tree = open_tree(args.cli_config)
    root = tree.get_root_hash()

    summary = {
        "root": to_hex(root),
        "depth": tree.depth,
        "hasher": tree.hasher.name,
        "leaves": leaf_count(tree.depth),
        "is_default": root == tree.default_root,
    }
    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        for key, value in summary.items():
            print(f"{key}: {str(value).lower() if isinstance(value, bool) else value}")
    return EXIT_SUCCESS
