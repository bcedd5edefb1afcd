"""
CLI Leaf Commands

Read a leaf with its proof, or write a leaf and get the proof against
the new root.

Usage:
    authtree get INDEX [--offset] [--out proof.json] [--json]
    authtree set INDEX VALUE [--offset] [--raw] [--out proof.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from typing import Any

from authtree.crypto.hashing import from_hex, to_hex
from authtree.merkle.proof import MerkleProof
from authtree.schemas.proof import ProofDocument
from authtree.storage import KVMerkleTree

from authtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    leaf_summary,
    open_tree,
    resolve_index,
    write_json,
)


logger = logging.getLogger(__name__)


def _report(tree: KVMerkleTree, proof: MerkleProof[bytes], args: Namespace) -> dict[str, Any]:
    document = ProofDocument.from_proof(proof, tree.depth, tree.hasher.name)
    report = leaf_summary(tree, proof.index)
    report["value"] = to_hex(proof.source)
    report["root"] = to_hex(proof.root)
    report["proof"] = document.to_dict()

    write_json(document.to_dict(), args.out)

    if args.json:
        print(json.dumps(report, indent=2))
    else:
        print(f"index: {report['index']}")
        print(f"offset: {report['offset']}")
        print(f"value: {report['value']}")
        print(f"root: {report['root']}")
        print(f"assist ({len(proof.assist)}):")
        for sibling in document.assist:
            print(f"  {sibling}")
        if args.out:
            print(f"proof written to: {args.out}")
    return report


def get_cmd(args: Namespace) -> int:
    """Execute the get command."""
    tree = open_tree(args.cli_config)
    index = resolve_index(tree, args.index, args.offset)
    _, proof = tree.get_leaf_with_proof(index)
    _report(tree, proof, args)
    return EXIT_SUCCESS


def set_cmd(args: Namespace) -> int:
    """Execute the set command."""
    tree = open_tree(args.cli_config)
    index = resolve_index(tree, args.index, args.offset)

    try:
        data = from_hex(args.value)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.raw:
        data = tree.hasher.hash_bytes(data)

    proof = tree.update_leaf_data_with_proof(index, data)
    logger.info(f"Leaf {index} set, new root {to_hex(proof.root)}")
    _report(tree, proof, args)
    return EXIT_SUCCESS
