"""
CLI Verify Command

Verify a proof document offline. No tree store is needed: the document
carries its depth and hasher name.

Usage:
    authtree verify proof.json [--root 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from authtree.crypto.hasher import get_hasher
from authtree.merkle.tree import verify_merkle_proof
from authtree.schemas.errors import MerkleException
from authtree.schemas.proof import ProofDocument

from authtree_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
)


logger = logging.getLogger(__name__)


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    proof_path: str = ""
    index: int = 0
    depth: int = 0
    root: str = ""
    valid: bool = False
    root_matches: bool | None = None
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        if self.root_matches is None:
            del d["root_matches"]
        if not d["errors"]:
            del d["errors"]
        return d

    @property
    def all_ok(self) -> bool:
        if not self.valid:
            return False
        if self.root_matches is not None and not self.root_matches:
            return False
        return True


def print_summary_human(summary: VerifySummary) -> None:
    print(f"proof: {summary.proof_path}")
    print(f"index: {summary.index}")
    print(f"depth: {summary.depth}")
    print(f"root: {summary.root}")
    print(f"valid: {str(summary.valid).lower()}")
    if summary.root_matches is not None:
        print(f"root_matches: {str(summary.root_matches).lower()}")
    if summary.errors:
        print(f"\nerrors ({len(summary.errors)}):")
        for err in summary.errors:
            print(f"  ✗ {err}")


def verify_document(document: ProofDocument, expected_root: str | None = None) -> VerifySummary:
    """Verify a loaded proof document and summarise the outcome."""
    summary = VerifySummary(
        index=document.index,
        depth=document.depth,
        root=document.root,
    )
    try:
        hasher = get_hasher(document.hasher)
        summary.valid = verify_merkle_proof(document.to_proof(), document.depth, hasher.combine)
        if not summary.valid:
            summary.errors.append("Recomputed root does not match proof root")
    except MerkleException as e:
        summary.errors.append(f"{e.code}: {e.message}")
    except ValueError as e:
        summary.errors.append(str(e))

    if expected_root is not None:
        summary.root_matches = document.root == expected_root.lower()
        if not summary.root_matches:
            summary.errors.append(f"Proof root {document.root} is not {expected_root.lower()}")

    return summary


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        EXIT_SUCCESS if the proof is valid, EXIT_VERIFICATION_FAILED if it
        is not, EXIT_RUNTIME_ERROR if the document cannot be read
    """
    proof_path = Path(args.proof_path)
    if not proof_path.exists():
        print(f"Error: Proof not found: {proof_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        document = ProofDocument.model_validate_json(proof_path.read_text(encoding="utf-8"))
    except ValidationError as e:
        print(f"Error: Invalid proof document: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    logger.info(f"Verifying proof for leaf {document.index} from {proof_path}")
    summary = verify_document(document, args.root)
    summary.proof_path = str(proof_path)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED
