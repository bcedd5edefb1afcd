"""
Leaf Routes

Read the root, read a leaf with its proof, write a leaf.
"""

from __future__ import annotations

import logging
import threading

from fastapi import APIRouter, Depends, Query

from authtree.crypto.hashing import from_hex, to_hex
from authtree.merkle.indexing import get_offset, leaf_count
from authtree.merkle.proof import MerkleProof
from authtree.schemas.proof import ProofDocument
from authtree.storage import KVMerkleTree

from authtree_api.deps import get_tree, get_write_lock
from authtree_api.models.requests import SetLeafRequest
from authtree_api.models.responses import LeafResponse, RootResponse


logger = logging.getLogger(__name__)

router = APIRouter(tags=["leaves"])


def _resolve_index(tree: KVMerkleTree, index: int, offset: bool) -> int:
    return tree.leaf_index(index) if offset else index


def _leaf_response(tree: KVMerkleTree, proof: MerkleProof[bytes]) -> LeafResponse:
    return LeafResponse(
        ok=True,
        index=proof.index,
        offset=get_offset(proof.index),
        value=to_hex(proof.source),
        root=to_hex(proof.root),
        proof=ProofDocument.from_proof(proof, tree.depth, tree.hasher.name),
    )


@router.get("/root", response_model=RootResponse)
def get_root(tree: KVMerkleTree = Depends(get_tree)) -> RootResponse:
    """Current root hash and tree shape."""
    root = tree.get_root_hash()
    return RootResponse(
        root=to_hex(root),
        depth=tree.depth,
        hasher=tree.hasher.name,
        leaves=leaf_count(tree.depth),
        is_default=root == tree.default_root,
    )


@router.get("/leaves/{index}", response_model=LeafResponse)
def get_leaf(
    index: int,
    offset: bool = Query(False, description="Interpret index as a 0-based offset among leaves"),
    tree: KVMerkleTree = Depends(get_tree),
) -> LeafResponse:
    """Read a leaf together with its inclusion proof against the current root."""
    _, proof = tree.get_leaf_with_proof(_resolve_index(tree, index, offset))
    return _leaf_response(tree, proof)


@router.put("/leaves/{index}", response_model=LeafResponse)
def set_leaf(
    index: int,
    request: SetLeafRequest,
    offset: bool = Query(False, description="Interpret index as a 0-based offset among leaves"),
    tree: KVMerkleTree = Depends(get_tree),
    lock: threading.Lock = Depends(get_write_lock),
) -> LeafResponse:
    """Write a leaf and return its proof against the new root."""
    leaf = _resolve_index(tree, index, offset)
    data = from_hex(request.value)
    if request.raw:
        data = tree.hasher.hash_bytes(data)

    with lock:
        proof = tree.update_leaf_data_with_proof(leaf, data)

    logger.info(f"Leaf {leaf} set via API, new root {to_hex(proof.root)}")
    return _leaf_response(tree, proof)
