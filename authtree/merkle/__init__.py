"""
Authenticated Tree Core
Fixed-depth complete binary Merkle tree: index arithmetic, proof records
and the read / write / verify protocol.

This package provides:
- MerkleProof: Immutable inclusion proof (source, root, assist, index)
- MerkleNode / HashNode: Node capability and a 32-byte implementation
- MerkleTree: Abstract tree with backend hooks and the proof protocol
- verify_merkle_proof: Backend-free proof verification
- Index helpers: get_path, get_offset, get_sibling_index, ...

Usage:
    from authtree.merkle import verify_merkle_proof
    from authtree.storage import KVMerkleTree, MemoryNodeStore

    tree = KVMerkleTree.construct(MemoryNodeStore(), depth=20)
    leaf, proof = tree.get_leaf_with_proof(tree.leaf_index(5))
    proof = tree.update_leaf_data_with_proof(proof.index, b"\\x01" * 32)

    assert verify_merkle_proof(proof, 20, tree.combine)
"""
from .indexing import (
    MAX_DEPTH,
    MAX_INDEX,
    NodeType,
    boundary_check,
    check_depth,
    first_leaf_index,
    get_height,
    get_node_type,
    get_offset,
    get_parent_index,
    get_path,
    get_sibling_index,
    leaf_check,
    leaf_count,
    leaf_index,
    node_count,
)
from .node import HASH_SIZE, HashNode, MerkleNode
from .proof import MerkleProof
from .tree import MerkleTree, ParentUpdate, climb_path, verify_merkle_proof


__all__ = [
    # Index arithmetic
    "MAX_DEPTH",
    "MAX_INDEX",
    "NodeType",
    "boundary_check",
    "check_depth",
    "first_leaf_index",
    "get_height",
    "get_node_type",
    "get_offset",
    "get_parent_index",
    "get_path",
    "get_sibling_index",
    "leaf_check",
    "leaf_count",
    "leaf_index",
    "node_count",
    # Core types
    "HASH_SIZE",
    "MerkleNode",
    "HashNode",
    "MerkleProof",
    # Protocol
    "MerkleTree",
    "ParentUpdate",
    "climb_path",
    "verify_merkle_proof",
]
