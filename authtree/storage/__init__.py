"""
Storage backends for authenticated trees.

This package provides:
- NodeRecord / NodeStore: content-addressed node persistence
- MemoryNodeStore: process-local store
- FileNodeStore: directory store (JSON lines + atomic HEAD pointer)
- KVMerkleTree: MerkleTree implementation over any NodeStore
"""
from .base import NodeRecord, NodeStore
from .memory import MemoryNodeStore
from .file import FileNodeStore
from .tree import DEFAULT_DEPTH, KVMerkleTree

__all__ = [
    "NodeRecord",
    "NodeStore",
    "MemoryNodeStore",
    "FileNodeStore",
    "DEFAULT_DEPTH",
    "KVMerkleTree",
]
