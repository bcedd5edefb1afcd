"""
Merkle Nodes

A node is what the storage backend hands back to the tree protocol:
its hash, its global index, and for internal nodes the hashes of its
two children so a path walk can tell the on-path child from the sibling.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from authtree.schemas.errors import InvalidArgumentException


H = TypeVar("H")

# Width in bytes of one hash element
HASH_SIZE = 32


class MerkleNode(ABC, Generic[H]):
    """Capability required of any node type used with MerkleTree."""

    @property
    @abstractmethod
    def hash(self) -> H:
        """Hash committed by this node."""

    @property
    @abstractmethod
    def index(self) -> int:
        """Global level-order index."""

    @abstractmethod
    def set(self, data: bytes) -> None:
        """Decode a raw leaf payload and update the node's hash from it."""

    @property
    @abstractmethod
    def left(self) -> Optional[H]:
        """Hash of the left child, None for leaves."""

    @property
    @abstractmethod
    def right(self) -> Optional[H]:
        """Hash of the right child, None for leaves."""


@dataclass
class HashNode(MerkleNode[bytes]):
    """
    Node over 32-byte hash elements.

    A leaf's payload is a single 32-byte element which becomes the leaf
    hash directly. Callers that want to commit arbitrary data hash it
    first with Hasher.hash_bytes().
    """
    node_index: int
    node_hash: bytes
    left_hash: Optional[bytes] = None
    right_hash: Optional[bytes] = None

    @property
    def hash(self) -> bytes:
        return self.node_hash

    @property
    def index(self) -> int:
        return self.node_index

    @property
    def left(self) -> Optional[bytes]:
        return self.left_hash

    @property
    def right(self) -> Optional[bytes]:
        return self.right_hash

    def set(self, data: bytes) -> None:
        if len(data) != HASH_SIZE:
            raise InvalidArgumentException(
                f"Leaf payload must be exactly {HASH_SIZE} bytes, got {len(data)}",
                details={"index": self.node_index, "length": len(data)},
            )
        self.node_hash = bytes(data)


__all__ = ["HASH_SIZE", "MerkleNode", "HashNode"]
