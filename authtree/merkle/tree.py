"""
Merkle Tree Protocol

Generic read / write / verify algorithms for a fixed-depth complete binary
tree whose nodes live in a caller-supplied backend.

Canonical Conventions (Hard Contracts):
1. Node addressing: level-order global index, root = 0, children 2i+1 / 2i+2
2. Proof assist order: root-adjacent sibling first, leaf's own sibling last
3. Recomputation order: leaf to root, consuming assist from the end backward
4. Operand order at each level: odd offset => running hash is the RIGHT
   operand, even offset => running hash is the LEFT operand
5. Write and verify share climb_path(), so (2)-(4) cannot drift apart

Backend hooks (implemented by subclasses):
- get_node_with_hash(index, hash) -> node
- set_parent(index, hash, left, right)
- set_leaf(node)
- get_root_hash() / update_root_hash(hash)
- combine(a, b) -> hash
- rollback() (optional) discards buffered writes after a failed update
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from authtree.merkle.indexing import (
    boundary_check,
    check_depth,
    get_offset,
    get_path,
    get_sibling_index,
    leaf_check,
    leaf_index,
)
from authtree.merkle.node import MerkleNode
from authtree.merkle.proof import MerkleProof
from authtree.schemas.errors import InvalidDepthError, InvalidHashError


logger = logging.getLogger(__name__)

H = TypeVar("H")
N = TypeVar("N", bound=MerkleNode)


@dataclass(frozen=True)
class ParentUpdate(Generic[H]):
    """A recomputed internal node produced while climbing toward the root."""
    index: int
    hash: H
    left: H
    right: H


def climb_path(
    source: H,
    index: int,
    assist: Sequence[H],
    combine: Callable[[H, H], H],
) -> list[ParentUpdate[H]]:
    """
    Recompute every ancestor of a leaf from its hash and its siblings.

    Args:
        source: Hash of the leaf
        index: Global index of the leaf
        assist: Sibling hashes, root-adjacent first (proof order)
        combine: Two-input compression function

    Returns:
        One ParentUpdate per level, deepest first. The last entry is the
        root (index 0).
    """
    offset = get_offset(index)
    current = source
    updates: list[ParentUpdate[H]] = []
    for level in range(len(assist) - 1, -1, -1):
        sibling = assist[level]
        if offset % 2 == 1:
            left, right = sibling, current
        else:
            left, right = current, sibling
        current = combine(left, right)
        offset //= 2
        updates.append(
            ParentUpdate(
                index=offset + (1 << level) - 1,
                hash=current,
                left=left,
                right=right,
            )
        )
    return updates


def verify_merkle_proof(
    proof: MerkleProof[H],
    depth: int,
    combine: Callable[[H, H], H],
) -> bool:
    """
    Verify a proof without touching any backend.

    Args:
        proof: Proof to check
        depth: Depth agreed between producer and verifier
        combine: Two-input compression function of the tree

    Returns:
        True if folding the assist list over the source yields proof.root

    Raises:
        InvalidDepthError: If the assist list does not have `depth` entries
        InvalidLeafIndexError: If proof.index is not a leaf for `depth`
    """
    check_depth(depth)
    if len(proof.assist) != depth:
        raise InvalidDepthError(
            index=proof.index,
            expected=depth,
            actual=len(proof.assist),
            source=proof.source,
        )
    leaf_check(proof.index, depth)
    updates = climb_path(proof.source, proof.index, proof.assist, combine)
    return updates[-1].hash == proof.root


class MerkleTree(ABC, Generic[H, N]):
    """
    Abstract authenticated tree of fixed depth.

    Subclasses supply storage and hashing through the hook methods; the
    proof protocol itself lives here and is not meant to be overridden.
    """

    def __init__(self, depth: int) -> None:
        self.depth = check_depth(depth)

    # -------------------------------------------------------------------------
    # Backend hooks
    # -------------------------------------------------------------------------

    @classmethod
    @abstractmethod
    def construct(cls, addr: Any, root: Any = None, **kwargs: Any) -> "MerkleTree[H, N]":
        """
        Create a tree handle bound to a backend location.

        If root is None the tree starts from the default root where every
        leaf holds the default value.
        """

    @abstractmethod
    def combine(self, a: H, b: H) -> H:
        """Hash of an internal node from its left and right child hashes."""

    @abstractmethod
    def set_parent(self, index: int, hash: H, left: H, right: H) -> None:
        ...

    @abstractmethod
    def set_leaf(self, leaf: N) -> None:
        ...

    @abstractmethod
    def get_node_with_hash(self, index: int, hash: H) -> N:
        """Fetch the node at index, checking it commits to hash."""

    @abstractmethod
    def get_root_hash(self) -> H:
        ...

    @abstractmethod
    def update_root_hash(self, hash: H) -> None:
        ...

    def rollback(self) -> None:
        """Discard writes buffered since the last update_root_hash()."""

    # -------------------------------------------------------------------------
    # Index helpers bound to this tree's depth
    # -------------------------------------------------------------------------

    def boundary_check(self, index: int) -> None:
        boundary_check(index, self.depth)

    def leaf_check(self, index: int) -> None:
        leaf_check(index, self.depth)

    def get_sibling_index(self, index: int) -> int:
        return get_sibling_index(index)

    def get_path(self, index: int) -> list[int]:
        return get_path(index, self.depth)

    def leaf_index(self, offset: int) -> int:
        """Global index of the leaf at a local offset."""
        return leaf_index(offset, self.depth)

    # -------------------------------------------------------------------------
    # Proof protocol
    # -------------------------------------------------------------------------

    def get_leaf_with_proof(self, index: int) -> tuple[N, MerkleProof[H]]:
        """
        Read a leaf and build its inclusion proof.

        Walks from the root down the ancestor path. At each level the
        previously fetched node tells which child hash is on the path and
        which belongs to the sibling; both are fetched by (index, hash) so
        the backend can detect stale or corrupted entries.

        Raises:
            InvalidLeafIndexError: If index is not a leaf
            InvalidHashError: If the backend cannot produce a node for an
                              expected (index, hash) pair
        """
        self.leaf_check(index)
        path = self.get_path(index)
        root = self.get_root_hash()

        acc = 0
        acc_node = self.get_node_with_hash(acc, root)
        assist: list[H] = []
        for child in path:
            if child == 2 * acc + 1:
                child_hash, sibling_hash = acc_node.left, acc_node.right
            else:
                child_hash, sibling_hash = acc_node.right, acc_node.left
            if child_hash is None or sibling_hash is None:
                raise InvalidHashError(
                    acc,
                    source=acc_node.hash,
                    reason="internal node has no child hashes",
                )
            sibling_node = self.get_node_with_hash(self.get_sibling_index(child), sibling_hash)
            assist.append(sibling_node.hash)
            acc = child
            acc_node = self.get_node_with_hash(acc, child_hash)

        proof = MerkleProof(
            source=acc_node.hash,
            root=root,
            assist=tuple(assist),
            index=index,
        )
        return acc_node, proof

    def set_leaf_with_proof(self, leaf: N) -> MerkleProof[H]:
        """
        Write a leaf and return the proof against the new root.

        Sibling hashes along the path are unaffected by the write, so the
        assist list of the current proof is reused. All ancestors are
        recomputed before anything is written; if a hook fails while the
        writes are applied, rollback() is called and the error propagates.
        """
        index = leaf.index
        _, proof = self.get_leaf_with_proof(index)
        updates = climb_path(leaf.hash, index, proof.assist, self.combine)
        new_root = updates[-1].hash

        try:
            self.set_leaf(leaf)
            for update in updates:
                self.set_parent(update.index, update.hash, update.left, update.right)
            self.update_root_hash(new_root)
        except Exception:
            logger.warning(f"Write of leaf {index} failed, rolling back")
            self.rollback()
            raise

        logger.debug(f"Leaf {index} written, root is now {new_root!r}")
        return MerkleProof(
            source=leaf.hash,
            root=new_root,
            assist=proof.assist,
            index=index,
        )

    def update_leaf_data_with_proof(self, index: int, data: bytes) -> MerkleProof[H]:
        """Decode raw bytes into the leaf at index and write it."""
        leaf, _ = self.get_leaf_with_proof(index)
        leaf.set(data)
        return self.set_leaf_with_proof(leaf)

    def verify_proof(self, proof: MerkleProof[H]) -> bool:
        """Verify a proof against this tree's depth and hash function."""
        return verify_merkle_proof(proof, self.depth, self.combine)


__all__ = [
    "ParentUpdate",
    "climb_path",
    "verify_merkle_proof",
    "MerkleTree",
]
