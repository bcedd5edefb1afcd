"""
Merkle Proof Record

Immutable value carrying everything a verifier needs to check a single
leaf against a root: the leaf hash, the root hash, the sibling hashes
along the path and the leaf's global index.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Sequence, TypeVar

from authtree.merkle.indexing import MAX_INDEX
from authtree.schemas.errors import InvalidIndexError


H = TypeVar("H")


@dataclass(frozen=True)
class MerkleProof(Generic[H]):
    """
    An inclusion proof for one leaf of a fixed-depth tree.

    Attributes:
        source: Leaf hash at the time the proof was produced
        root: Tree root at the time the proof was produced
        assist: Sibling hashes, root-adjacent first and leaf-adjacent last.
                Always exactly D entries for a tree of depth D.
        index: Global level-order index of the leaf
    """
    source: H
    root: H
    assist: tuple[H, ...]
    index: int

    def __post_init__(self) -> None:
        """Normalise assist to a tuple and validate the index range."""
        if not isinstance(self.assist, tuple):
            object.__setattr__(self, "assist", tuple(self.assist))
        if self.index < 0 or self.index > MAX_INDEX:
            raise InvalidIndexError(self.index, source=self.source)

    @property
    def depth(self) -> int:
        """Depth implied by the number of sibling hashes."""
        return len(self.assist)

    def with_source(self, source: H) -> "MerkleProof[H]":
        return replace(self, source=source)

    def with_root(self, root: H) -> "MerkleProof[H]":
        return replace(self, root=root)

    def with_assist(self, assist: Sequence[H]) -> "MerkleProof[H]":
        return replace(self, assist=tuple(assist))


__all__ = ["MerkleProof"]
