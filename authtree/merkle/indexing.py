"""
Merkle Index Arithmetic

Pure functions over a node's global level-order index and the tree depth D.

Layout for D=3:

    0
    1 2
    3 4 5 6
    7 8 9 10 11 12 13 14

- Children of node i are 2i+1 (left) and 2i+2 (right)
- Nodes at height k span [2^k - 1, 2^(k+1) - 2]
- Leaves span [2^D - 1, 2^(D+1) - 2]
- Left children have odd indices, right children have even indices
"""
from __future__ import annotations

from enum import Enum

from authtree.schemas.errors import (
    InvalidDepthError,
    InvalidIndexError,
    InvalidLeafIndexError,
)


# Indices are unsigned 32-bit, so the leaf level must fit below 2^32 - 1
MAX_DEPTH = 31
MAX_INDEX = (1 << 32) - 1


class NodeType(str, Enum):
    """Classification of a global index for a given depth."""
    LEAF = "leaf"
    INTERNAL = "internal"
    INVALID = "invalid"


def check_depth(depth: int) -> int:
    """Validate a tree depth, returning it unchanged."""
    if not isinstance(depth, int) or depth < 1 or depth > MAX_DEPTH:
        raise InvalidDepthError(
            index=0,
            expected=MAX_DEPTH,
            actual=depth,
            message=f"Tree depth must be between 1 and {MAX_DEPTH}, got {depth}",
        )
    return depth


def node_count(depth: int) -> int:
    """Total number of nodes in a tree of the given depth."""
    return (1 << (depth + 1)) - 1


def leaf_count(depth: int) -> int:
    return 1 << depth


def first_leaf_index(depth: int) -> int:
    """Global index of the leftmost leaf."""
    return (1 << depth) - 1


def leaf_index(offset: int, depth: int) -> int:
    """Global index of the leaf at a local offset."""
    if offset < 0 or offset >= leaf_count(depth):
        raise InvalidLeafIndexError(index=offset + first_leaf_index(depth), depth=depth)
    return first_leaf_index(depth) + offset


def get_height(index: int) -> int:
    """Number of edges between the root and the node at index."""
    if index < 0:
        raise InvalidIndexError(index)
    return (index + 1).bit_length() - 1


def get_offset(index: int) -> int:
    """Position of a node among the nodes at its own height."""
    return index - ((1 << get_height(index)) - 1)


def get_node_type(index: int, depth: int) -> NodeType:
    if index < 0 or index >= node_count(depth):
        return NodeType.INVALID
    if index >= first_leaf_index(depth):
        return NodeType.LEAF
    return NodeType.INTERNAL


def boundary_check(index: int, depth: int) -> None:
    """Raise InvalidIndexError if index lies outside the tree."""
    if get_node_type(index, depth) == NodeType.INVALID:
        raise InvalidIndexError(index, depth)


def leaf_check(index: int, depth: int) -> None:
    """Raise InvalidLeafIndexError unless index is a leaf."""
    if get_node_type(index, depth) != NodeType.LEAF:
        raise InvalidLeafIndexError(index, depth)


def get_sibling_index(index: int) -> int:
    """
    Index of the other child of the same parent.

    Parity is taken on the global index: odd indices are left children.
    The root has no sibling.
    """
    if index <= 0:
        raise InvalidIndexError(index)
    if index % 2 == 1:
        return index + 1
    return index - 1


def get_parent_index(index: int) -> int:
    if index <= 0:
        raise InvalidIndexError(index)
    return (index - 1) // 2


def get_path(index: int, depth: int) -> list[int]:
    """
    Ancestor chain of a leaf, excluding the root and including the leaf.

    Ordered from the node just below the root down to the leaf itself,
    so the result always has exactly `depth` entries.

    Example (D=3):
        >>> get_path(7, 3)
        [1, 3, 7]
        >>> get_path(14, 3)
        [2, 6, 14]
    """
    leaf_check(index, depth)
    path: list[int] = []
    current = index
    while current > 0:
        path.append(current)
        current = get_parent_index(current)
    path.reverse()
    return path


__all__ = [
    "MAX_DEPTH",
    "MAX_INDEX",
    "NodeType",
    "check_depth",
    "node_count",
    "leaf_count",
    "first_leaf_index",
    "leaf_index",
    "get_height",
    "get_offset",
    "get_node_type",
    "boundary_check",
    "leaf_check",
    "get_sibling_index",
    "get_parent_index",
    "get_path",
]
