"""
Store-backed Merkle Tree

KVMerkleTree implements the MerkleTree backend hooks on top of a
content-addressed NodeStore.

Behaviour:
- Nodes are looked up by hash; the index decides whether a leaf or an
  internal record is expected and which default subtree applies. Leaf and
  internal records live under separate keys, so any 32-byte leaf value is
  valid even when it equals an internal or default hash
- Subtrees that were never written are synthesised from the hasher's
  default hashes and never stored
- Writes are buffered and only reach the store in update_root_hash(),
  records first and root pointer last; rollback() drops the buffer
"""
from __future__ import annotations

import logging
from pathlib import Path

from authtree.crypto.hasher import Hasher, Sha256Hasher, get_hasher
from authtree.merkle.indexing import get_height
from authtree.merkle.node import HASH_SIZE, HashNode
from authtree.merkle.tree import MerkleTree
from authtree.schemas.errors import (
    InvalidArgumentException,
    InvalidDepthError,
    InvalidHashError,
    InvalidIndexError,
)
from authtree.storage.base import NodeRecord, NodeStore
from authtree.storage.file import FileNodeStore


logger = logging.getLogger(__name__)


DEFAULT_DEPTH = 20


class KVMerkleTree(MerkleTree[bytes, HashNode]):
    """
    Fixed-depth tree over 32-byte hashes stored in a NodeStore.

    Example:
        >>> tree = KVMerkleTree.construct(MemoryNodeStore(), depth=3)
        >>> proof = tree.update_leaf_data_with_proof(7, b"\\x01" * 32)
        >>> tree.verify_proof(proof)
        True
    """

    def __init__(
        self,
        store: NodeStore,
        depth: int,
        hasher: Hasher | None = None,
        root: bytes | None = None,
    ) -> None:
        super().__init__(depth)
        self.store = store
        self.hasher = hasher or Sha256Hasher()
        self._defaults = self.hasher.default_hashes(self.depth)
        self._root = root if root is not None else self._defaults[0]
        self._pending: dict[tuple[bool, bytes], NodeRecord] = {}

    def __repr__(self) -> str:
        return (
            f"KVMerkleTree(store={self.store!r}, depth={self.depth}, "
            f"hasher={self.hasher.name!r}, root=0x{self._root.hex()})"
        )

    @classmethod
    def construct(
        cls,
        addr: NodeStore | str | Path,
        root: bytes | None = None,
        *,
        depth: int | None = None,
        hasher: Hasher | str | None = None,
    ) -> "KVMerkleTree":
        """
        Bind a tree to a store and a root.

        Args:
            addr: A NodeStore, or a directory path for a FileNodeStore
            root: Root to connect to; None selects the all-default root
            depth: Tree depth; defaults to the store's recorded depth
            hasher: Hasher or hasher name; defaults to the store's recorded one

        Raises:
            InvalidDepthError: If depth disagrees with the store's metadata
            InvalidHashError: If root is not present in the store
        """
        store = addr if isinstance(addr, NodeStore) else FileNodeStore(addr)
        meta = store.read_meta()

        if depth is None:
            depth = meta.get("depth", DEFAULT_DEPTH)
        elif meta and meta.get("depth") != depth:
            raise InvalidDepthError(
                index=0,
                expected=meta.get("depth"),
                actual=depth,
                message=f"Store was created with depth {meta.get('depth')}, got {depth}",
            )

        if hasher is None:
            hasher = meta.get("hasher", Sha256Hasher.name)
        if isinstance(hasher, str):
            hasher = get_hasher(hasher)
        if meta and meta.get("hasher", hasher.name) != hasher.name:
            raise InvalidArgumentException(
                f"Store was created with hasher {meta.get('hasher')!r}, got {hasher.name!r}",
                details={"expected": meta.get("hasher"), "actual": hasher.name},
            )

        tree = cls(store, depth, hasher, root)
        if not meta:
            store.write_meta({"depth": tree.depth, "hasher": tree.hasher.name})

        # Fails with InvalidHashError when the root is unknown to the store
        tree.get_node_with_hash(0, tree.get_root_hash())
        logger.info(f"Connected to {tree!r}")
        return tree

    @property
    def default_root(self) -> bytes:
        return self._defaults[0]

    def combine(self, a: bytes, b: bytes) -> bytes:
        return self.hasher.combine(a, b)

    def _lookup(self, hash: bytes, leaf: bool) -> NodeRecord | None:
        record = self._pending.get((leaf, hash))
        if record is None:
            record = self.store.get_record(hash, leaf)
        return record

    def get_node_with_hash(self, index: int, hash: bytes) -> HashNode:
        self.boundary_check(index)
        if not isinstance(hash, bytes) or len(hash) != HASH_SIZE:
            raise InvalidHashError(index, source=hash, reason=f"expected {HASH_SIZE} bytes")

        height = get_height(index)
        is_leaf = height == self.depth
        record = self._lookup(hash, is_leaf)

        if record is None:
            if hash != self._defaults[height]:
                raise InvalidHashError(index, source=hash, reason="no node stored under this hash")
            if is_leaf:
                return HashNode(node_index=index, node_hash=hash)
            child = self._defaults[height + 1]
            return HashNode(node_index=index, node_hash=hash, left_hash=child, right_hash=child)

        if is_leaf:
            return HashNode(node_index=index, node_hash=record.hash)
        return HashNode(
            node_index=index,
            node_hash=record.hash,
            left_hash=record.left,
            right_hash=record.right,
        )

    def set_parent(self, index: int, hash: bytes, left: bytes, right: bytes) -> None:
        self.boundary_check(index)
        if get_height(index) == self.depth:
            raise InvalidIndexError(index, self.depth, source=hash)
        record = NodeRecord(hash=hash, left=left, right=right)
        self._pending[record.key] = record

    def set_leaf(self, leaf: HashNode) -> None:
        self.leaf_check(leaf.index)
        record = NodeRecord(hash=leaf.hash)
        self._pending[record.key] = record

    def get_root_hash(self) -> bytes:
        return self._root

    def update_root_hash(self, hash: bytes) -> None:
        records = list(self._pending.values())
        self.store.put_records(records)
        self.store.write_root(hash)
        self._root = hash
        self._pending.clear()
        logger.debug(f"Committed {len(records)} records, root 0x{hash.hex()}")

    def rollback(self) -> None:
        if self._pending:
            logger.debug(f"Discarding {len(self._pending)} buffered records")
        self._pending.clear()


__all__ = ["DEFAULT_DEPTH", "KVMerkleTree"]
