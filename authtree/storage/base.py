"""
Node Store Abstraction

Nodes are stored content-addressed: a record is keyed by its kind (leaf or
internal) and its own hash, and an internal record carries its two child
hashes. A leaf value may equal some internal hash, so the two kinds never
share a key.

Because nothing is ever overwritten, every root that was once committed
stays reachable, and an interrupted write cannot damage the previous root.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from authtree.crypto.hashing import from_hex, to_hex


@dataclass(frozen=True)
class NodeRecord:
    """A stored node, keyed by (kind, hash)."""
    hash: bytes
    left: Optional[bytes] = None
    right: Optional[bytes] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    @property
    def key(self) -> tuple[bool, bytes]:
        return (self.is_leaf, self.hash)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"hash": to_hex(self.hash)}
        if self.left is not None:
            d["left"] = to_hex(self.left)
        if self.right is not None:
            d["right"] = to_hex(self.right)
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeRecord":
        def _opt(key: str) -> Optional[bytes]:
            value = data.get(key)
            return from_hex(value) if value is not None else None

        return cls(
            hash=from_hex(data["hash"]),
            left=_opt("left"),
            right=_opt("right"),
        )


class NodeStore(ABC):
    """
    Persistence for node records, the current root pointer, and the
    tree shape (depth, hasher name) the store was created for.
    """

    @abstractmethod
    def get_record(self, hash: bytes, leaf: bool) -> NodeRecord | None:
        """Look up the leaf or internal record stored under hash."""

    @abstractmethod
    def put_records(self, records: Sequence[NodeRecord]) -> None:
        """Persist a batch of records; all or nothing from the reader's view."""

    @abstractmethod
    def read_root(self) -> bytes | None:
        ...

    @abstractmethod
    def write_root(self, root: bytes) -> None:
        ...

    @abstractmethod
    def read_meta(self) -> dict[str, Any]:
        ...

    @abstractmethod
    def write_meta(self, meta: dict[str, Any]) -> None:
        ...


__all__ = ["NodeRecord", "NodeStore"]
