"""In-memory node store."""
from __future__ import annotations

from typing import Any, Sequence

from authtree.storage.base import NodeRecord, NodeStore


class MemoryNodeStore(NodeStore):
    """Dictionary-backed store; contents vanish with the process."""

    def __init__(self) -> None:
        self._records: dict[tuple[bool, bytes], NodeRecord] = {}
        self._root: bytes | None = None
        self._meta: dict[str, Any] = {}

    def __len__(self) -> int:
        return len(self._records)

    def get_record(self, hash: bytes, leaf: bool) -> NodeRecord | None:
        return self._records.get((leaf, hash))

    def put_records(self, records: Sequence[NodeRecord]) -> None:
        for record in records:
            self._records[record.key] = record

    def read_root(self) -> bytes | None:
        return self._root

    def write_root(self, root: bytes) -> None:
        self._root = root

    def read_meta(self) -> dict[str, Any]:
        return dict(self._meta)

    def write_meta(self, meta: dict[str, Any]) -> None:
        self._meta = dict(meta)
