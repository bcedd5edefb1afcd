"""
File Node Store

Persists a store as a directory:

    <dir>/meta.json     tree shape: {"depth": int, "hasher": str}
    <dir>/nodes.jsonl   one NodeRecord per line, append-only
    <dir>/HEAD          current root as 0x-prefixed hex

Commit order is records first, then HEAD (replaced atomically), so a crash
between the two leaves the previous root intact.
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Sequence

from authtree.crypto.hashing import from_hex, to_hex
from authtree.schemas.errors import StorageException
from authtree.storage.base import NodeRecord, NodeStore


logger = logging.getLogger(__name__)


# File name constants
META_FILE = "meta.json"
NODES_FILE = "nodes.jsonl"
HEAD_FILE = "HEAD"


def _atomic_write_text(path: Path, content: str) -> None:
    """Write a file via a temporary sibling and an atomic rename."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class FileNodeStore(NodeStore):
    """Directory-backed store with an in-memory index of all records."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._records: dict[tuple[bool, bytes], NodeRecord] | None = None

    def __repr__(self) -> str:
        return f"FileNodeStore({str(self.path)!r})"

    @property
    def exists(self) -> bool:
        return (self.path / META_FILE).exists()

    def _ensure_dir(self) -> None:
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageException(f"Cannot create store directory: {e}", path=str(self.path)) from e

    def _load(self) -> dict[tuple[bool, bytes], NodeRecord]:
        if self._records is not None:
            return self._records

        records: dict[tuple[bool, bytes], NodeRecord] = {}
        nodes_path = self.path / NODES_FILE
        if nodes_path.exists():
            try:
                raw = nodes_path.read_bytes()
            except OSError as e:
                raise StorageException(f"Cannot read node file: {e}", path=str(nodes_path)) from e

            lines = raw.splitlines(keepends=True)
            intact = 0
            for lineno, line in enumerate(lines, start=1):
                if line.strip():
                    try:
                        record = NodeRecord.from_dict(json.loads(line))
                    except (ValueError, KeyError) as e:
                        # Only the last line may be torn; HEAD never references it
                        if lineno == len(lines):
                            logger.warning(f"Dropping truncated record at {nodes_path}:{lineno}")
                            break
                        raise StorageException(
                            f"Corrupt node record at line {lineno}: {e}",
                            path=str(nodes_path),
                        ) from e
                    records[record.key] = record
                intact += len(line)

            self._repair_tail(nodes_path, raw, intact)

        logger.debug(f"Loaded {len(records)} node records from {self.path}")
        self._records = records
        return records

    def _repair_tail(self, nodes_path: Path, raw: bytes, intact: int) -> None:
        """Cut a torn last line and newline-terminate the file so appends start clean."""
        if intact == len(raw) and (not raw or raw.endswith(b"\n")):
            return
        try:
            with open(nodes_path, "r+b") as f:
                f.truncate(intact)
                if intact and not raw[:intact].endswith(b"\n"):
                    f.seek(intact)
                    f.write(b"\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StorageException(f"Cannot repair node file: {e}", path=str(nodes_path)) from e

    def get_record(self, hash: bytes, leaf: bool) -> NodeRecord | None:
        return self._load().get((leaf, hash))

    def put_records(self, records: Sequence[NodeRecord]) -> None:
        if not records:
            return
        index = self._load()
        self._ensure_dir()
        nodes_path = self.path / NODES_FILE
        payload = "".join(
            json.dumps(r.to_dict(), sort_keys=True, separators=(",", ":")) + "\n"
            for r in records
        )
        try:
            with open(nodes_path, "a", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise StorageException(f"Cannot append node records: {e}", path=str(nodes_path)) from e

        for record in records:
            index[record.key] = record

    def read_root(self) -> bytes | None:
        head_path = self.path / HEAD_FILE
        if not head_path.exists():
            return None
        try:
            return from_hex(head_path.read_text(encoding="utf-8").strip())
        except (OSError, ValueError) as e:
            raise StorageException(f"Cannot read HEAD: {e}", path=str(head_path)) from e

    def write_root(self, root: bytes) -> None:
        self._ensure_dir()
        head_path = self.path / HEAD_FILE
        try:
            _atomic_write_text(head_path, to_hex(root) + "\n")
        except OSError as e:
            raise StorageException(f"Cannot write HEAD: {e}", path=str(head_path)) from e

    def read_meta(self) -> dict[str, Any]:
        meta_path = self.path / META_FILE
        if not meta_path.exists():
            return {}
        try:
            with open(meta_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise StorageException(f"Cannot read store metadata: {e}", path=str(meta_path)) from e

    def write_meta(self, meta: dict[str, Any]) -> None:
        self._ensure_dir()
        meta_path = self.path / META_FILE
        try:
            _atomic_write_text(meta_path, json.dumps(meta, indent=2, sort_keys=True) + "\n")
        except OSError as e:
            raise StorageException(f"Cannot write store metadata: {e}", path=str(meta_path)) from e
