"""
Pluggable Hashers

A Hasher bundles the two hash capabilities a tree needs:
- combine(a, b): compression of two child hashes into a parent hash
- hash_bytes(payload): derivation of a leaf value from raw elements

Hashers are looked up by name so that stores, proof documents and
configuration can refer to them as plain strings.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from authtree.crypto.hashing import (
    ELEMENT_SIZE,
    blake2b,
    hash_bytes,
    hash_concat,
    sha256,
    split_elements,
)


class Hasher(ABC):
    """Hash capability over 32-byte elements."""

    name: str = ""

    #: Value of a leaf that has never been written
    default_leaf: bytes = b"\x00" * ELEMENT_SIZE

    def __init__(self) -> None:
        self._defaults: dict[int, tuple[bytes, ...]] = {}

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        ...

    def combine(self, left: bytes, right: bytes) -> bytes:
        return self.digest(left + right)

    def hash_bytes(self, payload: bytes) -> bytes:
        split_elements(payload)
        return self.digest(payload)

    def default_hashes(self, depth: int) -> tuple[bytes, ...]:
        """
        Hash of an all-default subtree rooted at each height.

        Entry k is the hash of any node at height k (root is height 0)
        in a tree whose leaves all hold default_leaf.
        """
        if depth not in self._defaults:
            hashes = [self.default_leaf]
            for _ in range(depth):
                hashes.append(self.combine(hashes[-1], hashes[-1]))
            hashes.reverse()
            self._defaults[depth] = tuple(hashes)
        return self._defaults[depth]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Sha256Hasher(Hasher):
    name = "sha256"

    def digest(self, data: bytes) -> bytes:
        return sha256(data)

    def combine(self, left: bytes, right: bytes) -> bytes:
        return hash_concat(left, right)

    def hash_bytes(self, payload: bytes) -> bytes:
        return hash_bytes(payload)


class Blake2bHasher(Hasher):
    name = "blake2b"

    def digest(self, data: bytes) -> bytes:
        return blake2b(data)


HASHERS: dict[str, type[Hasher]] = {
    Sha256Hasher.name: Sha256Hasher,
    Blake2bHasher.name: Blake2bHasher,
}


def get_hasher(name: str) -> Hasher:
    """
    Look up a hasher by name.

    Raises:
        ValueError: If no hasher is registered under name
    """
    try:
        return HASHERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown hasher: {name!r} (available: {', '.join(sorted(HASHERS))})"
        ) from None


__all__ = [
    "Hasher",
    "Sha256Hasher",
    "Blake2bHasher",
    "HASHERS",
    "get_hasher",
]
