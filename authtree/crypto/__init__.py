"""
Cryptographic utilities.

Raw hashing primitives and the pluggable Hasher capability used by trees.
"""
from .hashing import (
    ELEMENT_SIZE,
    sha256,
    blake2b,
    split_elements,
    hash_bytes,
    to_hex,
    from_hex,
    hash_concat,
)
from .hasher import (
    Hasher,
    Sha256Hasher,
    Blake2bHasher,
    HASHERS,
    get_hasher,
)

__all__ = [
    "ELEMENT_SIZE",
    "sha256",
    "blake2b",
    "split_elements",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "hash_concat",
    "Hasher",
    "Sha256Hasher",
    "Blake2bHasher",
    "HASHERS",
    "get_hasher",
]
