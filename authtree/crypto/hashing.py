"""
Hashing Utilities
Raw hashing primitives and hex helpers for tree commitments.

This module provides:
- SHA-256 / BLAKE2b hashing for raw bytes
- Element-validated payload hashing (hash_bytes)
- Parent hashing over two children (hash_concat)
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- Payloads for hash_bytes must be whole 32-byte elements; nothing is padded
- All operations are deterministic
"""
from __future__ import annotations

import hashlib

from authtree.schemas.errors import InvalidArgumentException


# Width in bytes of one hash element
ELEMENT_SIZE = 32


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def blake2b(data: bytes) -> bytes:
    """Compute a 32-byte BLAKE2b digest of raw bytes."""
    return hashlib.blake2b(data, digest_size=ELEMENT_SIZE).digest()


def split_elements(data: bytes, element_size: int = ELEMENT_SIZE) -> list[bytes]:
    """
    Split a payload into fixed-width elements.

    Raises:
        InvalidArgumentException: If the payload length is not a multiple
                                  of element_size
    """
    if len(data) % element_size != 0:
        raise InvalidArgumentException(
            f"Invalid data to hash, must be an array of {element_size}-byte elements",
            details={"length": len(data), "element_size": element_size},
        )
    return [data[i:i + element_size] for i in range(0, len(data), element_size)]


def hash_bytes(data: bytes) -> bytes:
    """
    Hash a payload made of whole 32-byte elements with SHA-256.

    This is how a leaf value is derived from raw data before it is
    written into a tree.

    Args:
        data: Concatenated 32-byte elements

    Returns:
        32-byte SHA-256 digest

    Raises:
        InvalidArgumentException: If the payload is not element aligned
    """
    split_elements(data)
    return sha256(data)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is the default parent rule: parent = sha256(left + right)
    """
    return sha256(left + right)


__all__ = [
    "ELEMENT_SIZE",
    "sha256",
    "blake2b",
    "split_elements",
    "hash_bytes",
    "to_hex",
    "from_hex",
    "hash_concat",
]
