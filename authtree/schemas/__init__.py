"""
Schemas
File: __init__.py

Purpose: Export the error taxonomy.

The proof transport schema depends on authtree.merkle and is imported
from authtree.schemas.proof directly.
"""

from .errors import (
    AuthTreeError,
    AuthTreeException,
    ErrorCodes,
    InvalidArgumentException,
    InvalidDepthError,
    InvalidHashError,
    InvalidIndexError,
    InvalidLeafIndexError,
    MerkleException,
    StorageException,
)

__all__ = [
    "AuthTreeError",
    "AuthTreeException",
    "ErrorCodes",
    "InvalidArgumentException",
    "InvalidDepthError",
    "InvalidHashError",
    "InvalidIndexError",
    "InvalidLeafIndexError",
    "MerkleException",
    "StorageException",
]
