"""
authtree - fixed-depth authenticated (Merkle) trees.

Subpackages:
    authtree.merkle   index arithmetic, proof records, tree protocol
    authtree.crypto   hashing primitives and pluggable hashers
    authtree.storage  node stores and the store-backed tree
    authtree.schemas  error taxonomy and proof transport schema
    authtree.config   runtime configuration
"""

__version__ = "0.1.0"
