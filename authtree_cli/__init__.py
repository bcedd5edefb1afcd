"""
authtree CLI

Command-line interface for authenticated tree stores.

Usage:
    python -m authtree_cli init --depth 20
    python -m authtree_cli set 5 0x01...01 --offset --out proof.json
    python -m authtree_cli get 5 --offset
    python -m authtree_cli verify proof.json
    python -m authtree_cli root
"""

__version__ = "0.1.0"
