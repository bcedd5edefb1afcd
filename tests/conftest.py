"""
Pytest configuration and shared fixtures for authtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_trees = importlib.import_module("fixtures.trees")

ArrayMerkleTree = _trees.ArrayMerkleTree
FailingNodeStore = _trees.FailingNodeStore
leaf_value = _trees.leaf_value
u64 = _trees.u64


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove AUTHTREE_* variables so tests never see the caller's environment."""
    for key in list(os.environ):
        if key.startswith("AUTHTREE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def array_tree():
    """Index-addressed D=3 tree with additive combine."""
    return ArrayMerkleTree(depth=3)


@pytest.fixture
def memory_tree():
    """Store-backed D=3 SHA-256 tree on a fresh in-memory store."""
    from authtree.storage import KVMerkleTree, MemoryNodeStore

    return KVMerkleTree.construct(MemoryNodeStore(), depth=3, hasher="sha256")


@pytest.fixture
def store_dir(tmp_path):
    """Directory path for a file-backed store (not created yet)."""
    return tmp_path / "store"


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
