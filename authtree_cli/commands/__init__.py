"""
CLI command modules.
"""

from authtree_cli.commands import init, root, leaf, verify

__all__ = ["init", "root", "leaf", "verify"]
