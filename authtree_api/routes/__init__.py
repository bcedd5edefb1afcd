"""API route handlers."""

from authtree_api.routes import health, leaves, proofs

__all__ = ["health", "leaves", "proofs"]
