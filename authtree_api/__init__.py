"""
authtree HTTP API (FastAPI)

Endpoints:
- GET /health - Health check
- GET /root - Current root and tree shape
- GET /leaves/{index} - Read a leaf with its inclusion proof
- PUT /leaves/{index} - Write a leaf, returns the proof against the new root
- POST /verify - Verify a proof document

Usage:
    uvicorn authtree_api.app:app --reload
"""

__version__ = "0.1.0"
