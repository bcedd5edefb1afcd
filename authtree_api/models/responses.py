"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from authtree.schemas.proof import ProofDocument


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "authtree-api"
    version: str = "v1"


class RootResponse(BaseModel):
    """Response for GET /root endpoint."""

    ok: bool = True
    root: str = Field(..., description="Current root hash (0x hex)")
    depth: int = Field(..., description="Tree depth")
    hasher: str = Field(..., description="Hasher name")
    leaves: int = Field(..., description="Number of leaves")
    is_default: bool = Field(..., description="Whether every leaf still holds the default value")


class LeafResponse(BaseModel):
    """Response for GET and PUT /leaves/{index}."""

    ok: bool = True
    index: int = Field(..., description="Global leaf index")
    offset: int = Field(..., description="0-based offset among leaves")
    value: str = Field(..., description="Leaf hash (0x hex)")
    root: str = Field(..., description="Root the proof is against (0x hex)")
    proof: ProofDocument = Field(..., description="Inclusion proof")


class VerifyResponse(BaseModel):
    """Response for POST /verify endpoint."""

    ok: bool = Field(..., description="Overall verification status")
    valid: bool = Field(..., description="Whether the proof recomputes to its root")
    root_matches: bool | None = Field(
        default=None,
        description="Whether the proof root equals the requested root (if given)",
    )
    index: int = Field(..., description="Leaf index from the proof")
    root: str = Field(..., description="Root from the proof")
    errors: list[str] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
