"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field, field_validator

from authtree.crypto.hashing import from_hex
from authtree.schemas.proof import ProofDocument


class SetLeafRequest(BaseModel):
    """Request body for PUT /leaves/{index}."""

    value: str = Field(
        ...,
        description="Leaf value as 0x hex: one 32-byte hash, or 32-byte elements with raw=true",
        examples=["0x" + "01" * 32],
    )
    raw: bool = Field(
        default=False,
        description="Hash the value with the tree's hasher before storing it",
    )

    @field_validator("value")
    @classmethod
    def _validate_hex(cls, v: str) -> str:
        from_hex(v)
        return v.lower()


class VerifyRequest(BaseModel):
    """Request body for POST /verify."""

    proof: ProofDocument = Field(..., description="Proof document to verify")
    root: str | None = Field(
        default=None,
        description="Require the proof to be against this root (0x hex)",
    )
