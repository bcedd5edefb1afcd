"""
Schemas
File: proof.py

Purpose: JSON transport form of a Merkle proof.
Hash values travel as 0x-prefixed hex strings; the depth and hasher name
travel with the proof so a verifier needs nothing else.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from authtree.crypto.hashing import from_hex, to_hex
from authtree.merkle.indexing import MAX_DEPTH, MAX_INDEX
from authtree.merkle.proof import MerkleProof


PROOF_FORMAT_VERSION = "1"


def _check_hex(value: str) -> str:
    from_hex(value)
    return value.lower()


class ProofDocument(BaseModel):
    """
    Serialized inclusion proof.

    Assist length is deliberately not validated here: a document with the
    wrong number of siblings still loads, and verification reports it as
    an InvalidDepthError.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    format_version: str = Field(
        default=PROOF_FORMAT_VERSION,
        description="Proof document format version",
    )
    index: int = Field(
        ...,
        ge=0,
        le=MAX_INDEX,
        description="Global level-order index of the leaf",
    )
    depth: int = Field(
        ...,
        ge=1,
        le=MAX_DEPTH,
        description="Depth of the tree the proof belongs to",
    )
    hasher: str = Field(
        default="sha256",
        description="Name of the hasher used for parent hashes",
    )
    source: str = Field(
        ...,
        description="Leaf hash (0x hex)",
    )
    root: str = Field(
        ...,
        description="Root hash (0x hex)",
    )
    assist: list[str] = Field(
        default_factory=list,
        description="Sibling hashes, root-adjacent first (0x hex)",
    )

    @field_validator("source", "root")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        return _check_hex(v)

    @field_validator("assist")
    @classmethod
    def _validate_assist(cls, v: list[str]) -> list[str]:
        return [_check_hex(h) for h in v]

    @classmethod
    def from_proof(
        cls,
        proof: MerkleProof[bytes],
        depth: int,
        hasher: str = "sha256",
    ) -> "ProofDocument":
        return cls(
            index=proof.index,
            depth=depth,
            hasher=hasher,
            source=to_hex(proof.source),
            root=to_hex(proof.root),
            assist=[to_hex(h) for h in proof.assist],
        )

    def to_proof(self) -> MerkleProof[bytes]:
        return MerkleProof(
            source=from_hex(self.source),
            root=from_hex(self.root),
            assist=tuple(from_hex(h) for h in self.assist),
            index=self.index,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


__all__ = ["PROOF_FORMAT_VERSION", "ProofDocument"]
