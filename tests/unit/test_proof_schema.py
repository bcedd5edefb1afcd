"""
Proof Document Unit Tests
Tests for authtree/schemas/proof.py
"""
import pytest
from pydantic import ValidationError

from authtree.crypto.hasher import get_hasher
from authtree.merkle import MerkleProof, verify_merkle_proof
from authtree.schemas.errors import InvalidDepthError
from authtree.schemas.proof import PROOF_FORMAT_VERSION, ProofDocument

from fixtures.trees import leaf_value


def _document(memory_tree, index=9) -> ProofDocument:
    proof = memory_tree.update_leaf_data_with_proof(index, leaf_value(0xAB))
    return ProofDocument.from_proof(proof, memory_tree.depth, memory_tree.hasher.name)


class TestProofDocument:
    """JSON transport form of a proof."""

    def test_from_proof(self, memory_tree):
        doc = _document(memory_tree)
        assert doc.index == 9
        assert doc.depth == 3
        assert doc.hasher == "sha256"
        assert doc.format_version == PROOF_FORMAT_VERSION
        assert doc.source == "0x" + "ab" * 32
        assert len(doc.assist) == 3
        assert all(h.startswith("0x") for h in doc.assist)

    def test_to_proof_restores_bytes(self, memory_tree):
        proof = memory_tree.update_leaf_data_with_proof(9, leaf_value(0xAB))
        doc = ProofDocument.from_proof(proof, 3)
        assert doc.to_proof() == proof

    def test_json_round_trip_verifies(self, memory_tree):
        doc = _document(memory_tree)
        loaded = ProofDocument.model_validate_json(doc.model_dump_json())
        hasher = get_hasher(loaded.hasher)
        assert verify_merkle_proof(loaded.to_proof(), loaded.depth, hasher.combine)

    def test_hex_lowercased(self, memory_tree):
        data = _document(memory_tree).to_dict()
        data["root"] = data["root"].upper().replace("0X", "0x")
        doc = ProofDocument.model_validate(data)
        assert doc.root == doc.root.lower()

    def test_bad_hex_rejected(self, memory_tree):
        data = _document(memory_tree).to_dict()
        data["source"] = "ab" * 32
        with pytest.raises(ValidationError):
            ProofDocument.model_validate(data)

    def test_extra_fields_rejected(self, memory_tree):
        data = _document(memory_tree).to_dict()
        data["comment"] = "hi"
        with pytest.raises(ValidationError):
            ProofDocument.model_validate(data)

    @pytest.mark.parametrize("field,value", [("index", -1), ("index", 2 ** 32), ("depth", 0), ("depth", 32)])
    def test_range_checks(self, memory_tree, field, value):
        data = _document(memory_tree).to_dict()
        data[field] = value
        with pytest.raises(ValidationError):
            ProofDocument.model_validate(data)

    def test_wrong_assist_length_loads_but_fails_verification(self, memory_tree):
        data = _document(memory_tree).to_dict()
        data["assist"] = data["assist"][:2]
        doc = ProofDocument.model_validate(data)
        with pytest.raises(InvalidDepthError):
            verify_merkle_proof(doc.to_proof(), doc.depth, get_hasher(doc.hasher).combine)

    def test_frozen(self, memory_tree):
        doc = _document(memory_tree)
        with pytest.raises(ValidationError):
            doc.index = 10

    def test_empty_assist_proof(self):
        proof = MerkleProof(source=leaf_value(1), root=leaf_value(2), assist=(), index=0)
        doc = ProofDocument.from_proof(proof, 1)
        assert doc.assist == []
