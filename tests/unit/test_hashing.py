"""
Hashing Unit Tests
Tests for authtree/crypto/hashing.py and authtree/crypto/hasher.py
"""
import hashlib

import pytest

from authtree.crypto import (
    Blake2bHasher,
    Sha256Hasher,
    blake2b,
    from_hex,
    get_hasher,
    hash_bytes,
    hash_concat,
    sha256,
    split_elements,
    to_hex,
)
from authtree.schemas.errors import InvalidArgumentException


class TestPrimitives:
    """Raw digests and hex helpers."""

    def test_sha256_known_value(self):
        assert sha256(b"hello").hex() == (
            "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
        )

    def test_blake2b_is_32_bytes(self):
        digest = blake2b(b"hello")
        assert len(digest) == 32
        assert digest == hashlib.blake2b(b"hello", digest_size=32).digest()

    def test_hash_concat_is_ordered(self):
        a, b = b"\x01" * 32, b"\x02" * 32
        assert hash_concat(a, b) == sha256(a + b)
        assert hash_concat(a, b) != hash_concat(b, a)

    def test_hex_round_trip(self):
        assert to_hex(b"\xde\xad\xbe\xef") == "0xdeadbeef"
        assert from_hex("0xdeadbeef") == b"\xde\xad\xbe\xef"

    @pytest.mark.parametrize("value", ["deadbeef", "0xabc", "0xzz"])
    def test_from_hex_rejects(self, value):
        with pytest.raises(ValueError):
            from_hex(value)


class TestElementPayloads:
    """Payloads must be whole 32-byte elements."""

    def test_split_elements(self):
        payload = b"\x01" * 32 + b"\x02" * 32
        assert split_elements(payload) == [b"\x01" * 32, b"\x02" * 32]

    @pytest.mark.parametrize("length", [1, 31, 33, 65])
    def test_misaligned_payload_rejected(self, length):
        with pytest.raises(InvalidArgumentException, match="32-byte elements") as exc_info:
            hash_bytes(b"\x00" * length)
        assert exc_info.value.details["length"] == length

    def test_hash_bytes_hashes_whole_payload(self):
        payload = b"\x03" * 64
        assert hash_bytes(payload) == sha256(payload)


class TestHashers:
    """Pluggable hasher objects."""

    def test_lookup_by_name(self):
        assert isinstance(get_hasher("sha256"), Sha256Hasher)
        assert isinstance(get_hasher("blake2b"), Blake2bHasher)

    def test_unknown_hasher(self):
        with pytest.raises(ValueError, match="Unknown hasher"):
            get_hasher("poseidon")

    def test_combine_matches_primitive(self):
        a, b = b"\x01" * 32, b"\x02" * 32
        assert Sha256Hasher().combine(a, b) == sha256(a + b)
        assert Blake2bHasher().combine(a, b) == blake2b(a + b)

    def test_sha256_hasher_uses_module_helpers(self, monkeypatch):
        import authtree.crypto.hasher as hasher_module

        a, b = b"\x01" * 32, b"\x02" * 32
        hasher = Sha256Hasher()
        assert hasher.combine(a, b) == hash_concat(a, b)
        assert hasher.hash_bytes(a + b) == hash_bytes(a + b)

        calls = []
        monkeypatch.setattr(hasher_module, "hash_concat", lambda l, r: calls.append("concat") or l)
        monkeypatch.setattr(hasher_module, "hash_bytes", lambda p: calls.append("bytes") or p)
        assert hasher.combine(a, b) == a
        assert hasher.hash_bytes(b) == b
        assert calls == ["concat", "bytes"]

    def test_hasher_hash_bytes_validates(self):
        with pytest.raises(InvalidArgumentException):
            Blake2bHasher().hash_bytes(b"\x00" * 10)

    def test_default_hashes(self):
        hasher = Sha256Hasher()
        defaults = hasher.default_hashes(3)
        zero = b"\x00" * 32

        assert len(defaults) == 4
        assert defaults[3] == zero
        assert defaults[2] == sha256(zero + zero)
        assert defaults[0] == sha256(defaults[1] + defaults[1])

    def test_default_hashes_cached(self):
        hasher = Sha256Hasher()
        assert hasher.default_hashes(5) is hasher.default_hashes(5)

    def test_hashers_disagree(self):
        assert Sha256Hasher().default_hashes(2)[0] != Blake2bHasher().default_hashes(2)[0]
