"""
test_hashing.py - 해시 계산 테스트

DoD:
- 동일 입력 → 동일 해시 (재현성)
- "sha256:<hex16>" 포맷
- target 해시는 공백/대소문자 무시
"""

import hashlib

from src.core.hashing import compute_hash, hash_target


class TestComputeHash:
    """compute_hash 함수 테스트."""

    def test_format(self):
        """sha256: 접두어 + 16자리 hex."""
        value = compute_hash("hello")

        assert value.startswith("sha256:")
        assert len(value.split(":", 1)[1]) == 16

    def test_matches_sha256_prefix(self):
        """SHA-256 앞 16자리."""
        expected = hashlib.sha256(b"hello").hexdigest()[:16]

        assert compute_hash("hello") == f"sha256:{expected}"

    def test_deterministic(self):
        assert compute_hash("prompt") == compute_hash("prompt")

    def test_different_input(self):
        assert compute_hash("a") != compute_hash("b")


class TestHashTarget:
    """hash_target 함수 테스트."""

    def test_normalizes_whitespace_and_case(self):
        """앞뒤 공백/대소문자 차이는 같은 대상."""
        assert hash_target("  HTTPS://Example.com ") == hash_target("https://example.com")

    def test_does_not_contain_raw_value(self):
        """원문이 해시에 남지 않음."""
        assert "example" not in hash_target("https://example.com")
