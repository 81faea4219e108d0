"""
Unit tests for HasherImpl.
Verifies tokens are upper-case hex, deterministic and sensitive to content.
"""
import hashlib
import logging

import pytest
import xxhash

from cachebuster.core.hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl
from cachebuster.core.models import HashAlgorithmName


class TestHasherImpl:
    """Test token rendering over full file content."""

    def test_default_algorithm_is_sha256(self):
        hasher = HasherImpl()
        assert isinstance(hasher.algorithm, Sha256AlgorithmImpl)

    def test_digest_is_uppercase_sha256_hex(self):
        """Token must equal the upper-case hex SHA-256 of the bytes."""
        token = HasherImpl().digest(b"hello")

        assert token == hashlib.sha256(b"hello").hexdigest().upper()
        assert len(token) == 64
        assert set(token) <= set("0123456789ABCDEF")
        assert token == token.upper()

    def test_same_content_produces_same_token(self, temp_dir):
        """Identical files must produce identical tokens."""
        content = b"test content " * 1000
        f1 = temp_dir / "one.js"
        f2 = temp_dir / "two.js"
        f1.write_bytes(content)
        f2.write_bytes(content)

        hasher = HasherImpl()
        assert hasher.compute_file_hash(str(f1)) == hasher.compute_file_hash(str(f2))

    def test_one_byte_change_changes_token(self, temp_dir):
        f1 = temp_dir / "one.css"
        f2 = temp_dir / "two.css"
        f1.write_bytes(b"A" * 1024)
        f2.write_bytes(b"A" * 1023 + b"B")

        hasher = HasherImpl()
        assert hasher.compute_file_hash(str(f1)) != hasher.compute_file_hash(str(f2))

    def test_file_hash_matches_digest_of_bytes(self, temp_dir):
        """Binary content is hashed as-is (no line or encoding handling)."""
        content = b"line one\r\nline two\n\x00\xff"
        path = temp_dir / "mixed.bin"
        path.write_bytes(content)

        hasher = HasherImpl()
        assert hasher.compute_file_hash(str(path)) == hasher.digest(content)

    def test_empty_file_has_token(self, temp_dir):
        path = temp_dir / "empty.txt"
        path.write_bytes(b"")

        assert HasherImpl().compute_file_hash(str(path)) == hashlib.sha256(b"").hexdigest().upper()

    def test_missing_file_raises(self, temp_dir):
        """Read errors are fatal: nothing is swallowed or retried."""
        with pytest.raises(FileNotFoundError):
            HasherImpl().compute_file_hash(str(temp_dir / "deleted.svg"))


class TestAlgorithms:
    """Test algorithm selection by name."""

    def test_for_name_sha256(self):
        hasher = HasherImpl.for_name("sha256")
        assert isinstance(hasher.algorithm, Sha256AlgorithmImpl)

    def test_for_name_xxh64(self):
        hasher = HasherImpl.for_name(HashAlgorithmName.XXH64)
        assert isinstance(hasher.algorithm, XXHashAlgorithmImpl)

    def test_xxh64_token_is_16_hex_chars(self):
        token = HasherImpl(XXHashAlgorithmImpl()).digest(b"bundle")

        assert token == xxhash.xxh64(b"bundle").hexdigest().upper()
        assert len(token) == 16

    def test_xxh64_logs_warning(self, caplog):
        """The non-cryptographic algorithm is an explicit opt-out and says so."""
        with caplog.at_level(logging.WARNING, logger="cachebuster.core.hasher"):
            HasherImpl.for_name("xxh64")

        assert "non-cryptographic" in caplog.text

    def test_sha256_logs_no_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="cachebuster.core.hasher"):
            HasherImpl.for_name("sha256")

        assert caplog.records == []

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError):
            HasherImpl.for_name("md5")
