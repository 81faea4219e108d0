"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements content hashing using pluggable hash algorithms.

HasherImpl reads a whole file into memory, hashes it and renders the digest as
an upper-case hexadecimal token that is safe to embed in a filename.
"""

import hashlib
import logging

import xxhash

from cachebuster.core.interfaces import HashAlgorithm, Hasher
from cachebuster.core.models import HashAlgorithmName

logger = logging.getLogger(__name__)


class Sha256AlgorithmImpl(HashAlgorithm):
    @staticmethod
    def hash(data: bytes) -> bytes:
        return hashlib.sha256(data).digest()


# Use the same way to implement and use any other hashing algorithm
class XXHashAlgorithmImpl(HashAlgorithm):
    """Fast, non-cryptographic. Only used when explicitly requested."""
    @staticmethod
    def hash(data: bytes) -> bytes:
        return xxhash.xxh64(data).digest()


ALGORITHMS = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXH64: XXHashAlgorithmImpl,
}


class HasherImpl(Hasher):
    """
    A hasher implementation that supports any algorithm via the HashAlgorithm interface.
    Identical bytes always yield the identical token.
    """

    def __init__(self, algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or Sha256AlgorithmImpl()

    @classmethod
    def for_name(cls, name) -> 'HasherImpl':
        """Builds a hasher from a HashAlgorithmName (or its string value)."""
        name = HashAlgorithmName(name)
        if name != HashAlgorithmName.SHA256:
            logger.warning(
                f"Using non-cryptographic hash {name.value}: file names are not "
                f"collision resistant, use sha256 for untrusted content"
            )
        return cls(ALGORITHMS[name]())

    def digest(self, data: bytes) -> str:
        return self.algorithm.hash(data).hex().upper()

    def compute_file_hash(self, path: str) -> str:
        """Reads the full content of a file and returns its token. Read errors propagate."""
        with open(path, 'rb') as f:
            data = f.read()
        token = self.digest(data)
        logger.debug(f"Hashed {path} ({len(data)} bytes): {token}")
        return token
