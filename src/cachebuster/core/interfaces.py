"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the fingerprinting pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so that
hash functions, the output preparation step and the processor can be swapped
independently (for example in tests).

Key Components:
---------------
- HashAlgorithm: Standardized interface for hash functions (e.g., SHA-256, xxHash).
- Hasher: Interface for turning bytes or a file into a filename-safe token.
- DirectoryMirror: Interface for preparing the result directory skeleton.
- FileProcessor: Interface for the walk → hash → copy → map pass.
"""

from typing import Protocol, List, Optional, Callable
from cachebuster.core.filemap import FileMap


# ===== Interfaces =====

class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the processing logic.
    """

    @staticmethod
    def hash(data: bytes) -> bytes:
        """Computes the hash of the provided byte data."""
        ...


class Hasher(Protocol):
    """Interface for rendering content hashes as filename tokens."""
    def digest(self, data: bytes) -> str: ...
    def compute_file_hash(self, path: str) -> str: ...


class DirectoryMirror(Protocol):
    """
    Interface for recreating the source directory structure under the result directory.
    """
    def prepare_output(
        self,
        source: str,
        result: str,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[str]:
        """
        Destroy and recreate `result`, then mirror every directory of `source` into it.

        Args:
            source: Directory whose structure is mirrored.
            result: Output directory, removed first if it exists.
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            List of directories created under `result`.
        """
        ...


class FileProcessor(Protocol):
    """
    Interface for the main processing pass.

    Walks the source tree, fingerprints or passes through each qualifying file,
    copies it to the result directory and records the mapping.
    """
    def process(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> FileMap:
        """
        Run the full pass.

        Args:
            progress_callback: Optional callback for progress updates (stage, current, total).

        Returns:
            The populated FileMap.
        """
        ...
