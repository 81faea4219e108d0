"""
Core fingerprinting engine — scanner, hasher, directory mirror, processor and file map.

This package contains the whole build-time pass:
- SourceScannerImpl: deterministic depth-first traversal of the source tree
- HasherImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: upper-case hex content tokens
- DirectoryMirrorImpl: recreates the source directory skeleton under the result directory
- FileProcessorImpl: classification, hashing, copying and map construction
- FileMap: the original path -> fingerprinted path lookup table
- Models: BustParams, NoHashRule, FileEntry, BustStats

All components are plain synchronous Python, usable from build scripts and the CLI.
"""

from .filemap import FileMap, ENV_VAR_NAME
from .scanner import SourceScannerImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl
from .mirror import DirectoryMirrorImpl
from .processor import FileProcessorImpl
from .models import (
    BustParams, BustStats, FileEntry, HashAlgorithmName, MimeMode,
    NoHashCategory, NoHashRule)

__all__ = [
    "FileMap",
    "ENV_VAR_NAME",
    "SourceScannerImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "DirectoryMirrorImpl",
    "FileProcessorImpl",
    "BustParams",
    "BustStats",
    "FileEntry",
    "HashAlgorithmName",
    "MimeMode",
    "NoHashCategory",
    "NoHashRule",
]
