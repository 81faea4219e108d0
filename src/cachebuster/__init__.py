"""
cachebuster — content-hash file names of static assets for cache busting.

Core features:
- SHA-256 based file names generated at build time: bundle.js -> bundle.<HASH>.js
- Processes files based on an optional MIME type filter
- Files or extensions that must keep their names (vendor bundles, wasm)
- Optional route prefix for the generated paths
- Runtime loader exposing the modified names to the serving application
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("cachebuster")
except Exception:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from cachebuster.commands import CacheBustCommand
from cachebuster.core import (
    BustParams, BustStats, MimeMode, NoHashCategory, NoHashRule, FileMap, ENV_VAR_NAME)
from cachebuster.exceptions import (
    CacheBusterError, ConfigurationError, DuplicateEntryError,
    FileMapLoadError, UnresolvedMediaTypeError)
from cachebuster.loader import FileMapLoader, load_file_map
from cachebuster.config import load_params

__all__ = [
    "CacheBustCommand",
    "BustParams",
    "BustStats",
    "MimeMode",
    "NoHashCategory",
    "NoHashRule",
    "FileMap",
    "ENV_VAR_NAME",
    "CacheBusterError",
    "ConfigurationError",
    "DuplicateEntryError",
    "FileMapLoadError",
    "UnresolvedMediaTypeError",
    "FileMapLoader",
    "load_file_map",
    "load_params",
    "__version__",
]
