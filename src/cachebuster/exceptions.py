"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

exceptions.py
Error taxonomy for cachebuster. Every failure is fatal at build time;
nothing here is meant to be retried.
"""


class CacheBusterError(Exception):
    """Base class for all cachebuster errors."""


class ConfigurationError(CacheBusterError, ValueError):
    """Invalid parameters, reported before the filesystem is touched."""


class UnresolvedMediaTypeError(CacheBusterError, RuntimeError):
    """Media type of a file could not be guessed while running in strict mode."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Couldn't resolve MIME for file: {path}")


class DuplicateEntryError(CacheBusterError, KeyError):
    """A key was inserted twice into a FileMap."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Key exists: {self.key}"


class FileMapLoadError(CacheBusterError, RuntimeError):
    """A serialized file map is missing or malformed."""
