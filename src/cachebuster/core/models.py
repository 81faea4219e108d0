"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for asset fingerprinting: processing parameters, no-hash rules,
transient file entries and run statistics.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Callable
import os
from enum import Enum

from cachebuster.exceptions import ConfigurationError


DEFAULT_DATA_FILE = "./cache_buster_data.json"


# =============================
# Enums
# =============================

class MimeMode(Enum):
    """
    What to do with a file whose media type can't be guessed
    while a media-type filter is configured.
    """
    STRICT = "strict"
    PERMISSIVE = "permissive"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            MimeMode.STRICT: "Strict",
            MimeMode.PERMISSIVE: "Permissive",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            MimeMode.STRICT:
                "Abort the run on files with an unknown media type",
            MimeMode.PERMISSIVE:
                "Silently skip files with an unknown media type",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class NoHashCategory(Enum):
    FILE_EXTENSIONS = "extensions"
    FILE_PATHS = "paths"


class HashAlgorithmName(str, Enum):
    SHA256 = "sha256"
    XXH64 = "xxh64"


# ======================
#  Core Data Models
# ======================

@dataclass
class NoHashRule:
    """
    Files matching a rule are copied without a hash in their name.

    Useful for vendor files that reference each other by name, where renaming
    one would break the others.

        NoHashRule.extensions("wasm")
        NoHashRule.paths("swagger-ui-bundle.js", "favicon-16x16.png")
    """
    category: NoHashCategory
    items: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.category == NoHashCategory.FILE_EXTENSIONS:
            normalized = []
            for ext in self.items:
                ext = ext.strip().lower()
                if ext and not ext.startswith('.'):
                    ext = f".{ext}"
                if ext:
                    normalized.append(ext)
            self.items = normalized

    @classmethod
    def extensions(cls, *extensions: str) -> 'NoHashRule':
        return cls(NoHashCategory.FILE_EXTENSIONS, list(extensions))

    @classmethod
    def paths(cls, *paths: str) -> 'NoHashRule':
        return cls(NoHashCategory.FILE_PATHS, list(paths))


@dataclass
class FileEntry:
    """
    A single source file during a processing pass. Never persisted.
    """
    source: str
    relative_dir: str
    size: int = 0
    name: Optional[str] = None
    stem: Optional[str] = None
    extension: Optional[str] = None  # with leading dot, original case
    mime_type: Optional[str] = None
    no_hash: bool = False
    content_hash: Optional[str] = None
    destination: Optional[str] = None

    def __post_init__(self):
        """Automatically extract basename, stem and extension from path if not provided."""
        if self.name is None:
            self.name = os.path.basename(self.source)

        if self.stem is None or self.extension is None:
            stem, ext = os.path.splitext(self.name)
            if self.stem is None:
                self.stem = stem
            if self.extension is None:
                self.extension = ext

    @property
    def fingerprinted_name(self) -> str:
        """Name the file gets in the result directory."""
        if self.no_hash or self.content_hash is None:
            return self.name
        return f"{self.stem}.{self.content_hash}{self.extension}"

    def __repr__(self):
        return f"<FileEntry source={self.source}, no_hash={self.no_hash}>"


@dataclass
class BustStats:
    """
    Statistics collected during a processing run.
    """
    hashed: int = 0
    passed_through: int = 0
    skipped: int = 0
    directories: int = 0
    bytes_copied: int = 0
    total_time: float = 0.0
    _listeners: List[Callable[[str, Dict], None]] = field(default_factory=list, repr=False)

    def add_listener(self, listener: Callable[[str, Dict], None]):
        """Adds a listener to receive updates when stats are updated."""
        self._listeners.append(listener)

    def record(self, entry: FileEntry) -> None:
        if entry.no_hash:
            self.passed_through += 1
        else:
            self.hashed += 1
        self.bytes_copied += entry.size
        self._notify("file", {"source": entry.source, "destination": entry.destination})

    def record_skip(self, path: str) -> None:
        self.skipped += 1
        self._notify("skip", {"source": path})

    def _notify(self, event: str, data: Dict) -> None:
        for listener in self._listeners:
            listener(event, data)

    @property
    def processed(self) -> int:
        return self.hashed + self.passed_through

    def print_summary(self) -> str:
        lines = [
            "📊 Cache Busting Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            f"📁 Directories mirrored: {self.directories}",
            f"🔐 Fingerprinted files: {self.hashed}",
            f"📄 Passed through: {self.passed_through}",
            f"⏭️ Skipped: {self.skipped}",
            f"💾 Bytes copied: {self.bytes_copied}",
        ]
        return "\n".join(lines)


"""
DTO for processing parameters with built-in validation.
Interface-agnostic — used by build scripts, the config loader and the CLI.
"""

@dataclass
class BustParams:
    """
    Parameters for a cache-busting run with validation.

    `algorithm` defaults to SHA-256, which keeps fingerprinted names collision
    resistant. `xxh64` is faster but not cryptographic; it is accepted only as
    an explicit opt-out for trusted inputs and logs a warning when used.
    """
    source: str
    result: str
    mime_types: Optional[List[str]] = None
    prefix: Optional[str] = None
    copy: bool = True
    follow_links: bool = False
    no_hash: List[NoHashRule] = field(default_factory=list)
    mime_mode: MimeMode = MimeMode.STRICT
    algorithm: Union[HashAlgorithmName, str] = HashAlgorithmName.SHA256
    data_file: Optional[str] = DEFAULT_DATA_FILE
    trash_previous: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source:
            raise ConfigurationError("Source directory cannot be empty")

        if not self.result:
            raise ConfigurationError("Result directory cannot be empty")

        if not os.path.isdir(self.source):
            raise ConfigurationError(f"Source is not a directory: {self.source}")

        source_real = os.path.realpath(self.source)
        result_real = os.path.realpath(self.result)
        if source_real == result_real:
            raise ConfigurationError("Result directory cannot be the source directory")
        if os.path.commonpath([source_real, result_real]) in (source_real, result_real):
            raise ConfigurationError(
                f"Source and result directories cannot be nested: {self.source}, {self.result}"
            )

        try:
            self.algorithm = HashAlgorithmName(self.algorithm)
        except ValueError:
            raise ConfigurationError(f"Unknown hash algorithm: {self.algorithm}") from None

        if not isinstance(self.mime_mode, MimeMode):
            try:
                self.mime_mode = MimeMode(self.mime_mode)
            except ValueError:
                raise ConfigurationError(f"Unknown MIME mode: {self.mime_mode}") from None

        if self.mime_types is not None:
            self.mime_types = [m.strip().lower() for m in self.mime_types if m.strip()]

        if self.prefix == "":
            self.prefix = None

        if not self.data_file:
            self.data_file = None

        for rule in self.no_hash:
            if rule.category != NoHashCategory.FILE_PATHS:
                continue
            for file in rule.items:
                if not os.path.exists(os.path.join(self.source, file)):
                    raise ConfigurationError(f"File {file} doesn't exist")

    @property
    def no_hash_paths(self) -> List[str]:
        """Normalized source-joined paths excluded from hashing."""
        return [
            os.path.normpath(os.path.join(self.source, item))
            for rule in self.no_hash if rule.category == NoHashCategory.FILE_PATHS
            for item in rule.items
        ]

    @property
    def no_hash_extensions(self) -> List[str]:
        return [
            item
            for rule in self.no_hash if rule.category == NoHashCategory.FILE_EXTENSIONS
            for item in rule.items
        ]

    @staticmethod
    def from_lists(
            source: str,
            result: str,
            no_hash_paths: Optional[List[str]] = None,
            no_hash_extensions: Optional[List[str]] = None,
            **kwargs,
    ) -> 'BustParams':
        """
        Factory method to create params from flat lists of exclusions.
        Useful for CLI argument parsing or config file conversion.
        """
        rules = []
        if no_hash_paths:
            rules.append(NoHashRule.paths(*no_hash_paths))
        if no_hash_extensions:
            rules.append(NoHashRule.extensions(*no_hash_extensions))

        return BustParams(source=source, result=result, no_hash=rules, **kwargs)
