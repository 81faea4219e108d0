"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/filemap.py
The lookup table produced by a processing run: original path -> fingerprinted path.

A FileMap is write-once per key. It serializes to a small JSON object
({"map": {...}, "base_dir": "..."}) that the build step hands to the serving
process through a file or an environment variable.
"""

import json
import logging
from typing import Dict, Iterator, Optional, Any

from cachebuster.exceptions import DuplicateEntryError, FileMapLoadError
from cachebuster.services.file_service import FileService

logger = logging.getLogger(__name__)

ENV_VAR_NAME = "CACHE_BUSTER_FILE_MAP"


class FileMap:
    """
    Maps original names to generated names.

    Attributes:
        map: original path -> fingerprinted path
        base_dir: destination root every fingerprinted path starts with
    """

    def __init__(self, base_dir: str = "", entries: Optional[Dict[str, str]] = None):
        self.base_dir = base_dir
        self.map: Dict[str, str] = dict(entries) if entries else {}
        self.frozen = False

    def add(self, original: str, fingerprinted: str) -> None:
        """Record a mapping. Raises DuplicateEntryError if `original` is already present."""
        if self.frozen:
            raise TypeError("FileMap is read-only after loading")
        if original in self.map:
            raise DuplicateEntryError(original)
        self.map[original] = fingerprinted

    def get(self, original: str) -> Optional[str]:
        """
        Get the fingerprinted path relative to base_dir.

        If the stored path is `./prod/test.<HASH>.svg` and base_dir is `./prod`,
        returns `/test.<HASH>.svg`. For the stored path, see get_full_path().
        """
        path = self.map.get(original)
        if path is None:
            return None
        if self.base_dir and path.startswith(self.base_dir):
            return path[len(self.base_dir):]
        return path

    def get_full_path(self, original: str) -> Optional[str]:
        """Get the fingerprinted path exactly as recorded, base_dir included."""
        return self.map.get(original)

    def freeze(self) -> 'FileMap':
        self.frozen = True
        return self

    # ---- serialization ----

    def to_dict(self) -> Dict[str, Any]:
        return {"map": dict(self.map), "base_dir": self.base_dir}

    @classmethod
    def from_dict(cls, data: Any) -> 'FileMap':
        if not isinstance(data, dict):
            raise FileMapLoadError(f"File map must be an object, got {type(data).__name__}")
        entries = data.get("map")
        base_dir = data.get("base_dir")
        if not isinstance(entries, dict) or not isinstance(base_dir, str):
            raise FileMapLoadError("File map must contain 'map' (object) and 'base_dir' (string)")
        for key, value in entries.items():
            if not isinstance(value, str):
                raise FileMapLoadError(f"Invalid entry for {key!r}: expected string path")
        return cls(base_dir=base_dir, entries=entries)

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, payload: str) -> 'FileMap':
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            raise FileMapLoadError(f"Malformed file map payload: {e}") from e
        return cls.from_dict(data)

    def to_env(self) -> Dict[str, str]:
        """Environment-style transport: {CACHE_BUSTER_FILE_MAP: <json>}."""
        return {ENV_VAR_NAME: self.to_json()}

    def write(self, path: str) -> None:
        """Persist the map as JSON. The file is replaced atomically."""
        FileService.write_text_atomic(path, self.to_json(indent=2))
        logger.debug(f"Wrote file map with {len(self.map)} entries to {path}")

    # ---- container protocol ----

    def __contains__(self, original: object) -> bool:
        return original in self.map

    def __iter__(self) -> Iterator[str]:
        return iter(self.map)

    def __len__(self) -> int:
        return len(self.map)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileMap):
            return NotImplemented
        return self.map == other.map and self.base_dir == other.base_dir

    def __repr__(self):
        return f"<FileMap base_dir={self.base_dir}, entries={len(self.map)}>"
