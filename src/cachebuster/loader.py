"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

loader.py
Runtime side: rebuild the file map inside the serving application.

    from cachebuster.loader import FileMapLoader

    FILES = FileMapLoader("./cache_buster_data.json")
    FILES.get().get_full_path("./static/cachable/css/main.css")

A missing or malformed table is fatal; there is no degraded mode.
"""

import os
import shlex
import logging
from typing import Mapping, Optional, Union

from cachebuster.core.filemap import FileMap, ENV_VAR_NAME
from cachebuster.exceptions import FileMapLoadError

logger = logging.getLogger(__name__)

FileMapSource = Union[None, str, "os.PathLike[str]", Mapping]


def load_file_map(source: FileMapSource = None) -> FileMap:
    """
    Load a read-only FileMap.

    Args:
        source:
            None            -> the CACHE_BUSTER_FILE_MAP environment variable
            path / PathLike -> JSON file written by the build step
            JSON string     -> parsed directly. A string is taken as a payload
                               when it starts with '{' and no file of that name
                               exists, so "{name}.json" still loads the file
            Mapping         -> an already-decoded {"map": ..., "base_dir": ...}

    Raises:
        FileMapLoadError: source missing or payload malformed.
    """
    if source is None:
        payload = os.environ.get(ENV_VAR_NAME)
        if payload is None:
            raise FileMapLoadError(
                f"Environment variable {ENV_VAR_NAME} is not set; "
                f"run the build step before starting the application"
            )
        logger.debug(f"Loading file map from environment variable {ENV_VAR_NAME}")
        file_map = FileMap.from_json(payload)

    elif isinstance(source, Mapping):
        file_map = FileMap.from_dict(dict(source))

    elif (isinstance(source, str) and source.lstrip().startswith("{")
          and not os.path.isfile(source)):
        file_map = FileMap.from_json(source)

    elif isinstance(source, (str, os.PathLike)):
        path = os.fspath(source)
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = f.read()
        except OSError as e:
            raise FileMapLoadError(f"Unable to read file map {path}: {e}") from e
        logger.debug(f"Loading file map from {path}")
        file_map = FileMap.from_json(payload)

    else:
        raise FileMapLoadError(f"Unsupported file map source: {type(source).__name__}")

    logger.debug(f"Loaded file map with {len(file_map)} entries (base_dir={file_map.base_dir})")
    return file_map.freeze()


class FileMapLoader:
    """
    Process-wide holder for a loaded file map. Loads once on first access;
    the map is never mutated afterwards and can be read from any thread.
    """

    def __init__(self, source: FileMapSource = None):
        self.source = source
        self._file_map: Optional[FileMap] = None

    def get(self) -> FileMap:
        if self._file_map is None:
            self._file_map = load_file_map(self.source)
        return self._file_map

    def lookup(self, original: str) -> Optional[str]:
        """Shortcut for get().get(original)."""
        return self.get().get(original)

    def lookup_full_path(self, original: str) -> Optional[str]:
        return self.get().get_full_path(original)


def dumps_env(file_map: FileMap, shell: bool = False) -> str:
    """
    Render `CACHE_BUSTER_FILE_MAP=<json>` for env files.

    The default form carries the raw JSON unquoted, which `docker --env-file`
    reads back verbatim. With `shell=True` the value is single-quoted for
    `export`, `source` and systemd `EnvironmentFile`.
    """
    payload = file_map.to_json()
    if shell:
        return f"{ENV_VAR_NAME}={shlex.quote(payload)}"
    return f"{ENV_VAR_NAME}={payload}"
