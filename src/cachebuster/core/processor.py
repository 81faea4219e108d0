"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/processor.py
The processing pass: mirror the output tree, walk the source, fingerprint or
pass through each qualifying file, copy it and record the mapping.

CLASSIFICATION
--------------
For every regular file, in walk order:
  • Media-type filter (only when mime_types is set): the type is guessed from the
    extension. Unknown types abort the run (STRICT) or are skipped (PERMISSIVE).
    Known types outside the filter are copied through unchanged when `copy` is
    set, and skipped otherwise.
  • No-hash rules: an exact source-relative path or an extension match keeps the
    original file name.
  • Everything else is renamed to `{stem}.{HASH}.{ext}`.

DESTINATIONS
------------
Bytes are always written under `result`. The path recorded in the file map is
rooted at `result`, or at `prefix/<result without its leading slash>` when a
route prefix is configured.
"""

import mimetypes
import os
import time
import logging
from typing import Optional, Callable

from cachebuster.core.filemap import FileMap
from cachebuster.core.hasher import HasherImpl
from cachebuster.core.interfaces import FileProcessor, Hasher, DirectoryMirror
from cachebuster.core.mirror import DirectoryMirrorImpl
from cachebuster.core.models import BustParams, BustStats, FileEntry, MimeMode
from cachebuster.core.scanner import SourceScannerImpl
from cachebuster.exceptions import UnresolvedMediaTypeError
from cachebuster.services.file_service import FileService

logger = logging.getLogger(__name__)


class FileProcessorImpl(FileProcessor):
    """
    Single-threaded, single-pass processor. The first error aborts the run and
    no file map is persisted.
    """

    def __init__(
            self,
            params: BustParams,
            hasher: Optional[Hasher] = None,
            mirror: Optional[DirectoryMirror] = None,
            stats: Optional[BustStats] = None,
    ):
        self.params = params
        self.hasher = hasher or HasherImpl.for_name(params.algorithm)
        self.mirror = mirror or DirectoryMirrorImpl(
            follow_links=params.follow_links,
            trash_previous=params.trash_previous,
        )
        self.stats = stats or BustStats()
        self._no_hash_paths = set(params.no_hash_paths)
        self._no_hash_extensions = set(params.no_hash_extensions)

    @property
    def destination_root(self) -> str:
        """Root of every path recorded in the file map."""
        result = self.params.result
        if self.params.prefix:
            if result.startswith('/'):
                result = result[1:]
            return os.path.join(self.params.prefix, result)
        return result

    def process(
            self,
            progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> FileMap:
        params = self.params
        start_time = time.time()
        logger.debug(f"Processing {params.source} -> {params.result}")

        # a failed run must not leave the previous table behind
        if params.data_file:
            FileService.remove_file(params.data_file)

        created = self.mirror.prepare_output(params.source, params.result, progress_callback)
        self.stats.directories = len(created)

        file_map = FileMap(base_dir=self.destination_root)
        entries = SourceScannerImpl(params.source, follow_links=params.follow_links).scan()

        for index, entry in enumerate(entries, 1):
            if self._select(entry):
                self._process_entry(entry, file_map)
            else:
                self.stats.record_skip(entry.source)
            if progress_callback:
                progress_callback('processing', index, len(entries))

        if params.data_file:
            file_map.write(params.data_file)

        self.stats.total_time = time.time() - start_time
        logger.debug(
            f"Processed {self.stats.processed} files "
            f"({self.stats.hashed} fingerprinted, {self.stats.passed_through} passed through, "
            f"{self.stats.skipped} skipped) in {self.stats.total_time:.2f}s"
        )
        return file_map

    def _select(self, entry: FileEntry) -> bool:
        """
        Decide whether a file is processed and whether it keeps its name.
        Returns False when the file is skipped entirely.
        """
        mime_types = self.params.mime_types
        if mime_types is not None:
            mime_type, _ = mimetypes.guess_type(entry.name)
            if mime_type is None:
                if self.params.mime_mode == MimeMode.STRICT:
                    logger.error(f"Couldn't resolve MIME for file: {entry.source}")
                    raise UnresolvedMediaTypeError(entry.source)
                logger.debug(f"Skipping {entry.source} (unresolved MIME)")
                return False

            entry.mime_type = mime_type
            if mime_type not in mime_types:
                if not self.params.copy:
                    logger.debug(f"Skipping {entry.source} ({mime_type} not in filter)")
                    return False
                entry.no_hash = True
                return True

        entry.no_hash = self._is_no_hash(entry)
        return True

    def _is_no_hash(self, entry: FileEntry) -> bool:
        if os.path.normpath(entry.source) in self._no_hash_paths:
            return True
        return bool(entry.extension) and entry.extension.lower() in self._no_hash_extensions

    def _process_entry(self, entry: FileEntry, file_map: FileMap) -> None:
        if not entry.no_hash:
            entry.content_hash = self.hasher.compute_file_hash(entry.source)

        name = entry.fingerprinted_name
        write_path = os.path.join(self.params.result, entry.relative_dir, name)
        entry.size = FileService.copy_file(entry.source, write_path)
        entry.destination = os.path.join(self.destination_root, entry.relative_dir, name)

        file_map.add(entry.source, entry.destination)
        self.stats.record(entry)
        logger.debug(f"Accepted file: {entry.source} -> {entry.destination}")
