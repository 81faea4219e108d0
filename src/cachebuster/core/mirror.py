"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/mirror.py
Prepares the result directory before any file is copied: the previous output
is destroyed, then every directory of the source tree is recreated empty at the
same relative location.
"""

import os
import logging
from typing import List, Optional, Callable

from cachebuster.core.interfaces import DirectoryMirror
from cachebuster.core.scanner import SourceScannerImpl
from cachebuster.services.file_service import FileService

logger = logging.getLogger(__name__)


class DirectoryMirrorImpl(DirectoryMirror):
    """
    Destructive and idempotent: running it twice on the same inputs yields the
    same empty skeleton.
    """

    def __init__(self, follow_links: bool = False, trash_previous: bool = False):
        self.follow_links = follow_links
        self.trash_previous = trash_previous

    def prepare_output(
        self,
        source: str,
        result: str,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[str]:
        if os.path.lexists(result):
            FileService.remove_tree(result, use_trash=self.trash_previous)

        os.makedirs(result)
        logger.debug(f"Created result directory: {result}")

        scanner = SourceScannerImpl(source, follow_links=self.follow_links)
        relative_dirs = scanner.directories()
        created = []

        for index, rel in enumerate(relative_dirs, 1):
            destination = os.path.join(result, rel)
            if not os.path.exists(destination):
                os.mkdir(destination)
                created.append(destination)
            if progress_callback:
                progress_callback('mirroring', index, len(relative_dirs))

        logger.debug(f"Mirrored {len(created)} directories from {source} into {result}")
        return created
