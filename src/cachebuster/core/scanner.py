"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Deterministic depth-first traversal of the source tree.
Features:
- Sorted directory and file order, so repeated runs visit files identically
- Symbolic links to directories are only entered when follow_links is set
- Filesystem errors and symlink loops abort the walk instead of being skipped
- Paths keep the form of the configured root (`./dist` stays `./dist/...`)
"""

import errno
import os
from typing import List, Iterator, Tuple
import logging

logger = logging.getLogger(__name__)

# Local imports
from cachebuster.core.models import FileEntry


class SourceScannerImpl:
    """
    Walks a source directory and yields its directories and regular files.

    Attributes:
        root_dir: Root directory to walk
        follow_links: Whether symlinked directories are traversed
    """

    def __init__(self, root_dir: str, follow_links: bool = False):
        self.root_dir = root_dir
        self.follow_links = follow_links

    def walk(self) -> Iterator[Tuple[str, List[str], List[str]]]:
        """
        Yields (directory, subdirectories, files) top-down, sorted by name.
        """
        if not os.path.exists(self.root_dir):
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not os.path.isdir(self.root_dir):
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        # realpaths of every directory from the root down to the key directory
        ancestors = {self.root_dir: (os.path.realpath(self.root_dir),)}

        for root, dirs, files in os.walk(self.root_dir, followlinks=self.follow_links,
                                         onerror=self._raise):
            chain = ancestors.pop(root, ())
            if self.follow_links:
                for d in dirs:
                    child = os.path.join(root, d)
                    real = os.path.realpath(child)
                    if real in chain:
                        logger.error(f"Filesystem loop detected: {child} -> {real}")
                        raise OSError(errno.ELOOP, "Filesystem loop detected", child)
                    ancestors[child] = chain + (real,)
            else:
                # os.walk lists symlinked directories but won't enter them
                dirs[:] = [d for d in dirs if not os.path.islink(os.path.join(root, d))]

            dirs.sort()
            files.sort()
            yield root, dirs, files

    def directories(self) -> List[str]:
        """Relative paths of every directory below the root, parents first."""
        found = []
        for root, dirs, _ in self.walk():
            for d in dirs:
                found.append(self._relative(os.path.join(root, d)))
        return found

    def scan(self) -> List[FileEntry]:
        """
        Returns one FileEntry per file found in the tree.
        Entries are not filtered here; classification is the processor's job.
        """
        logger.debug(f"Scanning directory: {self.root_dir} (follow_links={self.follow_links})")
        found_files = []
        for root, _, files in self.walk():
            relative_dir = self._relative(root)
            for filename in files:
                path = os.path.join(root, filename)
                found_files.append(FileEntry(source=path, relative_dir=relative_dir))

        logger.debug(f"Scan completed. Found {len(found_files)} files.")
        return found_files

    def _relative(self, path: str) -> str:
        rel = os.path.relpath(path, self.root_dir)
        return "" if rel == os.curdir else rel

    @staticmethod
    def _raise(error: OSError):
        logger.error(f"Error while walking source tree: {error}")
        raise error
