"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem side effects used by the processing pipeline: copying assets,
removing a previous result tree (permanently or to the system trash) and
writing the file map atomically.
"""
import os
import shutil
import logging
import tempfile
from pathlib import Path
from send2trash import send2trash

logger = logging.getLogger(__name__)


class FileService:
    """
    Filesystem operations for the build step.
    Errors are not swallowed: a failing copy or write must stop the build.
    """

    @staticmethod
    def copy_file(source: str, destination: str) -> int:
        """Copies file content and permission bits. Returns the number of bytes copied."""
        shutil.copy(source, destination)
        return os.path.getsize(destination)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file or directory to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remove_tree(cls, dir_path: str, use_trash: bool = False):
        """Removes a directory recursively. Missing directories are ignored."""
        if not os.path.lexists(dir_path):
            return

        if use_trash:
            logger.debug(f"Moving previous output to trash: {dir_path}")
            cls.move_to_trash(dir_path)
        elif os.path.isdir(dir_path) and not os.path.islink(dir_path):
            logger.debug(f"Removing previous output: {dir_path}")
            shutil.rmtree(dir_path)
        else:
            os.remove(dir_path)

    @staticmethod
    def remove_file(file_path: str):
        """Removes a file if it exists."""
        try:
            os.remove(file_path)
            logger.debug(f"Removed stale file: {file_path}")
        except FileNotFoundError:
            pass

    @staticmethod
    def write_text_atomic(file_path: str, text: str):
        """
        Writes text through a temporary file in the same directory and renames it
        into place, so readers never observe a half-written file.
        """
        directory = os.path.dirname(os.path.abspath(file_path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".cachebuster-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(text)
            os.replace(tmp_path, file_path)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError:
                pass
            raise
