"""
Tests for FileService filesystem operations.
"""
import os
from unittest.mock import patch

import pytest

from cachebuster.services.file_service import FileService


class TestCopyFile:
    def test_copies_content_and_returns_size(self, temp_dir):
        src = temp_dir / "a.css"
        src.write_bytes(b"body{}")
        dst = temp_dir / "b.css"

        assert FileService.copy_file(str(src), str(dst)) == 6
        assert dst.read_bytes() == b"body{}"

    def test_missing_source_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            FileService.copy_file(str(temp_dir / "missing"), str(temp_dir / "out"))


class TestMoveToTrash:
    def test_calls_send2trash(self, temp_dir):
        path = temp_dir / "old"
        path.mkdir()
        with patch("cachebuster.services.file_service.send2trash") as send2trash:
            FileService.move_to_trash(str(path))
        send2trash.assert_called_once_with(str(path.resolve()))

    def test_missing_path_raises(self, temp_dir):
        with pytest.raises(FileNotFoundError, match="File not found"):
            FileService.move_to_trash(str(temp_dir / "missing"))

    def test_trash_failure_wrapped(self, temp_dir):
        path = temp_dir / "old"
        path.mkdir()
        with patch("cachebuster.services.file_service.send2trash", side_effect=OSError("no trash")):
            with pytest.raises(RuntimeError, match="Failed to move to trash"):
                FileService.move_to_trash(str(path))


class TestRemoveTree:
    def test_removes_directory(self, temp_dir):
        target = temp_dir / "prod" / "css"
        target.mkdir(parents=True)
        (target / "main.css").write_text("x")

        FileService.remove_tree(str(temp_dir / "prod"))

        assert not (temp_dir / "prod").exists()

    def test_missing_directory_ignored(self, temp_dir):
        FileService.remove_tree(str(temp_dir / "missing"))

    def test_use_trash(self, temp_dir):
        (temp_dir / "prod").mkdir()
        with patch.object(FileService, "move_to_trash") as move_to_trash:
            FileService.remove_tree(str(temp_dir / "prod"), use_trash=True)
        move_to_trash.assert_called_once_with(str(temp_dir / "prod"))

    @pytest.mark.skipif(os.name == "nt", reason="symlinks required")
    def test_symlink_removed_not_followed(self, temp_dir):
        real = temp_dir / "real"
        real.mkdir()
        (real / "keep.txt").write_text("x")
        link = temp_dir / "link"
        os.symlink(real, link)

        FileService.remove_tree(str(link))

        assert not os.path.lexists(link)
        assert (real / "keep.txt").exists()


class TestWriteTextAtomic:
    def test_writes_and_replaces(self, temp_dir):
        path = temp_dir / "map.json"
        path.write_text("old")

        FileService.write_text_atomic(str(path), "new")

        assert path.read_text(encoding="utf-8") == "new"
        assert [p.name for p in temp_dir.iterdir()] == ["map.json"]

    def test_failure_leaves_no_temp_file(self, temp_dir):
        path = temp_dir / "map.json"
        with patch("cachebuster.services.file_service.os.replace", side_effect=OSError("boom")):
            with pytest.raises(OSError):
                FileService.write_text_atomic(str(path), "data")

        assert list(temp_dir.iterdir()) == []

    def test_remove_file_ignores_missing(self, temp_dir):
        FileService.remove_file(str(temp_dir / "missing.json"))
