"""
Tests for CacheBustCommand, the entry point shared by build scripts and the CLI.
"""
import os

import pytest

from cachebuster.commands import CacheBustCommand
from cachebuster.core.models import BustParams, NoHashRule
from cachebuster.exceptions import UnresolvedMediaTypeError
from cachebuster.loader import load_file_map


class TestCacheBustCommand:
    def test_execute_returns_map_and_stats(self, dist, result_dir, temp_dir):
        params = BustParams(
            source="./dist",
            result=str(result_dir),
            no_hash=[NoHashRule.extensions("wasm")],
        )
        command = CacheBustCommand()
        file_map, stats = command.execute(params)

        assert command.get_file_map() is file_map
        assert stats.processed == len(dist)
        assert stats.passed_through == 1

    def test_build_then_load(self, dist, result_dir, temp_dir):
        """The map written by the build step is what the application loads."""
        params = BustParams(source="./dist", result=str(result_dir))
        file_map, _ = CacheBustCommand().execute(params)

        loaded = load_file_map(str(temp_dir / "cache_buster_data.json"))

        assert loaded == file_map
        assert os.path.isfile(loaded.get_full_path("./dist/css/main.css"))

    def test_failure_keeps_no_map(self, dist, result_dir):
        (dist["bell"].parent / "blob.zzq").write_bytes(b"?")
        params = BustParams(source="./dist", result=str(result_dir),
                            mime_types=["image/png"], data_file=None)
        command = CacheBustCommand()

        with pytest.raises(UnresolvedMediaTypeError):
            command.execute(params)
        assert command.get_file_map() is None

    def test_initial_state(self):
        assert CacheBustCommand().get_file_map() is None
