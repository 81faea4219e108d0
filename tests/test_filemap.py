"""
Unit tests for FileMap: write-once insertion, exact lookup and serialization.
"""
import json

import pytest

from cachebuster.core.filemap import FileMap, ENV_VAR_NAME
from cachebuster.exceptions import DuplicateEntryError, FileMapLoadError


@pytest.fixture
def file_map():
    fm = FileMap(base_dir="./prod")
    fm.add("./static/test.svg", "./prod/test.ABC123.svg")
    fm.add("./static/css/main.css", "./prod/css/main.DEF456.css")
    return fm


class TestFileMapLookup:
    """Test exact-match lookups."""

    def test_get_strips_base_dir(self, file_map):
        assert file_map.get("./static/test.svg") == "/test.ABC123.svg"

    def test_get_full_path_keeps_base_dir(self, file_map):
        assert file_map.get_full_path("./static/test.svg") == "./prod/test.ABC123.svg"

    def test_missing_key_returns_none(self, file_map):
        assert file_map.get("./static/missing.svg") is None
        assert file_map.get_full_path("./static/missing.svg") is None

    def test_lookup_is_exact(self, file_map):
        """No path normalization: a different spelling is a different key."""
        assert file_map.get("static/test.svg") is None
        assert file_map.get("./static//test.svg") is None

    def test_path_outside_base_dir_returned_as_is(self):
        fm = FileMap(base_dir="/srv/prod", entries={"a.js": "/cdn/a.1.js"})
        assert fm.get("a.js") == "/cdn/a.1.js"

    def test_empty_base_dir(self):
        fm = FileMap(entries={"a.js": "out/a.1.js"})
        assert fm.get("a.js") == "out/a.1.js"

    def test_container_protocol(self, file_map):
        assert len(file_map) == 2
        assert "./static/test.svg" in file_map
        assert sorted(file_map) == ["./static/css/main.css", "./static/test.svg"]


class TestFileMapInsert:
    """Test write-once semantics."""

    def test_duplicate_key_raises(self, file_map):
        with pytest.raises(DuplicateEntryError) as exc_info:
            file_map.add("./static/test.svg", "./prod/other.svg")

        assert str(exc_info.value) == "Key exists: ./static/test.svg"
        assert file_map.get_full_path("./static/test.svg") == "./prod/test.ABC123.svg"

    def test_duplicate_is_a_key_error(self, file_map):
        with pytest.raises(KeyError):
            file_map.add("./static/test.svg", "./prod/other.svg")

    def test_frozen_map_rejects_add(self, file_map):
        file_map.freeze()
        with pytest.raises(TypeError):
            file_map.add("./static/new.svg", "./prod/new.svg")


class TestFileMapSerialization:
    """Test the JSON transport format."""

    def test_to_dict_shape(self, file_map):
        data = file_map.to_dict()
        assert set(data) == {"map", "base_dir"}
        assert data["base_dir"] == "./prod"

    def test_json_round_trip(self, file_map):
        assert FileMap.from_json(file_map.to_json()) == file_map

    def test_to_env(self, file_map):
        env = file_map.to_env()
        assert list(env) == [ENV_VAR_NAME]
        assert json.loads(env[ENV_VAR_NAME])["map"] == file_map.map

    def test_write_creates_json_file(self, file_map, temp_dir):
        path = temp_dir / "nested" / "cache_buster_data.json"
        file_map.write(str(path))

        with open(path, encoding="utf-8") as f:
            assert json.load(f) == file_map.to_dict()
        assert [p.name for p in path.parent.iterdir()] == ["cache_buster_data.json"]

    @pytest.mark.parametrize("payload", [
        "not json",
        "[1, 2]",
        '{"map": {}}',
        '{"map": [], "base_dir": ""}',
        '{"map": {"a": 1}, "base_dir": ""}',
    ])
    def test_malformed_payload_raises(self, payload):
        with pytest.raises(FileMapLoadError):
            FileMap.from_json(payload)
