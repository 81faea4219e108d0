"""
Shared fixtures for cachebuster tests.
Creates isolated temporary directories with a controlled asset tree.
"""
import mimetypes
import pytest
import tempfile
from pathlib import Path
from typing import Dict

SVG = b'<svg xmlns="http://www.w3.org/2000/svg"><path d="M0 0h24v24H0z"/></svg>'
PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
CSS = b"body { color: #222; }\n"
WASM = b"\x00asm\x01\x00\x00\x00"

WASM_NAME = "858fd6c482cc75111d54.module.wasm"

# older interpreters and minimal images don't know .wasm
mimetypes.add_type("application/wasm", ".wasm")


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dist(temp_dir, monkeypatch) -> Dict[str, Path]:
    """
    Creates an asset tree at <temp_dir>/dist and switches the working directory
    to <temp_dir>, so the tree can be addressed as "./dist" like in a build script:

    dist/
      log-out.svg
      bell.svg
      eye.svg
      logo.png
      858fd6c482cc75111d54.module.wasm
      css/main.css
      a/b/c/d/s/d/svg/credit-card.svg
      a/b/c/d/s/d/svg/10.svg
    """
    monkeypatch.chdir(temp_dir)
    root = temp_dir / "dist"
    deep = root / "a" / "b" / "c" / "d" / "s" / "d" / "svg"
    deep.mkdir(parents=True)
    (root / "css").mkdir()

    files = {
        "log_out": root / "log-out.svg",
        "bell": root / "bell.svg",
        "eye": root / "eye.svg",
        "logo": root / "logo.png",
        "wasm": root / WASM_NAME,
        "css": root / "css" / "main.css",
        "credit_card": deep / "credit-card.svg",
        "ten": deep / "10.svg",
    }

    files["log_out"].write_bytes(SVG)
    files["bell"].write_bytes(SVG.replace(b"M0", b"M1"))
    files["eye"].write_bytes(SVG.replace(b"M0", b"M2"))
    files["logo"].write_bytes(PNG)
    files["wasm"].write_bytes(WASM)
    files["css"].write_bytes(CSS)
    files["credit_card"].write_bytes(SVG.replace(b"M0", b"M3"))
    files["ten"].write_bytes(SVG.replace(b"M0", b"M4"))

    return files


@pytest.fixture
def result_dir(temp_dir) -> Path:
    """Absolute, not yet existing output directory."""
    return temp_dir / "prod"
