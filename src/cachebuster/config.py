"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

config.py
Declarative configuration: a [tool.cachebuster] table in pyproject.toml.

    [tool.cachebuster]
    source = "./static"
    result = "./prod"
    mime-types = ["image/svg+xml", "text/css"]
    prefix = "/assets"
    no-hash-extensions = ["wasm"]

Paths are used verbatim, relative to the working directory of the build, so the
keys of the resulting file map keep the configured form (`./static/...`).
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11: pip install tomli

from cachebuster.core.models import BustParams
from cachebuster.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "pyproject.toml"
TOOL_SECTION = "cachebuster"

KNOWN_KEYS = {
    "source", "result", "mime_types", "prefix", "copy", "follow_links",
    "no_hash_paths", "no_hash_extensions", "mime_mode", "algorithm",
    "data_file", "trash_previous",
}


def read_config(path: str = DEFAULT_CONFIG_FILE) -> Dict[str, Any]:
    """
    Read the [tool.cachebuster] table. Keys are normalized to snake_case.
    A missing file or section yields an empty dict.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.debug(f"No config file at {config_path}")
        return {}

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    section = data.get("tool", {}).get(TOOL_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigurationError(f"[tool.{TOOL_SECTION}] must be a table")

    normalized = {}
    for key, value in section.items():
        name = key.replace("-", "_")
        if name not in KNOWN_KEYS:
            raise ConfigurationError(f"Unknown option in [tool.{TOOL_SECTION}]: {key}")
        normalized[name] = value

    logger.debug(f"Loaded [tool.{TOOL_SECTION}] from {config_path}: {sorted(normalized)}")
    return normalized


def params_from_config(config: Dict[str, Any], overrides: Optional[Dict[str, Any]] = None) -> BustParams:
    """
    Build validated BustParams from a config dict. Non-None overrides win
    over file values.
    """
    merged = dict(config)
    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    for required in ("source", "result"):
        if not merged.get(required):
            raise ConfigurationError(f"Missing required option: {required}")

    return BustParams.from_lists(**merged)


def load_params(path: str = DEFAULT_CONFIG_FILE, **overrides) -> BustParams:
    """Shortcut for params_from_config(read_config(path), overrides)."""
    return params_from_config(read_config(path), overrides)
