"""
specgraph.config.loader - Find, parse and merge configuration files.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from specgraph.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG, ENV_PREFIX
from specgraph.errors import ConfigError

logger = logging.getLogger(__name__)


def find_config_file(start_path: Path) -> Path | None:
    """Find .specgraph.toml in start_path or any parent directory.

    Args:
        start_path: Directory to start searching from

    Returns:
        Path to the config file, or None if not found
    """
    current = start_path.resolve()
    if current.is_file():
        current = current.parent
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        ConfigError: If the text is not valid TOML
    """
    try:
        return tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested tables are merged key by key; any other value in override
    replaces the value in base.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    JSON arrays/objects and true/false are converted; anything else,
    including malformed JSON, is returned as the original string.
    """
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply SPECGRAPH_<SECTION>_<KEY> environment variables to config.

    ``SPECGRAPH_GRAPH_DANGLING_REFERENCES=materialize`` sets
    ``config["graph"]["dangling_references"]``. Missing sections are created.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        table = config.setdefault(section, {})
        if not isinstance(table, dict):
            continue
        table[key] = _try_parse_env_value(raw)
        logger.debug("Config override from %s: %s.%s", name, section, key)
    return config


def coerce_int(section: str, key: str, value: Any) -> int:
    """Read an integer setting, accepting numeric strings from the environment.

    Raises:
        ConfigError: If the value is not an integer
    """
    if isinstance(value, bool):
        raise ConfigError(f"{section}.{key} must be an integer (got {value!r})")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{section}.{key} must be an integer (got {value!r})") from None


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e
    user_config = parse_toml(content)
    return merge_configs(DEFAULT_CONFIG, user_config)


def get_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
) -> dict[str, Any]:
    """Resolve the effective configuration.

    Uses the explicit config_path when given, otherwise searches upward
    from start_path (default: cwd). Falls back to DEFAULT_CONFIG when no
    file exists. Environment overrides are applied last.
    """
    if config_path is None:
        config_path = find_config_file(start_path or Path.cwd())

    if config_path is not None:
        config = load_config(config_path)
        logger.debug("Loaded config from %s", config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)


def find_project_root(config_path: Path | None = None, start_path: Path | None = None) -> Path:
    """Directory that relative paths in the config are resolved against."""
    start = start_path or Path.cwd()
    found = config_path or find_config_file(start)
    if found is not None:
        return found.resolve().parent
    return start.resolve()


def get_spec_directory(
    config: dict[str, Any],
    root: Path,
    override: Path | None = None,
) -> Path:
    """Return the spec directory, honouring a --spec-dir override."""
    if override is not None:
        return override
    return root / config.get("specs", {}).get("directory", "specs")
