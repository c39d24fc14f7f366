"""
specgraph.config - Configuration loading and defaults
"""

from specgraph.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG
from specgraph.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    coerce_int,
    find_config_file,
    find_project_root,
    get_config,
    get_spec_directory,
    load_config,
    merge_configs,
    parse_toml,
)

__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_CONFIG",
    "_apply_env_overrides",
    "_try_parse_env_value",
    "coerce_int",
    "find_config_file",
    "find_project_root",
    "get_config",
    "get_spec_directory",
    "load_config",
    "merge_configs",
    "parse_toml",
]
