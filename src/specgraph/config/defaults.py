"""
specgraph.config.defaults - Built-in configuration values.

Every key that any command reads has a default here, so a project
without a ``.specgraph.toml`` behaves exactly like one with an empty file.
"""

DEFAULT_CONFIG = {
    "project": {
        "name": "",
    },
    "specs": {
        # Relative to the directory holding .specgraph.toml (or cwd)
        "directory": "specs",
        "plans_dir": "plans",
        "components_dir": "components",
        "requirements_dir": "requirements",
    },
    "graph": {
        # "drop" or "materialize"
        "dangling_references": "drop",
    },
    "health": {
        "cycle_penalty": 5,
        "max_cycle_penalty": 30,
        "depth_threshold": 10,
        "depth_penalty": 2,
        "max_depth_penalty": 20,
        "size_threshold": 100,
        "size_step": 20,
        "max_size_penalty": 15,
        "well_structured_depth": 5,
        # `specgraph health` exits non-zero below this score
        "fail_under": 0,
    },
    "logging": {
        "level": "warning",
    },
}

CONFIG_FILENAME = ".specgraph.toml"
ENV_PREFIX = "SPECGRAPH_"
