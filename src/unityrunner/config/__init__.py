"""
Configuration management for the unityrunner package.

Loads the runner configuration from a TOML file once and caches it.
"""

from .manager import (
    clear_config_cache,
    get_config,
    get_config_path,
    set_config_path,
)
from .validators import TEST_MODES, validate_runner_config

__all__ = [
    "get_config",
    "get_config_path",
    "set_config_path",
    "clear_config_cache",
    "validate_runner_config",
    "TEST_MODES",
]
