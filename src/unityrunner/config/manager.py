"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import RunnerConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_toml_file
from .validators import validate_runner_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[RunnerConfig] = None

# Default path to the main configuration file, relative to the repository root.
# Can be overridden (e.g., in tests or by the CLI --config flag).
_CONFIG_FILE_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path and drop any cached configuration.

    Args:
        config_path: Path to the main config.toml file
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> RunnerConfig:
    """
    Load and validate the runner configuration from a TOML file.

    Raises:
        FileNotFoundError: If the configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    try:
        runner_config = validate_runner_config(load_toml_file(config_path).get("runner", {}))
    except Exception as e:
        handle_config_error(
            error=e,
            context=f"loading {config_path}",
            severity=ErrorSeverity.CRITICAL,
            reraise=False,
            logger=logger
        )
        raise
    logger.info(f"Successfully loaded runner configuration from {config_path}")
    return runner_config


def get_config() -> RunnerConfig:
    """
    Get the global runner configuration, loading it if necessary.

    Returns:
        The singleton RunnerConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def get_config_path() -> Path:
    """Return the configuration file path currently in effect."""
    return _CONFIG_FILE_PATH
