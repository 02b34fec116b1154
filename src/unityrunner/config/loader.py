"""
Configuration file loading.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path) -> Dict[str, Any]:
    """
    Load and parse a TOML configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading configuration file from: {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, "rb") as f:
        return tomllib.load(f)
