"""
Command execution utilities.

This module provides helpers for running short-lived auxiliary commands with
captured output, and for locating the container runtime client.
"""

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


def run_command(
    argv: Sequence[str], cwd: Optional[Path] = None, timeout: Optional[float] = None
) -> Tuple[int, str, str]:
    """Execute a command and capture its output with robust error handling.

    Args:
        argv: The command and its arguments.
        cwd: Working directory for command execution (default: current).
        timeout: Seconds to wait before giving up on the command.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 for execution errors.

    Note:
        Uses UTF-8 decoding with error replacement for robust text handling.
    """
    command: List[str] = [str(part) for part in argv]
    logger.debug(f"Executing command: '{shlex.join(command)}'")
    try:
        process = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {command[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{command[0]}'"
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {shlex.join(command)}")
        return -1, "", f"Error: Command timed out after {timeout}s"


def check_executable_installed(executable: str) -> bool:
    """Check if an executable (e.g. the docker client) is available on PATH."""
    return shutil.which(executable) is not None
