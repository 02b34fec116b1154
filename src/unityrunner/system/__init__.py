"""
System interaction utilities.

- Auxiliary command execution with captured output and error handling
- Executable discovery on PATH
"""

from .commands import check_executable_installed, run_command

__all__ = [
    "check_executable_installed",
    "run_command",
]
