"""
Container run execution.

This module starts the container runtime client and waits for it,
translating its exit status into outcomes and typed failures.
"""

from .process_executor import EXIT_CODE_NOT_FOUND, ProcessExecutor

__all__ = [
    "EXIT_CODE_NOT_FOUND",
    "ProcessExecutor",
]
