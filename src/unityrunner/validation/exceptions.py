"""
Exception types and error handling helpers.

This module defines the error taxonomy of a container run together with the
small set of handling helpers used to log errors consistently and to demote
them to diagnostics where a failure must not reach the caller.
"""

import logging
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ValidationError(Exception):
    """
    Exception raised when validation of configuration or parameters fails.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class RunnerError(Exception):
    """Base class for errors raised while running a build container."""


class UnsupportedPlatformError(RunnerError):
    """Raised when no run specification exists for the host platform."""

    def __init__(self, platform: str):
        super().__init__(f"Operating system, {platform}, is not supported yet.")
        self.platform = platform


class ExecutionFailedError(RunnerError):
    """
    Raised when the container run exits with a non-zero status.

    Attributes:
        exit_code: Exit status reported by the container runtime client
        command: The command line that was executed
    """

    def __init__(self, exit_code: int, command: str = "", message: Optional[str] = None):
        super().__init__(message or f"Container run failed with exit code {exit_code}")
        self.exit_code = exit_code
        self.command = command


class HandleNotFoundError(RunnerError):
    """Raised when no container id was persisted for the invocation."""

    def __init__(self, path: str):
        super().__init__(f"No container id file found at {path}")
        self.path = path


class RunInterruptedError(RunnerError):
    """Raised when the host process was asked to terminate during a run."""

    def __init__(self, signum: Optional[int] = None):
        super().__init__(
            f"Container run interrupted by signal {signum}" if signum else "Container run interrupted"
        )
        self.signum = signum


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    include_traceback: bool = False,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        include_traceback: Attach the traceback to the log record
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    severity_name = severity.lower() if isinstance(severity, str) else severity.value
    level = getattr(logging, severity_name.upper())
    effective_logger.log(
        level,
        f"Error in {context}: {error}",
        exc_info=include_traceback or level >= logging.CRITICAL,
    )

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_cleanup_error(error: Exception, context: str, **kwargs) -> None:
    """Handle container cleanup errors; never re-raises."""
    kwargs.setdefault('severity', ErrorSeverity.WARNING)
    kwargs['reraise'] = False
    handle_error(error, f"cleanup {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors by logging and exiting."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    import sys
    sys.exit(exit_code)
