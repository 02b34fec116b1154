"""
Validation and error handling for the unityrunner package.

This module provides the run error taxonomy, input validation and
error handling with consistent error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ExecutionFailedError,
    HandleNotFoundError,
    RunInterruptedError,
    RunnerError,
    UnsupportedPlatformError,
    ValidationError,
    handle_error,
    handle_cleanup_error,
    handle_cli_error,
    handle_config_error,
)

from .validators import (
    validate_enum_choice,
    validate_non_empty_string,
    validate_path_exists,
    validate_positive_float,
    validate_simple_command,
)

__all__ = [
    # Errors
    "ErrorSeverity",
    "ExecutionFailedError",
    "HandleNotFoundError",
    "RunInterruptedError",
    "RunnerError",
    "UnsupportedPlatformError",
    "ValidationError",
    # Handling
    "handle_error",
    "handle_cleanup_error",
    "handle_cli_error",
    "handle_config_error",
    # Validators
    "validate_enum_choice",
    "validate_non_empty_string",
    "validate_path_exists",
    "validate_positive_float",
    "validate_simple_command",
]
