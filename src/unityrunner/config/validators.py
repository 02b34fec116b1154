"""
Configuration validation utilities.
"""

import logging
from typing import Any, Dict

from ..models.config import RunnerConfig
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_positive_float,
    validate_simple_command,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
TEST_MODES = ["all", "playmode", "editmode", "standalone"]


def validate_runner_config(runner_data: Dict[str, Any]) -> RunnerConfig:
    """
    Validate and create a RunnerConfig from the raw ``[runner]`` table.

    Missing keys fall back to the RunnerConfig defaults.

    Raises:
        ValidationError: If validation fails
    """
    defaults = RunnerConfig()
    timeouts = runner_data.get("timeouts", {})

    try:
        docker_executable = validate_simple_command(
            runner_data.get("docker_executable", defaults.docker_executable),
            field_name="runner.docker_executable",
        )

        action_folder = str(runner_data.get("action_folder", defaults.action_folder))

        log_level = validate_enum_choice(
            runner_data.get("log_level", defaults.log_level),
            choices=LOG_LEVELS,
            field_name="runner.log_level",
            case_sensitive=False,
        )

        default_test_mode = validate_enum_choice(
            runner_data.get("default_test_mode", defaults.default_test_mode),
            choices=TEST_MODES,
            field_name="runner.default_test_mode",
        )

        wait_poll_interval = validate_positive_float(
            timeouts.get("wait_poll_interval", defaults.wait_poll_interval),
            min_value=0.01,
            max_value=60.0,
            field_name="runner.timeouts.wait_poll_interval",
        )

        removal_timeout = validate_positive_float(
            timeouts.get("removal_timeout", defaults.removal_timeout),
            min_value=1.0,
            max_value=600.0,
            field_name="runner.timeouts.removal_timeout",
        )

        termination_graceful_timeout = validate_positive_float(
            timeouts.get("termination_graceful_timeout", defaults.termination_graceful_timeout),
            min_value=0.0,
            max_value=60.0,
            field_name="runner.timeouts.termination_graceful_timeout",
        )

        termination_force_timeout = validate_positive_float(
            timeouts.get("termination_force_timeout", defaults.termination_force_timeout),
            min_value=0.0,
            max_value=60.0,
            field_name="runner.timeouts.termination_force_timeout",
        )
    except ValidationError as e:
        logger.error(f"Invalid runner configuration: {e}")
        raise

    return RunnerConfig(
        docker_executable=docker_executable,
        action_folder=action_folder,
        log_level=log_level,
        default_test_mode=default_test_mode,
        wait_poll_interval=wait_poll_interval,
        removal_timeout=removal_timeout,
        termination_graceful_timeout=termination_graceful_timeout,
        termination_force_timeout=termination_force_timeout,
    )
