"""
Configuration data models.

This module contains the runner configuration loaded from `config.toml`.
"""

from dataclasses import dataclass


@dataclass
class RunnerConfig:
    """
    Configuration for the runner's global behavior, loaded from `config.toml`.
    """

    # [runner]
    docker_executable: str = "docker"
    action_folder: str = "."
    log_level: str = "INFO"
    default_test_mode: str = "all"

    # [runner.timeouts]
    # How often a blocked run checks for a shutdown request (seconds).
    wait_poll_interval: float = 1.0
    # Upper bound for the `docker rm` call during cleanup.
    removal_timeout: float = 60.0
    termination_graceful_timeout: float = 3.0
    termination_force_timeout: float = 2.0
