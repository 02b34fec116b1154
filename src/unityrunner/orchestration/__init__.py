"""
Orchestration of a single container run.

Components:
- DockerRunner: Lifecycle orchestrator
- CleanupCoordinator: Idempotent container removal
- SignalHandler: Host termination listener
"""

from .cleanup import CleanupCoordinator
from .docker_runner import DockerRunner
from .signal_handler import SignalHandler

__all__ = [
    "CleanupCoordinator",
    "DockerRunner",
    "SignalHandler",
]
