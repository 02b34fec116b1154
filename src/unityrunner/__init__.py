"""
unityrunner: run the Unity test toolchain in one ephemeral container.

The package builds a platform-specific `docker run` invocation from build
parameters, executes it, and guarantees the container is force-removed
afterwards whether the run succeeds, fails, or the host process is told to
terminate while it is running.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Error taxonomy, input validation and error handling
- runner: Run specification construction and container id persistence
- executor: Container run execution
- orchestration: Lifecycle orchestration and cleanup coordination
- cli: Command-line interface

Usage:
    From command line:
        unityrunner --image unityci/editor:2021.3.1f1-base-1 --editor-version 2021.3.1f1

    Programmatically:
        from unityrunner import BuildParameters, DockerRunner
        runner = DockerRunner()
        runner.run(image, BuildParameters(...))
"""

from .cli import main_cli
from .config import clear_config_cache, get_config, set_config_path
from .models import (
    BuildParameters,
    ExecutionOutcome,
    RunnerConfig,
    RunSpec,
    RunState,
)
from .orchestration import CleanupCoordinator, DockerRunner
from .runner import ContainerRegistry, RunSpecBuilder
from .executor import ProcessExecutor
from .validation import (
    ExecutionFailedError,
    HandleNotFoundError,
    RunInterruptedError,
    RunnerError,
    UnsupportedPlatformError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "DockerRunner",
    "main_cli",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Components
    "CleanupCoordinator",
    "ContainerRegistry",
    "ProcessExecutor",
    "RunSpecBuilder",
    # Models
    "BuildParameters",
    "ExecutionOutcome",
    "RunnerConfig",
    "RunSpec",
    "RunState",
    # Errors
    "ExecutionFailedError",
    "HandleNotFoundError",
    "RunInterruptedError",
    "RunnerError",
    "UnsupportedPlatformError",
    "ValidationError",
]
