"""
Container run orchestration.

This module contains the DockerRunner, which drives one invocation through
its lifecycle:

    IDLE -> SPEC_BUILT -> RUNNING -> SUCCEEDED | FAILED -> CLEANED_UP

Cleanup is attached to the call site with ``try/finally`` and, for the
duration of the run, to SIGINT/SIGTERM and interpreter exit. All of them
share the same idempotent CleanupCoordinator.release.
"""

import logging
from typing import Callable, Optional

from ..executor import ProcessExecutor
from ..models.config import RunnerConfig
from ..models.parameters import BuildParameters
from ..models.runtime import ExecutionOutcome, RunState, RuntimeState
from ..runner import ContainerRegistry, RunSpecBuilder
from ..validation import ExecutionFailedError, RunInterruptedError
from .cleanup import CleanupCoordinator
from .signal_handler import SignalHandler

logger = logging.getLogger(__name__)

CoordinatorFactory = Callable[[ContainerRegistry], CleanupCoordinator]


class DockerRunner:
    """
    Runs a single build container and guarantees its removal.

    Collaborators can be injected for testing; by default they are built
    from the configuration.

    Args:
        config: Runner configuration (defaults to ``RunnerConfig()``)
        spec_builder: Object with ``build(image, parameters) -> RunSpec``
        executor: Object with ``execute(spec, quiet) -> ExecutionOutcome``
        coordinator_factory: Callable creating the per-invocation coordinator
        platform: Platform tag override, defaults to ``sys.platform``
        state: Runtime state shared with the executor
    """

    def __init__(self, config: Optional[RunnerConfig] = None, spec_builder=None, executor=None,
                 coordinator_factory: Optional[CoordinatorFactory] = None,
                 platform: Optional[str] = None, state: Optional[RuntimeState] = None):
        self.config = config or RunnerConfig()
        self.state = state or RuntimeState()

        self.spec_builder = spec_builder or RunSpecBuilder(
            docker_executable=self.config.docker_executable, platform=platform
        )
        self.executor = executor or ProcessExecutor(
            self.state,
            poll_interval=self.config.wait_poll_interval,
            graceful_timeout=self.config.termination_graceful_timeout,
            force_timeout=self.config.termination_force_timeout,
        )
        self.coordinator_factory = coordinator_factory or self._default_coordinator
        self.coordinator: Optional[CleanupCoordinator] = None

    def run(self, image: str, parameters: BuildParameters, quiet: bool = False) -> ExecutionOutcome:
        """
        Run the container once and remove it afterwards.

        Args:
            image: Container image reference
            parameters: Build parameters of this invocation
            quiet: Suppress the container's output

        Returns:
            The successful ExecutionOutcome

        Raises:
            UnsupportedPlatformError: If the host platform is not supported; nothing runs
            ExecutionFailedError: If the run failed; raised after cleanup
            RunInterruptedError: If the host was asked to terminate during the run
        """
        self._reset_state()

        spec = self.spec_builder.build(image, parameters)
        self.state.spec = spec
        self._transition(RunState.SPEC_BUILT)

        registry = ContainerRegistry(parameters.runner_temporary_path)
        registry.reset()
        coordinator = self.coordinator_factory(registry)
        self.coordinator = coordinator

        signal_handler = SignalHandler(self.state, coordinator.release)
        signal_handler.setup()
        try:
            self._transition(RunState.RUNNING)
            try:
                outcome = self.executor.execute(spec, quiet=quiet)
            except ExecutionFailedError as e:
                self.state.outcome = ExecutionOutcome(succeeded=False, exit_code=e.exit_code)
                self._transition(RunState.FAILED)
                logger.error(f"Container run failed: {e}")
                raise
            except RunInterruptedError as e:
                logger.warning(f"Container run interrupted: {e}")
                raise

            self.state.outcome = outcome
            self._transition(RunState.SUCCEEDED)
            return outcome
        finally:
            coordinator.release("run finished")
            signal_handler.teardown()
            self._transition(RunState.CLEANED_UP)

    def request_shutdown(self) -> None:
        """Ask an in-flight run to stop, as if a termination signal arrived."""
        if self.coordinator is not None:
            self.coordinator.release("shutdown request")
        self.state.shutdown_requested.set()

    def _default_coordinator(self, registry: ContainerRegistry) -> CleanupCoordinator:
        return CleanupCoordinator(
            registry,
            docker_executable=self.config.docker_executable,
            removal_timeout=self.config.removal_timeout,
        )

    def _reset_state(self) -> None:
        self.state.state = RunState.IDLE
        self.state.spec = None
        self.state.outcome = None
        self.state.interrupt_signal = None
        self.state.shutdown_requested.clear()
        self.coordinator = None

    def _transition(self, new_state: RunState) -> None:
        logger.info(f"Run state: {self.state.state.value} -> {new_state.value}")
        self.state.state = new_state
