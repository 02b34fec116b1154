"""
Container cleanup coordination.

Cleanup can be requested from three places: the end of a successful run, the
failure path, and the termination listener. Whichever arrives first performs
the removal; every later request is a no-op.
"""

import logging
import threading
from typing import Callable, Optional, Sequence, Tuple

from ..runner.registry import ContainerRegistry
from ..system import run_command
from ..validation import HandleNotFoundError, handle_cleanup_error

logger = logging.getLogger(__name__)

CommandRunner = Callable[..., Tuple[int, str, str]]


class CleanupCoordinator:
    """
    Force-removes the container of one invocation, at most once.

    Args:
        registry: Registry owning the container id file
        docker_executable: Container runtime client used for removal
        removal_timeout: Upper bound in seconds for the removal command
        command_runner: Callable with the signature of ``system.run_command``
    """

    def __init__(self, registry: ContainerRegistry, docker_executable: str = "docker",
                 removal_timeout: float = 60.0, command_runner: CommandRunner = run_command):
        self.registry = registry
        self.docker_executable = docker_executable
        self.removal_timeout = removal_timeout
        self.command_runner = command_runner
        # One-shot token, never released. Acquiring it is a single call, so a signal
        # handler re-entering release() on the main thread cannot split the claim.
        self._claim = threading.Lock()
        self.released_by: Optional[str] = None

    @property
    def released(self) -> bool:
        return self._claim.locked()

    def release(self, trigger: str) -> bool:
        """
        Run cleanup unless it already ran for this invocation.

        Never raises; problems are logged.

        Args:
            trigger: Short description of who requested cleanup, for logs

        Returns:
            True if this call performed the cleanup, False if it was a no-op
        """
        if not self._claim.acquire(blocking=False):
            logger.debug(f"Cleanup already claimed by '{self.released_by}', ignoring '{trigger}'")
            return False
        self.released_by = trigger

        logger.info(f"Cleaning up container (trigger: {trigger})")
        try:
            handle = self.registry.read_handle()
            if not handle:
                logger.warning(
                    f"Container id file {self.registry.container_id_path} is empty, nothing to remove"
                )
                return True
            self.remove(handle)
        except HandleNotFoundError as e:
            handle_cleanup_error(e, "reading container id", logger=logger)
        except Exception as e:
            handle_cleanup_error(e, "removing container", include_traceback=True, logger=logger)
        return True

    def remove(self, handle: str) -> bool:
        """
        Force-remove a container and its anonymous volumes.

        A missing container is logged, not raised.

        Returns:
            True if the runtime reported a successful removal
        """
        argv: Sequence[str] = [self.docker_executable, "rm", "--force", "--volumes", handle]
        return_code, _, stderr = self.command_runner(argv, timeout=self.removal_timeout)
        if return_code == 0:
            logger.info(f"Removed container {handle}")
            return True

        message = stderr.strip()
        if "no such container" in message.lower():
            logger.warning(f"Container {handle} no longer exists: {message}")
        else:
            logger.warning(f"Failed to remove container {handle} (exit code {return_code}): {message}")
        return False
