"""
Process execution for container runs.

This module starts the container runtime client for a RunSpec, blocks until it
terminates, and turns a non-zero exit into an ExecutionFailedError. While
blocked it keeps checking for a shutdown request so that the client process
tree can be torn down when the host is asked to terminate.
"""

import logging
import subprocess
import time
from typing import List, Optional

import psutil

from ..models.runtime import ExecutionOutcome, RunSpec, RuntimeState
from ..validation import ExecutionFailedError, RunInterruptedError

logger = logging.getLogger(__name__)

# Conventional shell status for "command not found".
EXIT_CODE_NOT_FOUND = 127


class ProcessExecutor:
    """
    Runs a RunSpec to completion.

    Args:
        state: Runtime state carrying the shutdown request event
        poll_interval: Seconds between shutdown checks while waiting
        graceful_timeout: Seconds to wait after SIGTERM before killing
        force_timeout: Seconds to wait after SIGKILL
    """

    def __init__(self, state: Optional[RuntimeState] = None, poll_interval: float = 1.0,
                 graceful_timeout: float = 3.0, force_timeout: float = 2.0):
        self.state = state or RuntimeState()
        self.poll_interval = poll_interval
        self.graceful_timeout = graceful_timeout
        self.force_timeout = force_timeout

    def execute(self, spec: RunSpec, quiet: bool = False) -> ExecutionOutcome:
        """
        Execute the spec and wait for it to finish.

        Args:
            spec: The run specification to execute
            quiet: Suppress the process' stdout/stderr instead of forwarding them

        Returns:
            A successful ExecutionOutcome

        Raises:
            ExecutionFailedError: If the process exits non-zero or cannot be started
            RunInterruptedError: If a shutdown was requested while waiting
        """
        stream = subprocess.DEVNULL if quiet else None
        logger.info(f"Starting container run with '{spec.executable}' (quiet={quiet})")
        logger.debug(f"Full command: {spec.command_line}")

        started_at = time.monotonic()
        try:
            process = subprocess.Popen(spec.argv, stdout=stream, stderr=stream)
        except FileNotFoundError as e:
            raise ExecutionFailedError(
                EXIT_CODE_NOT_FOUND,
                spec.command_line,
                f"Container runtime client not found: {spec.executable}",
            ) from e

        logger.info(f"Container client started with PID: {process.pid}")
        self.state.process = process
        try:
            exit_code = self._wait_for_completion(process)
        finally:
            if process.poll() is None:
                self.terminate_process_tree(process.pid, "container client")
            self.state.process = None

        duration = time.monotonic() - started_at
        logger.info(f"Container run finished with exit code {exit_code} after {duration:.1f}s")
        if exit_code != 0:
            raise ExecutionFailedError(exit_code, spec.command_line)
        return ExecutionOutcome(succeeded=True, exit_code=exit_code, duration=duration)

    def _wait_for_completion(self, process: subprocess.Popen) -> int:
        """Wait for the process, honoring shutdown requests between polls."""
        while True:
            if self.state.shutdown_requested.is_set():
                logger.warning("Shutdown requested. Terminating container client...")
                self.terminate_process_tree(process.pid, "container client")
                process.wait()
                raise RunInterruptedError(self.state.interrupt_signal)

            try:
                exit_code = process.wait(timeout=self.poll_interval)
            except subprocess.TimeoutExpired:
                continue

            # Cleanup triggered by a signal removes the container, which makes
            # the attached client exit on its own before the next check.
            if self.state.shutdown_requested.is_set():
                logger.warning(f"Container client exited with code {exit_code} after a shutdown request")
                raise RunInterruptedError(self.state.interrupt_signal)
            return exit_code

    def terminate_process_tree(self, pid: int, name: str) -> None:
        """
        Terminate a process and all its children, escalating to SIGKILL.
        """
        try:
            parent = psutil.Process(pid)
            processes = [parent] + parent.children(recursive=True)
        except psutil.NoSuchProcess:
            logger.info(f"Process {name} (PID: {pid}) already terminated")
            return
        except psutil.AccessDenied:
            logger.warning(f"Access denied to process {name} (PID: {pid})")
            return

        logger.info(f"Terminating {name} (PID: {pid}) and {len(processes) - 1} children")
        for process in processes:
            self._signal(process, force=False)
        _, still_alive = psutil.wait_procs(processes, timeout=self.graceful_timeout)

        if still_alive:
            logger.warning(f"{len(still_alive)} processes ignored SIGTERM, killing")
            for process in still_alive:
                self._signal(process, force=True)
            _, still_alive = psutil.wait_procs(still_alive, timeout=self.force_timeout)
            self._report_stubborn(still_alive, name)

    @staticmethod
    def _signal(process: psutil.Process, force: bool) -> None:
        try:
            if force:
                process.kill()
            else:
                process.terminate()
        except psutil.NoSuchProcess:
            pass
        except psutil.AccessDenied:
            logger.warning(f"Access denied signalling PID {process.pid}")

    @staticmethod
    def _report_stubborn(processes: List[psutil.Process], name: str) -> None:
        for process in processes:
            logger.error(f"Failed to terminate PID {process.pid} belonging to {name}")
