"""
Runtime data models.

This module contains data structures used during the execution of a container
run: the resolved run specification, the lifecycle states and the outcome.
"""

import shlex
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class RunState(Enum):
    """Lifecycle states of a single invocation."""
    IDLE = "idle"
    SPEC_BUILT = "spec_built"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CLEANED_UP = "cleaned_up"


@dataclass(frozen=True)
class RunSpec:
    """
    A fully resolved, platform-specific container invocation.

    The spec is inert data; nothing happens until it is handed to an executor.
    """

    # Container runtime client, e.g. "docker".
    executable: str
    # Ordered arguments: subcommand, flags, env and volume declarations,
    # image and the in-container command.
    arguments: Tuple[str, ...]

    @property
    def argv(self) -> List[str]:
        return [self.executable, *self.arguments]

    @property
    def command_line(self) -> str:
        """Shell-quoted rendering of the argv, for logs and diagnostics."""
        return shlex.join(self.argv)

    def env_bindings(self) -> List[str]:
        """Values passed with ``--env``, in order."""
        return self._flag_values("--env")

    def volumes(self) -> List[str]:
        """Values passed with ``--volume``, in order."""
        return self._flag_values("--volume")

    def _flag_values(self, flag: str) -> List[str]:
        values = []
        for index, argument in enumerate(self.arguments[:-1]):
            if argument == flag:
                values.append(self.arguments[index + 1])
        return values


@dataclass
class ExecutionOutcome:
    """
    Result of a finished container run.
    """

    succeeded: bool
    exit_code: int
    # Wall-clock seconds between launch and termination.
    duration: float = 0.0


@dataclass
class RuntimeState:
    """
    Mutable state of one invocation, shared by the orchestrator, the executor
    and the termination listener.
    """

    state: RunState = RunState.IDLE
    spec: Optional[RunSpec] = None
    outcome: Optional[ExecutionOutcome] = None
    process: Optional[subprocess.Popen] = None
    shutdown_requested: threading.Event = field(default_factory=threading.Event)
    # Signal number that triggered the shutdown, if any.
    interrupt_signal: Optional[int] = None
