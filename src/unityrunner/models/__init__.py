"""
Data models for the container runner.

Configuration Models:
- Runner configuration loaded from TOML

Input Models:
- Immutable build parameters of one invocation

Runtime Models:
- Resolved run specification (executable + ordered argv)
- Lifecycle states and the execution outcome
"""

from .config import RunnerConfig
from .parameters import BuildParameters
from .runtime import ExecutionOutcome, RunSpec, RunState, RuntimeState

__all__ = [
    "BuildParameters",
    "ExecutionOutcome",
    "RunnerConfig",
    "RunSpec",
    "RunState",
    "RuntimeState",
]
