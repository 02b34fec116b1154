"""
Run specification construction and container id persistence.
"""

from .registry import ContainerRegistry
from .run_spec import (
    LINUX,
    PASSTHROUGH_ENV_VARS,
    WINDOWS,
    RunSpecBuilder,
    compute_test_platforms,
)

__all__ = [
    "ContainerRegistry",
    "LINUX",
    "PASSTHROUGH_ENV_VARS",
    "WINDOWS",
    "RunSpecBuilder",
    "compute_test_platforms",
]
