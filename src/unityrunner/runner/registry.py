"""
Container id persistence.

The runtime writes the id of the launched container to a well-known file
(`--cidfile`) so that cleanup, or any external process inspecting the host,
can find it.
"""

import logging
from pathlib import Path

from ..validation import HandleNotFoundError
from .run_spec import container_id_path

logger = logging.getLogger(__name__)


class ContainerRegistry:
    """Owns the container id file of a single invocation."""

    def __init__(self, runner_temporary_path: str):
        self.container_id_path = Path(container_id_path(runner_temporary_path))

    def reset(self) -> None:
        """
        Remove a stale id file left by an earlier invocation.

        The runtime refuses to start when the cidfile already exists.
        """
        if self.container_id_path.exists():
            logger.warning(f"Removing stale container id file {self.container_id_path}")
            self.container_id_path.unlink()

    def read_handle(self) -> str:
        """
        Return the persisted container id, stripped of whitespace.

        An empty string means the file exists but the runtime never wrote an id.

        Raises:
            HandleNotFoundError: If the id file does not exist
        """
        try:
            return self.container_id_path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            raise HandleNotFoundError(str(self.container_id_path)) from None
