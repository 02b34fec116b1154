"""
Host termination listener.

This module routes SIGINT/SIGTERM and interpreter exit to the cleanup release
path of the running invocation and flags the shutdown so the executor stops
waiting.
"""

import atexit
import logging
import signal
from typing import Any, Callable, Dict, Optional

from ..models.runtime import RuntimeState

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SignalHandler:
    """
    Installs termination hooks for the duration of one container run.

    Args:
        state: Runtime state whose shutdown event is set on termination
        release: Idempotent cleanup callable taking a trigger description
    """

    def __init__(self, state: RuntimeState, release: Callable[[str], Any]):
        self.state = state
        self.release = release
        self._original_handlers: Dict[int, Any] = {}
        self._atexit_registered = False

    def setup(self) -> None:
        """Install the signal handlers and the interpreter-exit hook."""
        atexit.register(self._on_interpreter_exit)
        self._atexit_registered = True

        for signum in HANDLED_SIGNALS:
            try:
                self._original_handlers[signum] = signal.signal(signum, self.handle_termination)
            except (ValueError, OSError) as e:
                # signal.signal only works from the main thread
                logger.warning(f"Failed to set up handler for signal {signum}: {e}")
        logger.debug("Termination handlers installed")

    def teardown(self) -> None:
        """Restore the original handlers and drop the interpreter-exit hook."""
        if self._atexit_registered:
            atexit.unregister(self._on_interpreter_exit)
            self._atexit_registered = False

        for signum, original in self._original_handlers.items():
            try:
                signal.signal(signum, original)
            except (ValueError, OSError) as e:
                logger.warning(f"Failed to restore handler for signal {signum}: {e}")
        self._original_handlers.clear()
        logger.debug("Termination handlers restored")

    def handle_termination(self, signum: int, frame: Optional[Any]) -> None:
        """Signal handler: clean up immediately, then ask the executor to stop."""
        if self.state.shutdown_requested.is_set():
            logger.warning("Shutdown already in progress. Please be patient.")
            return

        logger.warning(f"Signal {signal.Signals(signum).name} received. Cleaning up container...")
        self.state.interrupt_signal = signum
        self.release(f"signal {signal.Signals(signum).name}")
        self.state.shutdown_requested.set()

    def _on_interpreter_exit(self) -> None:
        logger.info("Interpreter exiting with a container run outstanding")
        self.release("interpreter exit")
