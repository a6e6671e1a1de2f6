"""Loading animation counter driven by a short-lived background thread."""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

PROGRESS_STEPS = 4
PROGRESS_INTERVAL = 0.5


class ProgressIndicator:
    """Advance a step counter on a fixed cadence while blocking work runs.

    The worker thread only ever writes ``step``. Callers must ``join()``
    before resuming input handling; used as a context manager this happens
    on exit.
    """

    def __init__(
        self,
        steps: int = PROGRESS_STEPS,
        interval: float = PROGRESS_INTERVAL,
        on_step: Optional[Callable[[int], None]] = None,
    ):
        self.steps = steps
        self.interval = interval
        self.on_step = on_step
        self.step = 0
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Reset the counter and start animating."""
        if self._thread is not None:
            raise RuntimeError("progress indicator already running")
        self.step = 0
        self._thread = threading.Thread(target=self._animate, name="progress", daemon=True)
        self._thread.start()

    def join(self) -> None:
        """Wait for the animation to finish."""
        if self._thread is None:
            return
        self._thread.join()
        self._thread = None

    def _animate(self) -> None:
        for step in range(1, self.steps + 1):
            time.sleep(self.interval)
            self.step = step
            if self.on_step is not None:
                try:
                    self.on_step(step)
                except Exception:
                    logger.exception("Progress callback failed")
                    return

    def __enter__(self) -> "ProgressIndicator":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.join()
