"""
Periodic tick driver for the elapsed-time counter.

Runs a callable on a background thread at a fixed interval until the
callable returns False or the ticker is cancelled.
"""
import logging
import threading
from typing import Callable, Optional

from .config import TICK_INTERVAL


logger = logging.getLogger(__name__)


class SessionTicker:
    """
    Cancellable background ticker.

    Args:
        tick: Called once per interval. Returning False stops the ticker.
        interval: Seconds between calls.
    """

    def __init__(
        self, tick: Callable[[], bool], interval: float = TICK_INTERVAL
    ) -> None:
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self._tick = tick
        self.interval = interval
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start ticking. Does nothing if already running."""
        if self.running:
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._run, name="marksweeper-ticker", daemon=True
        )
        self._thread.start()
        logger.debug("Ticker started (interval=%.3fs)", self.interval)

    def cancel(self, wait: bool = True) -> None:
        """
        Stop ticking.

        Args:
            wait: Join the thread before returning. Pass False when the
                caller holds a lock the tick callable may be waiting on.
        """
        self._stopped.set()
        thread = self._thread
        if (
            wait
            and thread is not None
            and thread is not threading.current_thread()
        ):
            thread.join()
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            if not self._tick():
                break
        self._stopped.set()
