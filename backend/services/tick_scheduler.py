"""
Fixed-period tick driver for the simulation engine.

Runs a `schedule` scheduler on a background thread and calls the tick
callback every interval_ms milliseconds until stopped.
"""

import logging
import threading
from typing import Callable, Optional

import schedule

logger = logging.getLogger(__name__)


class TickScheduler:
    """Calls callback every interval_ms on a daemon thread."""

    def __init__(self, callback: Callable[[], object], interval_ms: int):
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.callback = callback
        self.interval_ms = interval_ms
        self._scheduler = schedule.Scheduler()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start ticking, restarting the period if already running."""
        self.stop()
        # A fresh event per run; a loop asked to stop from its own thread
        # keeps its set event and exits after the current callback
        self._stop_event = threading.Event()
        self._scheduler.every(self.interval_ms / 1000).seconds.do(self._run_callback)
        self._thread = threading.Thread(
            target=self._loop, args=(self._stop_event,), name="tick-scheduler", daemon=True
        )
        self._thread.start()
        logger.info(f"Tick scheduler started ({self.interval_ms} ms)")

    def stop(self) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        self._scheduler.clear()
        logger.info("Tick scheduler stopped")

    def _run_callback(self) -> None:
        try:
            self.callback()
        except Exception:
            logger.exception("Tick callback failed; stopping scheduler")
            self._stop_event.set()

    def _loop(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            self._scheduler.run_pending()
            idle = self._scheduler.idle_seconds
            if idle is None:
                idle = self.interval_ms / 1000
            stop_event.wait(max(0.0, idle))
