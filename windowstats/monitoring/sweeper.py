"""
Background eviction thread for sliding-window aggregators.

Evicts expired samples on a timer so quiet windows do not keep reporting
stale data until the next add_point().
"""

import logging
import threading
from typing import Optional

from .aggregator import SlidingWindowAggregator

logger = logging.getLogger(__name__)


class WindowSweeper:
    """
    Daemon thread calling aggregator.evict_expired() periodically.

    Architecture:
    - Runs in separate daemon thread
    - Sleeps on a shutdown event, so stop() returns without waiting a full
      interval
    - Errors are logged and the loop backs off instead of exiting

    Attaching a sweeper bounds snapshot staleness to roughly one interval.
    """

    ERROR_BACKOFF_SECONDS = 1.0

    def __init__(self, aggregator: SlidingWindowAggregator, interval_seconds: float = 1.0):
        """
        Initialize window sweeper.

        Args:
            aggregator: Aggregator to evict from
            interval_seconds: Time between eviction passes (> 0)

        Raises:
            ValueError: If interval_seconds is not positive
        """
        if not interval_seconds > 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        self._aggregator = aggregator
        self._interval = interval_seconds

        # Thread control
        self._thread: Optional[threading.Thread] = None
        self._running = False
        self._shutdown_event = threading.Event()

        # Diagnostics
        self._passes = 0
        self._evicted_total = 0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def passes(self) -> int:
        return self._passes

    @property
    def evicted_total(self) -> int:
        return self._evicted_total

    def start(self) -> None:
        """Start sweeper background thread."""
        if self._running:
            logger.warning("Sweeper already running")
            return

        if self._thread is not None and self._thread.is_alive():
            logger.warning("Previous sweeper thread still shutting down, not starting")
            return

        self._running = True
        self._shutdown_event.clear()

        self._thread = threading.Thread(target=self._run, daemon=True, name="window-sweeper")
        self._thread.start()
        logger.info(f"Window sweeper started (interval={self._interval}s)")

    def stop(self, timeout: float = 2.0) -> None:
        """
        Stop sweeper background thread.

        Args:
            timeout: Maximum time to wait for thread shutdown (seconds)
        """
        if not self._running:
            return

        self._running = False
        self._shutdown_event.set()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=timeout)
            if self._thread.is_alive():
                logger.warning(f"Sweeper thread did not stop within {timeout}s")

        logger.info(
            f"Window sweeper stopped after {self._passes} passes, "
            f"{self._evicted_total} samples evicted"
        )

    def sweep_once(self) -> int:
        """Run a single eviction pass."""
        evicted = self._aggregator.evict_expired()
        self._passes += 1
        self._evicted_total += evicted
        return evicted

    def _run(self) -> None:
        """Background thread main loop."""
        logger.debug("Sweeper thread started")

        while self._running:
            try:
                self.sweep_once()
                wait = self._interval
            except Exception as e:
                logger.error(f"Error in sweeper thread: {e}", exc_info=True)
                wait = self.ERROR_BACKOFF_SECONDS

            if self._shutdown_event.wait(wait):
                break

        logger.debug("Sweeper thread stopped")

    def __enter__(self) -> "WindowSweeper":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
