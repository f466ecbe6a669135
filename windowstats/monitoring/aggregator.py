"""
Sliding-window metrics aggregator.

Composes the point store, statistics engine and percentile estimator
behind a reader/writer lock.
"""

import logging
import time
from datetime import timedelta
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Tuple, Union

from windowstats.core.exceptions import InvalidConfiguration

from .percentiles import estimate_percentiles
from .point_store import PointStore
from .rwlock import ReadWriteLock
from .statistics import compute_mean_and_std_dev
from .stats import SnapshotResult

# Imports for type hinting only; avoids a monitoring -> utils import cycle
if TYPE_CHECKING:
    from windowstats.utils.config import AggregatorConfig

logger = logging.getLogger(__name__)

WindowDuration = Union[float, int, timedelta]


class SlidingWindowAggregator:
    """
    Thread-safe trailing-window aggregator for scalar measurements.

    Architecture:
    - add_point() takes the exclusive lock, appends and evicts
    - snapshot() takes the shared lock, copies values and releases it
      before sorting and computing statistics
    - Eviction is lazy: it only runs inside add_point() (or
      evict_expired(), driven by WindowSweeper when one is attached)

    Staleness:
        snapshot() never evicts. The window it reports is bounded as of the
        last eviction pass, so after a long pause between adds it can
        include samples slightly older than window_duration.

    Usage:
        aggregator = SlidingWindowAggregator(timedelta(minutes=5), [50, 95, 99])
        aggregator.add_point(12.5)
        result = aggregator.snapshot()
        print(result.mean, result.get_percentile(95))
    """

    def __init__(
        self,
        window_duration: WindowDuration,
        percentile_ranks: Iterable[float] = (),
        max_samples: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize aggregator.

        Args:
            window_duration: Window length in seconds or as a timedelta (> 0)
            percentile_ranks: Ranks computed on every snapshot (0-100; others
                are skipped at estimation time)
            max_samples: Optional cap on retained samples
            clock: Time source for samples added without a timestamp

        Raises:
            InvalidConfiguration: If window_duration <= 0 or max_samples < 1
        """
        window_seconds = _to_seconds(window_duration)
        if not window_seconds > 0:
            raise InvalidConfiguration(
                f"window_duration must be positive, got {window_duration!r}"
            )
        if max_samples is not None and max_samples < 1:
            raise InvalidConfiguration(
                f"max_samples must be >= 1 when set, got {max_samples}"
            )

        self._window_seconds = window_seconds
        self._percentile_ranks: Tuple[float, ...] = tuple(
            sorted({float(rank) for rank in percentile_ranks})
        )
        self._clock = clock

        self._store = PointStore(window_seconds, max_samples=max_samples)
        self._lock = ReadWriteLock()

        logger.info(
            f"Aggregator created: window={window_seconds}s, "
            f"percentiles={list(self._percentile_ranks)}, max_samples={max_samples}"
        )

    @classmethod
    def from_config(
        cls, config: "AggregatorConfig", clock: Callable[[], float] = time.time
    ) -> "SlidingWindowAggregator":
        """Build an aggregator from a validated AggregatorConfig."""
        return cls(
            window_duration=config.window_seconds,
            percentile_ranks=config.percentiles,
            max_samples=config.max_samples,
            clock=clock,
        )

    @property
    def window_duration(self) -> timedelta:
        return timedelta(seconds=self._window_seconds)

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def percentile_ranks(self) -> Tuple[float, ...]:
        return self._percentile_ranks

    @property
    def count(self) -> int:
        """Number of retained samples."""
        with self._lock.read_locked():
            return len(self._store)

    def add_point(self, value: float, timestamp: Optional[float] = None) -> None:
        """
        Record a measurement.

        Args:
            value: Measured value
            timestamp: Sample time in seconds (default: clock()). Must not go
                backwards across calls from the same producer.
        """
        with self._lock.write_locked():
            # Clock read under the lock keeps default timestamps in append order
            if timestamp is None:
                timestamp = self._clock()
            self._store.add_point(value, timestamp)

    def evict_expired(self, now: Optional[float] = None) -> int:
        """
        Evict samples that fell out of the window as of ``now``.

        Args:
            now: Reference time in seconds (default: clock())

        Returns:
            Number of samples evicted
        """
        with self._lock.write_locked():
            if now is None:
                now = self._clock()
            return self._store.evict_expired(now)

    def snapshot(self) -> SnapshotResult:
        """
        Compute statistics over the retained window.

        Returns:
            SnapshotResult (empty window -> mean 0, std_dev 0, no percentiles)
        """
        with self._lock.read_locked():
            values = self._store.values()

        if not values:
            return SnapshotResult()

        values.sort()
        mean, std_dev = compute_mean_and_std_dev(values)
        percentiles = estimate_percentiles(values, self._percentile_ranks)

        return SnapshotResult(
            mean=mean,
            std_dev=std_dev,
            percentiles=percentiles,
            count=len(values),
            min=values[0],
            max=values[-1],
        )

    def percentile(self, rank: float) -> Optional[float]:
        """
        Estimate a single percentile that was not configured up front.

        Args:
            rank: Percentile rank (0-100)

        Returns:
            Estimate, or None if the window is empty or rank is out of range
        """
        with self._lock.read_locked():
            values = self._store.values()

        values.sort()
        return estimate_percentiles(values, (rank,)).get(float(rank))

    def __repr__(self) -> str:
        return (
            f"SlidingWindowAggregator(window_seconds={self._window_seconds}, "
            f"percentile_ranks={list(self._percentile_ranks)})"
        )


def _to_seconds(duration: WindowDuration) -> float:
    if isinstance(duration, timedelta):
        return duration.total_seconds()
    return float(duration)
