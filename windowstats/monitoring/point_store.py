"""
Time-bounded sample storage with head eviction.

Samples are kept in arrival order inside a deque, so eviction only ever
pops from the left and never compacts the underlying storage.
"""

import logging
import time
from collections import deque
from typing import Deque, Iterator, List, Optional

from windowstats.models.sample import Sample

logger = logging.getLogger(__name__)


class PointStore:
    """
    Trailing window of samples ordered by arrival.

    Eviction contract:
    - Runs after every add_point() against the new sample's timestamp
    - Drops every sample with timestamp <= reference - window_seconds
    - Stops at the first sample still inside the window
    - Empties the store when no sample survives

    Timestamps must be non-decreasing across add_point() calls. A sample
    that arrives with an older timestamp is appended as-is; it is not
    re-sorted and can shield older samples behind it from eviction.

    Thread safety:
    - NOT thread-safe on its own, callers hold the aggregator lock
    """

    def __init__(self, window_seconds: float, max_samples: Optional[int] = None):
        """
        Initialize point store.

        Args:
            window_seconds: Trailing window length in seconds (> 0)
            max_samples: Optional cap on retained samples (oldest dropped first)
        """
        self._window_seconds = window_seconds
        self._max_samples = max_samples
        self._samples: Deque[Sample] = deque()
        self._last_timestamp: Optional[float] = None

    @property
    def window_seconds(self) -> float:
        return self._window_seconds

    @property
    def max_samples(self) -> Optional[int]:
        return self._max_samples

    def add_point(self, value: float, timestamp: Optional[float] = None) -> None:
        """
        Append a sample and evict everything that fell out of the window.

        Args:
            value: Measured value
            timestamp: Sample time in seconds (default: time.time())
        """
        if timestamp is None:
            timestamp = time.time()

        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            logger.debug(
                f"Out-of-order sample: {timestamp} < {self._last_timestamp}, "
                f"appending without re-sort"
            )
        self._last_timestamp = timestamp

        self._samples.append(Sample(timestamp=float(timestamp), value=float(value)))
        self.evict_expired(timestamp)
        self._enforce_cap()

    def evict_expired(self, now: float) -> int:
        """
        Remove samples at or before the window cutoff.

        Args:
            now: Reference time in seconds

        Returns:
            Number of samples evicted
        """
        cutoff = now - self._window_seconds
        samples = self._samples
        evicted = 0

        while samples and samples[0].timestamp <= cutoff:
            samples.popleft()
            evicted += 1

        if evicted:
            logger.debug(f"Evicted {evicted} samples older than {cutoff:.3f}")
        return evicted

    def _enforce_cap(self) -> None:
        """Drop oldest samples beyond max_samples."""
        if self._max_samples is None:
            return
        while len(self._samples) > self._max_samples:
            self._samples.popleft()

    def values(self) -> List[float]:
        """Copy of retained values in arrival order."""
        return [sample.value for sample in self._samples]

    def oldest(self) -> Optional[Sample]:
        return self._samples[0] if self._samples else None

    def clear(self) -> None:
        self._samples.clear()
        self._last_timestamp = None

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)
