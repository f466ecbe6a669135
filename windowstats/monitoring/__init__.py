"""
Sliding-window metrics aggregation.

This package keeps a trailing time window of scalar measurements and
summarizes it on demand (mean, population standard deviation and
linearly interpolated percentiles).

Usage:
    from datetime import timedelta
    from windowstats.monitoring import SlidingWindowAggregator, WindowSweeper

    aggregator = SlidingWindowAggregator(timedelta(minutes=5), [50, 95, 99])

    # Producers (any thread)
    aggregator.add_point(42.0)

    # Optional: evict on a timer instead of only on add_point()
    sweeper = WindowSweeper(aggregator, interval_seconds=1.0)
    sweeper.start()

    # Consumers (any thread)
    result = aggregator.snapshot()
    print(f"P95: {result.get_percentile(95):.2f}")

    sweeper.stop()
"""

from .aggregator import SlidingWindowAggregator
from .percentiles import estimate_percentiles, format_percentile_key
from .point_store import PointStore
from .rwlock import ReadWriteLock
from .statistics import compute_mean_and_std_dev
from .stats import SnapshotResult
from .sweeper import WindowSweeper

__all__ = [
    "SlidingWindowAggregator",
    "WindowSweeper",
    "PointStore",
    "ReadWriteLock",
    "SnapshotResult",
    "compute_mean_and_std_dev",
    "estimate_percentiles",
    "format_percentile_key",
]
