"""
windowstats: thread-safe sliding-window metrics aggregation
Main package initialization
"""

__version__ = "0.1.0"

from windowstats.core.exceptions import (
    ConfigurationError,
    InvalidConfiguration,
    WindowStatsError,
)
from windowstats.monitoring import SlidingWindowAggregator, SnapshotResult, WindowSweeper
from windowstats.utils.config import AggregatorConfig, ConfigManager

__all__ = [
    "SlidingWindowAggregator",
    "SnapshotResult",
    "WindowSweeper",
    "AggregatorConfig",
    "ConfigManager",
    "WindowStatsError",
    "ConfigurationError",
    "InvalidConfiguration",
]
