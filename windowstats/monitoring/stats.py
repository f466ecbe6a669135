"""
Snapshot statistics data structure.

Holds the summary computed from one consistent copy of a window.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .percentiles import format_percentile_key


@dataclass(frozen=True, slots=True)
class SnapshotResult:
    """
    Summary statistics for a window at the moment of the snapshot.

    The caller owns the result; it shares no state with the aggregator.
    """

    mean: float = 0.0
    std_dev: float = 0.0  # Population standard deviation
    # Read-only proxy is unhashable; equality still compares it
    percentiles: Mapping[float, float] = field(default_factory=dict, hash=False)

    # Summary statistics
    count: int = 0
    min: float = 0.0
    max: float = 0.0

    def __post_init__(self):
        # Freeze the mapping without breaking frozen=True
        object.__setattr__(
            self, "percentiles", MappingProxyType(dict(self.percentiles))
        )

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    def get_percentile(self, rank: float) -> Optional[float]:
        """
        Look up a percentile estimate by rank.

        Args:
            rank: Rank as passed to the aggregator (e.g. 95 or 99.9)

        Returns:
            Estimate, or None if the rank was not computed
        """
        return self.percentiles.get(float(rank))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "count": self.count,
            "mean": self.mean,
            "std_dev": self.std_dev,
            "min": self.min,
            "max": self.max,
        }
        for rank in sorted(self.percentiles):
            result[format_percentile_key(rank)] = self.percentiles[rank]
        return result
