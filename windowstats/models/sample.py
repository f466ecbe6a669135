"""
Measurement sample data model
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Sample:
    """
    Single scalar measurement retained by a point store.

    Attributes:
        timestamp: Seconds since epoch (time.time() clock)
        value: Measured value
    """

    timestamp: float
    value: float

    def age(self, now: float) -> float:
        """Seconds elapsed between this sample and ``now``."""
        return now - self.timestamp
