"""
First and second moment calculation over a finite set of values.
"""

from typing import Sequence, Tuple

import numpy as np


def compute_mean_and_std_dev(values: Sequence[float]) -> Tuple[float, float]:
    """
    Calculate mean and population standard deviation.

    Args:
        values: Values to summarize (any order)

    Returns:
        (mean, std_dev) where std_dev divides by n, not n - 1.
        An empty input yields (0.0, 0.0).
    """
    if len(values) == 0:
        return 0.0, 0.0

    arr = np.asarray(values, dtype=np.float64)
    mean = float(arr.mean())
    std_dev = float(np.sqrt(np.mean((arr - mean) ** 2)))
    return mean, std_dev
