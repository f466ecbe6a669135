"""
Order-statistic percentile estimation with linear interpolation.
"""

import math
from typing import Dict, Iterable, Sequence


def estimate_percentiles(
    sorted_values: Sequence[float], ranks: Iterable[float]
) -> Dict[float, float]:
    """
    Estimate percentiles from ascending values.

    For rank p the fractional index is (p / 100) * (n - 1). When it falls
    between two order statistics the result is interpolated linearly.

    Args:
        sorted_values: Values sorted ascending
        ranks: Requested percentile ranks (0-100)

    Returns:
        Mapping rank -> estimate. Ranks outside [0, 100] (and NaN) are
        skipped, and an empty input yields an empty mapping.
    """
    n = len(sorted_values)
    result: Dict[float, float] = {}
    if n == 0:
        return result

    for rank in ranks:
        p = float(rank)
        if not 0.0 <= p <= 100.0:
            continue

        index = (p / 100.0) * (n - 1)
        lower = math.floor(index)
        upper = math.ceil(index)

        if lower == upper:
            result[p] = float(sorted_values[lower])
        else:
            weight = index - lower
            low = float(sorted_values[lower])
            high = float(sorted_values[upper])
            span = high - low
            if math.isfinite(span):
                # Equivalent to low * (1 - w) + high * w, but exact when low == high
                # and never rounds outside [low, high]
                result[p] = min(low + span * weight, high)
            else:
                # span overflows for brackets near the float limits
                estimate = low * (1.0 - weight) + high * weight
                result[p] = max(low, min(estimate, high))

    return result


def format_percentile_key(rank: float) -> str:
    """
    Format a rank as a flat dictionary key.

    Examples:
        50 -> "p50", 99.9 -> "p99_9", 12.5 -> "p12_5"
    """
    text = f"{float(rank):g}"
    return "p" + text.replace(".", "_")
