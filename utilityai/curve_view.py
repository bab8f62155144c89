"""Numbers behind the response-curve view: plot range, curve samples and histogram."""

from __future__ import annotations

import math
from typing import Any, Iterable, Sequence

_BUCKETS = 10


def _bucket_index(value: float, lowest: float, step: float) -> int:
    if step == 0.0:
        difference = value - lowest
        ratio = math.nan if difference == 0.0 or math.isnan(difference) else math.copysign(
            math.inf, difference
        )
    else:
        ratio = (value - lowest) / step
    if math.isnan(ratio):
        return _BUCKETS - 1
    ratio = min(ratio, float(_BUCKETS - 1))
    if ratio <= 0.0:
        return 0
    return int(ratio)


def generate_histogram(values: Sequence[float]) -> tuple[list[tuple[float, float]], float]:
    """Ten equal-width bins between the 5th and 95th percentile of sorted values.

    Values outside that range fall into the first or last bin. Returns the bins
    as ``(centre, fraction of values)`` pairs together with the bin width.
    """
    if not values:
        raise ValueError("cannot build a histogram from no values")
    count = len(values)
    lowest = values[count * 5 // 100]
    highest = values[count * 95 // 100]
    step = (highest - lowest) / _BUCKETS

    tallies = [0] * _BUCKETS
    for value in values:
        tallies[_bucket_index(value, lowest, step)] += 1

    bins = [
        (lowest + number * step - step / 2.0, tally / count)
        for number, tally in enumerate(tallies, start=1)
    ]
    return bins, step


def plot_range(values: Iterable[float]) -> tuple[float, float]:
    """X range for plotting a curve over observed inputs.

    Spans the 10th to 90th percentile, widened outwards to multiples of five
    times a power of ten near the middle of that span.
    """
    ordered = sorted(values)
    if not ordered:
        raise ValueError("cannot choose a plot range for no values")
    if any(math.isnan(value) for value in ordered):
        raise ValueError("input values must not be NaN")
    lower = ordered[len(ordered) // 10]
    upper = ordered[len(ordered) * 9 // 10]
    middle = (upper + lower) / 2.0
    if not middle > 0.0:
        return math.nan, math.nan
    base_unit = 5.0 * 10.0 ** math.floor(math.log10(middle))
    return (
        math.floor(lower / base_unit) * base_unit,
        math.ceil(upper / base_unit) * base_unit,
    )


def curve_points(
    response_curve: Any, x_lower: float, x_upper: float, count: int = 50
) -> list[tuple[float, float]]:
    """Evenly spaced samples of a curve, both ends included, scores clamped to [0, 1]."""
    if count < 2:
        raise ValueError("at least two points are needed to draw a curve")
    increment = (x_upper - x_lower) / (count - 1)
    points = []
    for number in range(count):
        x = x_lower + number * increment
        y = response_curve.transform(x)
        if not math.isnan(y):
            y = min(max(y, 0.0), 1.0)
        points.append((x, y))
    return points