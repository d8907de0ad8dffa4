"""Numeric helpers shared by the analytics engine"""

import math
from typing import Iterable


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (round() rounds half to even)"""
    return int(math.floor(value + 0.5))


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty iterable"""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def rounded_mean(values: Iterable[float]) -> int:
    return round_half_up(mean(values))
