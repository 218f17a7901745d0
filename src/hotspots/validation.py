"""
Input preconditions for the clustering functions.

All checks raise ``ValueError`` with a message naming the offending
parameter, so bad input fails fast instead of producing nonsense clusters.
"""

from __future__ import annotations

import math
import numbers
from typing import Iterable, Sequence

from .models import Point


def require_finite_points(points: Sequence[Point]) -> None:
    for idx, point in enumerate(points):
        if not (math.isfinite(point.latitude) and math.isfinite(point.longitude)):
            raise ValueError(
                f"Point {idx} has non-finite coordinates "
                f"({point.latitude}, {point.longitude})"
            )


def require_non_negative(name: str, value: float) -> None:
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{name} must be a finite, non-negative number, got {value!r}")


def require_positive(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be a finite, positive number, got {value!r}")


def require_int_at_least(name: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum}, got {value!r}")


def require_epsilon_ladder(epsilons: Iterable[float]) -> tuple[float, ...]:
    ladder = tuple(epsilons)
    if not ladder:
        raise ValueError("epsilon ladder must contain at least one radius")
    for eps in ladder:
        require_non_negative("epsilon_m", eps)
    return ladder
