"""Numeric helpers shared by the scorer, the mappers and the generator.

All functions are pure.  ``to_bipolar`` is the single transform used to turn
two opposing [0, 1] dimension scores into one [-1, 1] signal value.
"""
from __future__ import annotations

import math
from typing import Dict, Mapping

__all__ = [
    "normalize_value",
    "normalize_scores",
    "to_bipolar",
    "clamp",
    "clamp01",
    "clamp_bipolar",
    "round_half_up",
    "percent",
]


def normalize_value(
    value: float,
    from_min: float,
    from_max: float,
    to_min: float = 0.0,
    to_max: float = 1.0,
) -> float:
    """Linearly rescale ``value`` from one range to another.

    A degenerate source range maps everything to ``to_min``.
    """

    if from_max == from_min:
        return to_min
    return ((value - from_min) / (from_max - from_min)) * (to_max - to_min) + to_min


def normalize_scores(scores: Mapping[str, float], max_scores: Mapping[str, float]) -> Dict[str, float]:
    """Divide each raw score by its attainable maximum (0 when the max is 0)."""

    out: Dict[str, float] = {}
    for key, value in scores.items():
        mx = float(max_scores.get(key, 0.0))
        out[key] = float(value) / mx if mx > 0 else 0.0
    return out


def to_bipolar(negative_pole: float, positive_pole: float) -> float:
    """``positive_pole - negative_pole``: a strong first score pulls negative."""

    return positive_pole - negative_pole


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def clamp_bipolar(value: float) -> float:
    return clamp(value, -1.0, 1.0)


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; displayed numbers must not be
    return int(math.floor(value + 0.5))


def percent(value: float) -> int:
    """``|value|`` in [0, 1] as a whole percentage."""

    return round_half_up(abs(value) * 100)
