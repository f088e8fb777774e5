from __future__ import annotations

import pytest

from signal_core.normalizer import (
    clamp_bipolar,
    normalize_scores,
    normalize_value,
    percent,
    round_half_up,
    to_bipolar,
)


def test_normalize_value_rescales_linearly():
    assert normalize_value(5, 0, 10) == pytest.approx(0.5)
    assert normalize_value(3, 1, 5, -1, 1) == pytest.approx(0.0)
    assert normalize_value(7, 7, 7, 0.25, 1) == 0.25


def test_normalize_scores_handles_zero_max():
    out = normalize_scores({"D": 6, "I": 0, "S": 3}, {"D": 12, "I": 0, "S": 3})
    assert out == {"D": 0.5, "I": 0.0, "S": 1.0}


def test_bipolar_direction_and_clamp():
    assert to_bipolar(1.0, 0.0) == -1.0
    assert to_bipolar(0.0, 1.0) == 1.0
    assert to_bipolar(0.4, 0.4) == 0.0
    assert clamp_bipolar(1.7) == 1.0
    assert clamp_bipolar(-3) == -1.0


def test_rounding_is_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
    assert percent(-0.555) == 56
    assert percent(0.125) == 13
