from __future__ import annotations

import pytest

from signal_core.descriptions import (
    NEGATIVE_COLOR,
    NEUTRAL_COLOR,
    POSITIVE_COLOR,
    color_for_value,
    describe_signal,
    describe_signals,
    get_all_category_names,
    get_category_name,
    value_band,
)
from signal_core.vocabulary import ALL_CATEGORIES, SignalCategory, SignalId

from tests.conftest import make_signal


@pytest.mark.parametrize(
    "value, band",
    [
        (-1.0, "strong_negative"),
        (-0.6, "strong_negative"),
        (-0.59, "negative"),
        (-0.2, "negative"),
        (0.0, "neutral"),
        (0.19, "neutral"),
        (0.2, "positive"),
        (0.6, "strong_positive"),
    ],
)
def test_value_bands(value, band):
    assert value_band(value) == band


def test_colors():
    assert color_for_value(0.1) == NEUTRAL_COLOR
    assert color_for_value(-0.19) == NEUTRAL_COLOR
    assert color_for_value(0.5) == POSITIVE_COLOR
    assert color_for_value(-0.5) == NEGATIVE_COLOR


def test_describe_leadership():
    desc = describe_signal(make_signal(SignalId.LEADERSHIP_TENDENCY, 0.7, 0.85))
    assert desc.name == "گرایش رهبری"
    assert desc.category_name == "همکاری"
    assert desc.short_description == "رهبری طبیعی و قوی"
    assert desc.full_description == "رهبری طبیعی و قوی (قوت: 70٪، اطمینان: 85٪)"
    assert desc.icon == "Crown"
    assert desc.color == POSITIVE_COLOR
    assert desc.to_dict()["id"] == "leadership_tendency"


def test_every_signal_has_a_description():
    for sid in SignalId:
        desc = describe_signal(make_signal(sid, -0.4))
        assert desc.short_description
        assert desc.icon


def test_describe_signals_groups_by_category():
    grouped = describe_signals([
        make_signal(SignalId.SOCIAL_ENERGY, 0.3),
        make_signal(SignalId.LEADERSHIP_TENDENCY, 0.3),
        make_signal(SignalId.NOISE_TOLERANCE, -0.7),
    ])
    assert list(grouped) == [SignalCategory.ENVIRONMENT, SignalCategory.COLLABORATION]
    assert [d.id for d in grouped[SignalCategory.ENVIRONMENT]] == [
        SignalId.SOCIAL_ENERGY,
        SignalId.NOISE_TOLERANCE,
    ]


def test_category_names():
    assert get_category_name("growth") == "رشد و توسعه"
    assert get_category_name(SignalCategory.WORK_STYLE) == "سبک کار"
    names = get_all_category_names()
    assert set(names) == {c.value for c in ALL_CATEGORIES}
