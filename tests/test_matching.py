from __future__ import annotations

import pytest

from signal_core.matching import (
    EXPLANATION_GOOD,
    EXPLANATION_GROWTH,
    EXPLANATION_HIGH,
    EXPLANATION_NEW,
    FRICTION_REASONS,
    STRENGTH_REASONS,
    JobArchetype,
    JobMatchResult,
    calculate_match_score,
    confidence_multiplier,
    generate_match_explanation,
    get_archetype_requirements,
    match_candidate_to_job,
)
from signal_core.vocabulary import SignalId

from tests.conftest import make_signal

S = SignalId


def test_match_score_tiers():
    assert calculate_match_score(0.0, 0.2) == 100
    assert calculate_match_score(0.0, 0.5) == 70
    assert calculate_match_score(0.0, 1.0) == 40
    assert calculate_match_score(-1.0, 1.0) == 20


def test_confidence_multiplier_steps():
    assert confidence_multiplier(0.9) == 1.0
    assert confidence_multiplier(0.5) == 0.8
    assert confidence_multiplier(0.1) == 0.6


def test_exact_leadership_profile_scores_high():
    reqs = get_archetype_requirements(JobArchetype.LEADERSHIP)
    assert len(reqs) == 4
    candidate = [make_signal(r.signal_id, r.expected_value, 0.9) for r in reqs]
    result = match_candidate_to_job(candidate, reqs)
    assert result.overall_score >= 90
    assert len(result.strength_reasons) == 3
    assert result.friction_reasons == []
    assert result.confidence == pytest.approx(0.9)
    assert generate_match_explanation(result) == STRENGTH_REASONS[S.LEADERSHIP_TENDENCY]


def test_mixed_profile_reports_strength_and_friction():
    reqs = get_archetype_requirements("leadership")
    candidate = [
        make_signal(S.LEADERSHIP_TENDENCY, -0.8, 0.9),
        make_signal(S.DECISION_STYLE, 0.3, 0.9),
        make_signal(S.RISK_TOLERANCE, -0.6, 0.9),
    ]
    result = match_candidate_to_job(candidate, reqs)
    assert len(result.signal_matches) == 3
    assert [m.match_score for m in result.signal_matches] == [20, 100, 40]
    assert result.overall_score == 50
    assert result.strength_reasons == [STRENGTH_REASONS[S.DECISION_STYLE]]
    assert result.friction_reasons == [FRICTION_REASONS[S.LEADERSHIP_TENDENCY]]
    assert generate_match_explanation(result) == EXPLANATION_NEW


def test_low_confidence_signals_weigh_less():
    reqs = get_archetype_requirements("leadership")[:2]
    sure = [make_signal(S.LEADERSHIP_TENDENCY, 0.7, 0.9), make_signal(S.DECISION_STYLE, -0.7, 0.1)]
    unsure = [make_signal(S.LEADERSHIP_TENDENCY, 0.7, 0.1), make_signal(S.DECISION_STYLE, -0.7, 0.9)]
    assert match_candidate_to_job(sure, reqs).overall_score > match_candidate_to_job(unsure, reqs).overall_score


def test_no_overlap_scores_zero():
    result = match_candidate_to_job([make_signal(S.NOISE_TOLERANCE, 0.5)], get_archetype_requirements("sales"))
    assert result.overall_score == 0
    assert result.signal_matches == []
    assert result.confidence == 0.0
    assert generate_match_explanation(result) == EXPLANATION_GROWTH


def test_unknown_archetype_has_no_requirements():
    assert get_archetype_requirements("astronaut") == []


def test_explanation_thresholds_without_reasons():
    assert generate_match_explanation(JobMatchResult(85)) == EXPLANATION_HIGH
    assert generate_match_explanation(JobMatchResult(65)) == EXPLANATION_GOOD
    assert generate_match_explanation(JobMatchResult(40)) == EXPLANATION_NEW
    assert generate_match_explanation(JobMatchResult(39)) == EXPLANATION_GROWTH


def test_reasons_never_mention_numbers():
    for text in [*STRENGTH_REASONS.values(), *FRICTION_REASONS.values()]:
        assert not any(ch.isdigit() for ch in text)
