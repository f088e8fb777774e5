"""Candidate ↔ job matching over signal vectors.

Per-signal scores are bucketed by distance rather than computed from a
continuous formula; reasons are user-facing microcopy and never mention
tests, dimensions or numbers.  Friction reasons are phrased as growth
opportunities.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from . import config
from .normalizer import round_half_up
from .types import Signal
from .vocabulary import SignalId, require_complete

S = SignalId


class JobArchetype(str, Enum):
    LEADERSHIP = "leadership"
    CREATIVE = "creative"
    ANALYTICAL = "analytical"
    SUPPORT = "support"
    SALES = "sales"
    OPERATIONS = "operations"


@dataclass(frozen=True)
class JobSignalRequirement:
    signal_id: SignalId
    expected_value: float
    weight: float
    reason: Optional[str] = None


@dataclass
class SignalMatch:
    signal_id: SignalId
    candidate_value: float
    expected_value: float
    match_score: int
    weight: float

    def to_dict(self) -> dict:
        return {
            "signalId": self.signal_id.value,
            "candidateValue": self.candidate_value,
            "expectedValue": self.expected_value,
            "matchScore": self.match_score,
            "weight": self.weight,
        }


@dataclass
class JobMatchResult:
    overall_score: int
    signal_matches: List[SignalMatch] = field(default_factory=list)
    strength_reasons: List[str] = field(default_factory=list)
    friction_reasons: List[str] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "signalMatches": [m.to_dict() for m in self.signal_matches],
            "strengthReasons": list(self.strength_reasons),
            "frictionReasons": list(self.friction_reasons),
            "confidence": self.confidence,
        }


def _reqs(*rows: tuple) -> tuple:
    return tuple(JobSignalRequirement(sid, ev, w) for sid, ev, w in rows)


ARCHETYPE_REQUIREMENTS: Mapping[JobArchetype, tuple] = MappingProxyType({
    JobArchetype.LEADERSHIP: _reqs(
        (S.LEADERSHIP_TENDENCY, 0.7, 1.0),
        (S.DECISION_STYLE, 0.3, 0.7),
        (S.RISK_TOLERANCE, 0.4, 0.6),
        (S.COMMUNICATION_STYLE, 0.5, 0.5),
    ),
    JobArchetype.CREATIVE: _reqs(
        (S.STRUCTURE_PREFERENCE, -0.5, 0.8),
        (S.AUTONOMY_NEED, 0.6, 0.7),
        (S.RISK_TOLERANCE, 0.4, 0.5),
        (S.ROUTINE_PREFERENCE, -0.6, 0.6),
    ),
    JobArchetype.ANALYTICAL: _reqs(
        (S.DECISION_STYLE, 0.7, 1.0),
        (S.DETAIL_ORIENTATION, 0.6, 0.8),
        (S.STRUCTURE_PREFERENCE, 0.5, 0.6),
        (S.TASK_APPROACH, 0.4, 0.5),
    ),
    JobArchetype.SUPPORT: _reqs(
        (S.COLLABORATION_STYLE, 0.7, 1.0),
        (S.CONFLICT_APPROACH, -0.4, 0.7),
        (S.COMMUNICATION_STYLE, -0.3, 0.6),
        (S.SOCIAL_ENERGY, 0.5, 0.5),
    ),
    JobArchetype.SALES: _reqs(
        (S.SOCIAL_ENERGY, 0.7, 1.0),
        (S.RISK_TOLERANCE, 0.5, 0.7),
        (S.ACHIEVEMENT_DRIVE, 0.6, 0.8),
        (S.COMMUNICATION_STYLE, 0.4, 0.6),
    ),
    JobArchetype.OPERATIONS: _reqs(
        (S.STRUCTURE_PREFERENCE, 0.7, 1.0),
        (S.DETAIL_ORIENTATION, 0.6, 0.8),
        (S.ROUTINE_PREFERENCE, 0.5, 0.7),
        (S.PACE_PREFERENCE, 0.3, 0.5),
    ),
})
require_complete(ARCHETYPE_REQUIREMENTS, "ARCHETYPE_REQUIREMENTS", keys=JobArchetype)

STRENGTH_REASONS: Mapping[SignalId, str] = MappingProxyType({
    S.LEADERSHIP_TENDENCY: "توانایی هدایت و الهام‌بخشی به تیم",
    S.COLLABORATION_STYLE: "هماهنگی خوب با کار تیمی",
    S.DECISION_STYLE: "رویکرد تحلیلی در تصمیم‌گیری",
    S.RISK_TOLERANCE: "آمادگی برای پذیرش چالش‌های جدید",
    S.STRUCTURE_PREFERENCE: "علاقه به کار منظم و برنامه‌ریزی‌شده",
    S.ACHIEVEMENT_DRIVE: "انگیزه قوی برای رسیدن به اهداف",
    S.SOCIAL_ENERGY: "مهارت در تعامل و ارتباط مؤثر",
    S.AUTONOMY_NEED: "توانایی کار مستقل و خودمدیریتی",
    S.DETAIL_ORIENTATION: "دقت بالا و توجه به جزئیات",
    S.PACE_PREFERENCE: "سازگاری با محیط پویا و پرسرعت",
    S.COMMUNICATION_STYLE: "سبک ارتباطی متناسب با نقش",
    S.CONFLICT_APPROACH: "توانایی مدیریت سازنده تعارض",
    S.CHANGE_ADAPTABILITY: "انعطاف در برابر تغییرات",
    S.TASK_APPROACH: "رویکرد متناسب به انجام وظایف",
    S.RECOGNITION_NEED: "انگیزه مناسب برای این محیط",
    S.NOISE_TOLERANCE: "سازگاری با محیط کاری",
    S.ROUTINE_PREFERENCE: "تطابق با ماهیت کار",
})
require_complete(STRENGTH_REASONS, "STRENGTH_REASONS")

# growth opportunities, never deficiencies
FRICTION_REASONS: Mapping[SignalId, str] = MappingProxyType({
    S.LEADERSHIP_TENDENCY: "فرصت توسعه مهارت‌های رهبری",
    S.COLLABORATION_STYLE: "فرصت تجربه سبک همکاری جدید",
    S.DECISION_STYLE: "فرصت آشنایی با رویکرد تصمیم‌گیری متفاوت",
    S.RISK_TOLERANCE: "فرصت توسعه در محیط با سطح ریسک متفاوت",
    S.STRUCTURE_PREFERENCE: "فرصت تجربه ساختار کاری جدید",
    S.ACHIEVEMENT_DRIVE: "فرصت کشف انگیزه‌های جدید",
    S.SOCIAL_ENERGY: "فرصت توسعه در محیط با سطح تعامل متفاوت",
    S.AUTONOMY_NEED: "فرصت تجربه سطح استقلال متفاوت",
    S.DETAIL_ORIENTATION: "فرصت تمرین رویکرد جدید به جزئیات",
    S.PACE_PREFERENCE: "فرصت تجربه ریتم کاری جدید",
    S.COMMUNICATION_STYLE: "فرصت توسعه سبک ارتباطی",
    S.CONFLICT_APPROACH: "فرصت یادگیری رویکرد جدید به تعارض",
    S.CHANGE_ADAPTABILITY: "فرصت تقویت انعطاف‌پذیری",
    S.TASK_APPROACH: "فرصت تجربه رویکرد جدید به کار",
    S.RECOGNITION_NEED: "فرصت سازگاری با سیستم قدردانی متفاوت",
    S.NOISE_TOLERANCE: "فرصت تجربه محیط کاری جدید",
    S.ROUTINE_PREFERENCE: "فرصت تجربه تنوع/ثبات متفاوت",
})
require_complete(FRICTION_REASONS, "FRICTION_REASONS")

EXPLANATION_HIGH = "سبک کاری شما با این نقش همخوانی بالایی دارد"
EXPLANATION_GOOD = "ویژگی‌های کاری شما با نیازهای این نقش همخوانی دارد"
EXPLANATION_NEW = "این موقعیت می‌تواند تجربه جدیدی برای شما باشد"
EXPLANATION_GROWTH = "این موقعیت می‌تواند چالش‌های رشد جدیدی برای شما ایجاد کند"


def get_archetype_requirements(archetype: object) -> List[JobSignalRequirement]:
    try:
        key = JobArchetype(str(getattr(archetype, "value", archetype)))
    except ValueError:
        return []
    return list(ARCHETYPE_REQUIREMENTS[key])


def calculate_match_score(candidate_value: float, expected_value: float) -> int:
    distance = abs(candidate_value - expected_value)
    for limit, score in config.MATCH_TIERS:
        if distance <= limit:
            return score
    return config.MATCH_FLOOR


def confidence_multiplier(confidence: float) -> float:
    for floor, mult in config.CONFIDENCE_MULTIPLIERS:
        if confidence >= floor:
            return mult
    return config.CONFIDENCE_MULTIPLIER_FLOOR


def match_candidate_to_job(
    candidate_signals: Iterable[Signal],
    requirements: Sequence[JobSignalRequirement],
) -> JobMatchResult:
    """Score how well a candidate's signals fit a requirement vector.

    Requirements whose signal the candidate lacks are ignored.  The overall
    score is the weight × confidence-multiplier weighted mean of per-signal
    tier scores, rounded to an integer in [0, 100].
    """
    by_id: Dict[SignalId, Signal] = {s.id: s for s in candidate_signals}
    matches: List[SignalMatch] = []
    strengths: List[str] = []
    frictions: List[str] = []
    total_weight = 0.0
    weighted_score = 0.0
    total_conf = 0.0

    for req in requirements:
        cand = by_id.get(req.signal_id)
        if cand is None:
            continue
        score = calculate_match_score(cand.value, req.expected_value)
        matches.append(SignalMatch(req.signal_id, cand.value, req.expected_value, score, req.weight))

        mult = confidence_multiplier(cand.confidence)
        weighted_score += score * req.weight * mult
        total_weight += req.weight * mult
        total_conf += cand.confidence

        if score >= config.STRENGTH_SCORE_MIN:
            strengths.append(STRENGTH_REASONS[req.signal_id])
        elif score < config.FRICTION_SCORE_MAX:
            frictions.append(FRICTION_REASONS[req.signal_id])

    overall = round_half_up(weighted_score / total_weight) if total_weight > 0 else 0
    return JobMatchResult(
        overall_score=max(0, min(100, overall)),
        signal_matches=matches,
        strength_reasons=strengths[: config.STRENGTH_REASONS_MAX],
        friction_reasons=frictions[: config.FRICTION_REASONS_MAX],
        confidence=(total_conf / len(matches)) if matches else 0.0,
    )


def generate_match_explanation(result: JobMatchResult) -> str:
    """One-line "why this job" text; never exposes the score itself."""

    first = result.strength_reasons[0] if result.strength_reasons else None
    if result.overall_score >= 80:
        return first or EXPLANATION_HIGH
    if result.overall_score >= 60:
        return first or EXPLANATION_GOOD
    if result.overall_score >= 40:
        return EXPLANATION_NEW
    return EXPLANATION_GROWTH
