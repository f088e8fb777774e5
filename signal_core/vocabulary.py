"""Closed signal vocabulary shared by mappers, adapters and weight tables.

Every table keyed by signal id is checked against ``SignalId`` when its
module is imported (see :func:`require_complete`), so adding or dropping a
signal fails fast at import time instead of surfacing as a missing key deep
inside a request.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


class SignalCategory(str, Enum):
    WORK_STYLE = "work_style"
    COLLABORATION = "collaboration"
    DECISION_MAKING = "decision_making"
    MOTIVATION = "motivation"
    ENVIRONMENT = "environment"
    GROWTH = "growth"


class SignalId(str, Enum):
    # work_style
    STRUCTURE_PREFERENCE = "structure_preference"
    PACE_PREFERENCE = "pace_preference"
    DETAIL_ORIENTATION = "detail_orientation"
    TASK_APPROACH = "task_approach"
    # collaboration
    COLLABORATION_STYLE = "collaboration_style"
    COMMUNICATION_STYLE = "communication_style"
    CONFLICT_APPROACH = "conflict_approach"
    LEADERSHIP_TENDENCY = "leadership_tendency"
    # decision_making
    DECISION_STYLE = "decision_style"
    RISK_TOLERANCE = "risk_tolerance"
    CHANGE_ADAPTABILITY = "change_adaptability"
    # motivation
    ACHIEVEMENT_DRIVE = "achievement_drive"
    RECOGNITION_NEED = "recognition_need"
    AUTONOMY_NEED = "autonomy_need"
    # environment
    SOCIAL_ENERGY = "social_energy"
    NOISE_TOLERANCE = "noise_tolerance"
    ROUTINE_PREFERENCE = "routine_preference"


class AnalysisPurpose(str, Enum):
    JOB_MATCHING = "job_matching"
    TEAM_FIT = "team_fit"
    PROFILE_INSIGHT = "profile_insight"
    GENERAL = "general"


ALL_SIGNALS: tuple[SignalId, ...] = tuple(SignalId)
ALL_CATEGORIES: tuple[SignalCategory, ...] = tuple(SignalCategory)


@dataclass(frozen=True)
class SignalMeta:
    id: SignalId
    category: SignalCategory
    name: str
    description: str
    negative_pole: str
    positive_pole: str

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id.value,
            "category": self.category.value,
            "name": self.name,
            "description": self.description,
            "negativePole": self.negative_pole,
            "positivePole": self.positive_pole,
        }


def require_complete(table: Mapping, label: str, keys: Iterable = ALL_SIGNALS) -> Mapping:
    """Raise ``ValueError`` unless ``table`` has an entry for every key."""

    missing = [getattr(k, "value", k) for k in keys if k not in table]
    if missing:
        raise ValueError(f"{label} is missing entries for: {', '.join(missing)}")
    return table


def _meta(sid: SignalId, cat: SignalCategory, name: str, desc: str, neg: str, pos: str) -> SignalMeta:
    return SignalMeta(sid, cat, name, desc, neg, pos)


_W, _C, _D, _M, _E = (
    SignalCategory.WORK_STYLE,
    SignalCategory.COLLABORATION,
    SignalCategory.DECISION_MAKING,
    SignalCategory.MOTIVATION,
    SignalCategory.ENVIRONMENT,
)

SIGNAL_METADATA: Mapping[SignalId, SignalMeta] = MappingProxyType({
    m.id: m for m in (
        _meta(SignalId.STRUCTURE_PREFERENCE, _W, "Structure preference",
              "Preference for defined processes versus open-ended work",
              "flexible, improvised", "structured, process-driven"),
        _meta(SignalId.PACE_PREFERENCE, _W, "Pace preference",
              "Preferred tempo of work",
              "steady, measured", "fast, dynamic"),
        _meta(SignalId.DETAIL_ORIENTATION, _W, "Detail orientation",
              "Focus on specifics versus the big picture",
              "big picture", "detail focused"),
        _meta(SignalId.TASK_APPROACH, _W, "Task approach",
              "How work items are sequenced",
              "parallel, multitasking", "sequential, single-focus"),
        _meta(SignalId.COLLABORATION_STYLE, _C, "Collaboration style",
              "Preference for working with others versus alone",
              "independent", "team oriented"),
        _meta(SignalId.COMMUNICATION_STYLE, _C, "Communication style",
              "Directness of communication",
              "diplomatic, indirect", "direct, candid"),
        _meta(SignalId.CONFLICT_APPROACH, _C, "Conflict approach",
              "Handling of disagreement",
              "harmonizing", "confronting"),
        _meta(SignalId.LEADERSHIP_TENDENCY, _C, "Leadership tendency",
              "Inclination to lead versus support",
              "supporting", "leading"),
        _meta(SignalId.DECISION_STYLE, _D, "Decision style",
              "Basis for making decisions",
              "intuitive", "analytical"),
        _meta(SignalId.RISK_TOLERANCE, _D, "Risk tolerance",
              "Comfort with uncertainty",
              "cautious", "bold"),
        _meta(SignalId.CHANGE_ADAPTABILITY, _D, "Change adaptability",
              "Response to change",
              "prefers stability", "embraces change"),
        _meta(SignalId.ACHIEVEMENT_DRIVE, _M, "Achievement drive",
              "Orientation toward outcomes or process",
              "process oriented", "results oriented"),
        _meta(SignalId.RECOGNITION_NEED, _M, "Recognition need",
              "Preferred form of recognition",
              "private recognition", "public recognition"),
        _meta(SignalId.AUTONOMY_NEED, _M, "Autonomy need",
              "Need for independence in how work is done",
              "welcomes guidance", "needs independence"),
        _meta(SignalId.SOCIAL_ENERGY, _E, "Social energy",
              "Where energy comes from at work",
              "recharged by solitude", "energized by people"),
        _meta(SignalId.NOISE_TOLERANCE, _E, "Noise tolerance",
              "Comfort with busy surroundings",
              "needs quiet", "comfortable with bustle"),
        _meta(SignalId.ROUTINE_PREFERENCE, _E, "Routine preference",
              "Preference for routine versus variety",
              "variety seeking", "routine seeking"),
    )
})
require_complete(SIGNAL_METADATA, "SIGNAL_METADATA")


def category_of(signal_id: SignalId) -> SignalCategory:
    return SIGNAL_METADATA[signal_id].category


def parse_signal_id(raw: object) -> Optional[SignalId]:
    """Return the matching ``SignalId`` or ``None`` for anything unknown."""

    if isinstance(raw, SignalId):
        return raw
    try:
        return SignalId(str(raw))
    except ValueError:
        return None


def parse_purpose(raw: object) -> AnalysisPurpose:
    if isinstance(raw, AnalysisPurpose):
        return raw
    try:
        return AnalysisPurpose(str(raw))
    except ValueError:
        return AnalysisPurpose.GENERAL
