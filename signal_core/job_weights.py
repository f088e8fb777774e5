"""Per-job signal weight derivation.

A job's weight map is built by folding an ordered list of contributors over
an empty map.  Each contributor looks at one part of the posting and returns
a sparse patch; its merge policy decides how a patch entry combines with
what is already there:

=================  ===========  ==============================================
contributor        provenance   policy
=================  ===========  ==============================================
team_context       derived      max_weight  (replace only if strictly higher)
location_type      derived      average     (max weight, mean expected value)
title archetype    derived      max_weight
workstyle          explicit     overwrite
team_snapshot      explicit     overwrite
=================  ===========  ==============================================

Signals nobody touched get ``DEFAULT_SIGNAL_WEIGHT`` with no expected value.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from . import config
from .matching import JobArchetype, JobSignalRequirement
from .normalizer import clamp_bipolar
from .vocabulary import ALL_SIGNALS, SignalId, require_complete

Provenance = Literal["explicit", "derived", "default"]
S = SignalId


class TeamContext(str, Enum):
    SOLO = "solo"
    SMALL_TEAM = "small_team"
    CROSS_FUNCTIONAL = "cross_functional"


class LocationType(str, Enum):
    REMOTE = "remote"
    ONSITE = "onsite"
    HYBRID = "hybrid"


class MergePolicy(str, Enum):
    MAX_WEIGHT = "max_weight"
    AVERAGE = "average"
    OVERWRITE = "overwrite"


@dataclass(frozen=True)
class SignalWeight:
    signal_id: SignalId
    weight: float
    expected_value: Optional[float] = None
    source: Provenance = "derived"
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        out = {"signalId": self.signal_id.value, "weight": self.weight, "source": self.source}
        if self.expected_value is not None:
            out["expectedValue"] = self.expected_value
        if self.reason:
            out["reason"] = self.reason
        return out


@dataclass
class WorkstyleExpectations:
    autonomy: Optional[float] = None
    collaboration: Optional[float] = None
    pace: Optional[float] = None
    structure: Optional[float] = None


@dataclass
class TeamSnapshot:
    team_size: Optional[int] = None
    works_with: List[str] = field(default_factory=list)
    reports_to: Optional[str] = None


@dataclass
class JobPosting:
    id: str
    title: str
    team_context: Optional[str] = None
    location_type: Optional[str] = None
    workstyle_expectations: Optional[WorkstyleExpectations] = None
    team_snapshot: Optional[TeamSnapshot] = None

    @classmethod
    def from_dict(cls, raw: Mapping) -> "JobPosting":
        ws = raw.get("workstyle_expectations")
        snap = raw.get("team_snapshot")
        return cls(
            id=str(raw.get("id", "")),
            title=str(raw.get("title", "")),
            team_context=raw.get("team_context") or None,
            location_type=raw.get("location_type") or None,
            workstyle_expectations=WorkstyleExpectations(**{
                k: ws.get(k) for k in ("autonomy", "collaboration", "pace", "structure")
            }) if isinstance(ws, Mapping) else None,
            team_snapshot=TeamSnapshot(
                team_size=snap.get("team_size"),
                works_with=list(snap.get("works_with") or []),
                reports_to=snap.get("reports_to") or None,
            ) if isinstance(snap, Mapping) else None,
        )


@dataclass
class DerivedContext:
    archetype: Optional[str] = None
    team_context: Optional[str] = None
    location_type: Optional[str] = None
    team_size: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "archetype": self.archetype,
            "teamContext": self.team_context,
            "locationType": self.location_type,
            "teamSize": self.team_size,
        }


@dataclass
class JobSignalWeightMap:
    job_id: str
    weights: List[SignalWeight]
    has_explicit_weights: bool
    derived_context: DerivedContext = field(default_factory=DerivedContext)

    def to_dict(self) -> dict:
        return {
            "jobId": self.job_id,
            "weights": [w.to_dict() for w in self.weights],
            "hasExplicitWeights": self.has_explicit_weights,
            "derivedContext": self.derived_context.to_dict(),
        }


# ---- derived tables: signal -> (weight, expected value) ----
WeightTable = Mapping[SignalId, Tuple[float, float]]

TEAM_CONTEXT_WEIGHTS: Mapping[TeamContext, WeightTable] = MappingProxyType({
    TeamContext.SOLO: {
        S.AUTONOMY_NEED: (0.9, 0.7),
        S.COLLABORATION_STYLE: (0.5, -0.5),
        S.SOCIAL_ENERGY: (0.4, -0.3),
        S.STRUCTURE_PREFERENCE: (0.6, 0.3),
        S.LEADERSHIP_TENDENCY: (0.3, -0.2),
    },
    TeamContext.SMALL_TEAM: {
        S.COLLABORATION_STYLE: (0.7, 0.4),
        S.COMMUNICATION_STYLE: (0.6, 0.2),
        S.CONFLICT_APPROACH: (0.5, 0.0),
        S.AUTONOMY_NEED: (0.5, 0.3),
        S.SOCIAL_ENERGY: (0.5, 0.3),
    },
    TeamContext.CROSS_FUNCTIONAL: {
        S.COLLABORATION_STYLE: (0.9, 0.7),
        S.COMMUNICATION_STYLE: (0.8, 0.5),
        S.CHANGE_ADAPTABILITY: (0.7, 0.5),
        S.CONFLICT_APPROACH: (0.6, 0.3),
        S.SOCIAL_ENERGY: (0.6, 0.5),
        S.TASK_APPROACH: (0.5, -0.3),  # parallel work
    },
})
require_complete(TEAM_CONTEXT_WEIGHTS, "TEAM_CONTEXT_WEIGHTS", keys=TeamContext)

LOCATION_TYPE_WEIGHTS: Mapping[LocationType, WeightTable] = MappingProxyType({
    LocationType.REMOTE: {
        S.AUTONOMY_NEED: (0.8, 0.6),
        S.STRUCTURE_PREFERENCE: (0.7, 0.5),
        S.COMMUNICATION_STYLE: (0.6, 0.3),
        S.SOCIAL_ENERGY: (0.4, -0.2),
        S.ROUTINE_PREFERENCE: (0.5, 0.3),
    },
    LocationType.ONSITE: {
        S.SOCIAL_ENERGY: (0.6, 0.4),
        S.NOISE_TOLERANCE: (0.5, 0.3),
        S.COLLABORATION_STYLE: (0.5, 0.3),
        S.AUTONOMY_NEED: (0.4, 0.0),
    },
    LocationType.HYBRID: {
        S.CHANGE_ADAPTABILITY: (0.7, 0.5),
        S.AUTONOMY_NEED: (0.6, 0.4),
        S.STRUCTURE_PREFERENCE: (0.5, 0.3),
        S.SOCIAL_ENERGY: (0.5, 0.2),
    },
})
require_complete(LOCATION_TYPE_WEIGHTS, "LOCATION_TYPE_WEIGHTS", keys=LocationType)

ARCHETYPE_WEIGHTS: Mapping[JobArchetype, WeightTable] = MappingProxyType({
    JobArchetype.LEADERSHIP: {
        S.LEADERSHIP_TENDENCY: (1.0, 0.7),
        S.DECISION_STYLE: (0.8, 0.4),
        S.RISK_TOLERANCE: (0.7, 0.4),
        S.COMMUNICATION_STYLE: (0.7, 0.4),
        S.CONFLICT_APPROACH: (0.6, 0.3),
        S.ACHIEVEMENT_DRIVE: (0.6, 0.5),
    },
    JobArchetype.CREATIVE: {
        S.STRUCTURE_PREFERENCE: (0.8, -0.5),
        S.AUTONOMY_NEED: (0.8, 0.6),
        S.RISK_TOLERANCE: (0.6, 0.4),
        S.ROUTINE_PREFERENCE: (0.7, -0.5),
        S.DETAIL_ORIENTATION: (0.5, 0.3),
        S.CHANGE_ADAPTABILITY: (0.6, 0.4),
    },
    JobArchetype.ANALYTICAL: {
        S.DECISION_STYLE: (1.0, 0.7),
        S.DETAIL_ORIENTATION: (0.9, 0.6),
        S.STRUCTURE_PREFERENCE: (0.7, 0.5),
        S.TASK_APPROACH: (0.6, 0.4),
        S.PACE_PREFERENCE: (0.5, 0.0),
    },
    JobArchetype.SUPPORT: {
        S.COLLABORATION_STYLE: (1.0, 0.7),
        S.CONFLICT_APPROACH: (0.8, -0.3),
        S.COMMUNICATION_STYLE: (0.7, -0.2),
        S.SOCIAL_ENERGY: (0.7, 0.5),
        S.AUTONOMY_NEED: (0.4, -0.2),
    },
    JobArchetype.SALES: {
        S.SOCIAL_ENERGY: (1.0, 0.7),
        S.RISK_TOLERANCE: (0.8, 0.5),
        S.ACHIEVEMENT_DRIVE: (0.9, 0.7),
        S.COMMUNICATION_STYLE: (0.7, 0.4),
        S.CHANGE_ADAPTABILITY: (0.6, 0.4),
    },
    JobArchetype.OPERATIONS: {
        S.STRUCTURE_PREFERENCE: (1.0, 0.7),
        S.DETAIL_ORIENTATION: (0.9, 0.6),
        S.ROUTINE_PREFERENCE: (0.8, 0.5),
        S.PACE_PREFERENCE: (0.6, 0.3),
        S.TASK_APPROACH: (0.5, 0.4),
    },
})
require_complete(ARCHETYPE_WEIGHTS, "ARCHETYPE_WEIGHTS", keys=JobArchetype)

# first match wins, so order matters
TITLE_ARCHETYPE_KEYWORDS: Tuple[Tuple[str, JobArchetype], ...] = (
    ("مدیر", JobArchetype.LEADERSHIP),
    ("manager", JobArchetype.LEADERSHIP),
    ("lead", JobArchetype.LEADERSHIP),
    ("head", JobArchetype.LEADERSHIP),
    ("director", JobArchetype.LEADERSHIP),
    ("سرپرست", JobArchetype.LEADERSHIP),
    ("vp", JobArchetype.LEADERSHIP),
    ("cto", JobArchetype.LEADERSHIP),
    ("ceo", JobArchetype.LEADERSHIP),
    ("طراح", JobArchetype.CREATIVE),
    ("designer", JobArchetype.CREATIVE),
    ("creative", JobArchetype.CREATIVE),
    ("ux", JobArchetype.CREATIVE),
    ("ui", JobArchetype.CREATIVE),
    ("artist", JobArchetype.CREATIVE),
    ("گرافیک", JobArchetype.CREATIVE),
    ("تحلیل", JobArchetype.ANALYTICAL),
    ("analyst", JobArchetype.ANALYTICAL),
    ("data", JobArchetype.ANALYTICAL),
    ("research", JobArchetype.ANALYTICAL),
    ("scientist", JobArchetype.ANALYTICAL),
    ("engineer", JobArchetype.ANALYTICAL),
    ("developer", JobArchetype.ANALYTICAL),
    ("توسعه", JobArchetype.ANALYTICAL),
    ("برنامه", JobArchetype.ANALYTICAL),
    ("فروش", JobArchetype.SALES),
    ("sales", JobArchetype.SALES),
    ("business development", JobArchetype.SALES),
    ("account", JobArchetype.SALES),
    ("بازاریابی", JobArchetype.SALES),
    ("marketing", JobArchetype.SALES),
    ("پشتیبان", JobArchetype.SUPPORT),
    ("support", JobArchetype.SUPPORT),
    ("customer", JobArchetype.SUPPORT),
    ("hr", JobArchetype.SUPPORT),
    ("منابع انسانی", JobArchetype.SUPPORT),
    ("عملیات", JobArchetype.OPERATIONS),
    ("operations", JobArchetype.OPERATIONS),
    ("admin", JobArchetype.OPERATIONS),
    ("coordinator", JobArchetype.OPERATIONS),
)


def infer_archetype_from_title(title: str) -> Optional[JobArchetype]:
    lowered = (title or "").lower()
    for keyword, archetype in TITLE_ARCHETYPE_KEYWORDS:
        if keyword.lower() in lowered:
            return archetype
    return None


def _enum_or_none(enum_cls, raw):
    try:
        return enum_cls(str(raw)) if raw else None
    except ValueError:
        return None


# ---- contributors ----
@dataclass(frozen=True)
class WeightPatch:
    label: str
    entries: Dict[SignalId, SignalWeight]


@dataclass(frozen=True)
class WeightContributor:
    name: str
    policy: MergePolicy
    explicit: bool
    build: Callable[[JobPosting], Optional[WeightPatch]]


def _table_patch(label: str, table: WeightTable) -> WeightPatch:
    return WeightPatch(label, {
        sid: SignalWeight(sid, weight=w, expected_value=ev, source="derived")
        for sid, (w, ev) in table.items()
    })


def team_context_patch(job: JobPosting) -> Optional[WeightPatch]:
    ctx = _enum_or_none(TeamContext, job.team_context)
    if ctx is None:
        return None
    return _table_patch(f"محیط کاری {ctx.value}", TEAM_CONTEXT_WEIGHTS[ctx])


def location_patch(job: JobPosting) -> Optional[WeightPatch]:
    loc = _enum_or_none(LocationType, job.location_type)
    if loc is None:
        return None
    return _table_patch(f"نوع حضور {loc.value}", LOCATION_TYPE_WEIGHTS[loc])


def archetype_patch(job: JobPosting) -> Optional[WeightPatch]:
    arch = infer_archetype_from_title(job.title)
    if arch is None:
        return None
    return _table_patch(f"نقش {arch.value}", ARCHETYPE_WEIGHTS[arch])


def _scale(v: float) -> float:
    # 1..5 → -1..1
    return clamp_bipolar((float(v) - 3.0) / 2.0)


def _explicit(sid: SignalId, weight: float, ev: float, reason: str) -> SignalWeight:
    return SignalWeight(sid, weight=weight, expected_value=ev, source="explicit", reason=reason)


def workstyle_patch(job: JobPosting) -> Optional[WeightPatch]:
    ws = job.workstyle_expectations
    if ws is None:
        return None
    out: Dict[SignalId, SignalWeight] = {}
    if ws.autonomy is not None:
        out[S.AUTONOMY_NEED] = _explicit(S.AUTONOMY_NEED, 0.8, _scale(ws.autonomy), "از تنظیمات استقلال کاری")
    if ws.collaboration is not None:
        norm = _scale(ws.collaboration)
        out[S.COLLABORATION_STYLE] = _explicit(S.COLLABORATION_STYLE, 0.8, norm, "از تنظیمات همکاری تیمی")
        out[S.SOCIAL_ENERGY] = _explicit(S.SOCIAL_ENERGY, 0.6, norm * 0.8, "از سطح همکاری مورد انتظار")
    if ws.pace is not None:
        out[S.PACE_PREFERENCE] = _explicit(S.PACE_PREFERENCE, 0.7, _scale(ws.pace), "از سرعت کار مورد انتظار")
        if float(ws.pace) >= 4:
            out[S.ROUTINE_PREFERENCE] = _explicit(
                S.ROUTINE_PREFERENCE, 0.5, -0.3, "محیط پرسرعت معمولاً با تنوع همراه است")
    if ws.structure is not None:
        out[S.STRUCTURE_PREFERENCE] = _explicit(S.STRUCTURE_PREFERENCE, 0.8, _scale(ws.structure), "از سطح ساختار مورد انتظار")
    return WeightPatch("workstyle", out)


def team_snapshot_patch(job: JobPosting) -> Optional[WeightPatch]:
    snap = job.team_snapshot
    if snap is None:
        return None
    out: Dict[SignalId, SignalWeight] = {}
    if snap.team_size is not None:
        if snap.team_size <= 2:
            out[S.AUTONOMY_NEED] = _explicit(S.AUTONOMY_NEED, 0.7, 0.5, "تیم کوچک نیاز به استقلال بیشتر دارد")
        elif snap.team_size >= 10:
            out[S.COLLABORATION_STYLE] = _explicit(S.COLLABORATION_STYLE, 0.8, 0.6, "تیم بزرگ نیاز به همکاری بیشتر دارد")
            out[S.COMMUNICATION_STYLE] = _explicit(S.COMMUNICATION_STYLE, 0.7, 0.4, "تیم بزرگ نیاز به ارتباط مؤثر دارد")
    if snap.works_with and len(snap.works_with) > 3:
        out[S.CHANGE_ADAPTABILITY] = _explicit(S.CHANGE_ADAPTABILITY, 0.6, 0.4, "کار با تیم‌های مختلف نیاز به انعطاف دارد")
    if snap.reports_to:
        out[S.LEADERSHIP_TENDENCY] = _explicit(S.LEADERSHIP_TENDENCY, 0.4, -0.2, "نقش گزارش‌دهی")
    return WeightPatch("team_snapshot", out)


CONTRIBUTORS: Tuple[WeightContributor, ...] = (
    WeightContributor("team_context", MergePolicy.MAX_WEIGHT, False, team_context_patch),
    WeightContributor("location_type", MergePolicy.AVERAGE, False, location_patch),
    WeightContributor("archetype", MergePolicy.MAX_WEIGHT, False, archetype_patch),
    WeightContributor("workstyle", MergePolicy.OVERWRITE, True, workstyle_patch),
    WeightContributor("team_snapshot", MergePolicy.OVERWRITE, True, team_snapshot_patch),
)


def merge_entry(
    policy: MergePolicy,
    existing: Optional[SignalWeight],
    incoming: SignalWeight,
    label: str,
) -> SignalWeight:
    """Combine one patch entry with the current entry under ``policy``."""

    if policy is MergePolicy.OVERWRITE:
        return incoming
    if existing is None:
        return incoming if incoming.reason else replace(incoming, reason=f"از {label}")
    if policy is MergePolicy.AVERAGE:
        if existing.expected_value is not None and incoming.expected_value is not None:
            ev: Optional[float] = (existing.expected_value + incoming.expected_value) / 2
        else:
            ev = incoming.expected_value if incoming.expected_value is not None else existing.expected_value
        return SignalWeight(
            incoming.signal_id,
            weight=max(existing.weight, incoming.weight),
            expected_value=ev,
            source=incoming.source,
            reason=f"{existing.reason} و {label}",
        )
    if incoming.weight > existing.weight:
        return replace(incoming, reason=f"{existing.reason} (تقویت شده با {label})")
    return existing


def fold_contributors(
    job: JobPosting,
    contributors: Sequence[WeightContributor] = CONTRIBUTORS,
) -> Tuple[Dict[SignalId, SignalWeight], bool]:
    current: Dict[SignalId, SignalWeight] = {}
    explicit = False
    for contrib in contributors:
        patch = contrib.build(job)
        if patch is None:
            continue
        explicit = explicit or contrib.explicit
        for sid, entry in patch.entries.items():
            current[sid] = merge_entry(contrib.policy, current.get(sid), entry, patch.label)
    return current, explicit


def derive_weights(job: JobPosting | Mapping) -> JobSignalWeightMap:
    """Full weight map for ``job``: exactly one entry per signal id."""

    if isinstance(job, Mapping):
        job = JobPosting.from_dict(job)
    merged, explicit = fold_contributors(job)
    weights = [
        merged.get(sid) or SignalWeight(sid, weight=config.DEFAULT_SIGNAL_WEIGHT, source="default")
        for sid in ALL_SIGNALS
    ]
    arch = infer_archetype_from_title(job.title)
    return JobSignalWeightMap(
        job_id=job.id,
        weights=weights,
        has_explicit_weights=explicit,
        derived_context=DerivedContext(
            archetype=arch.value if arch else None,
            team_context=job.team_context,
            location_type=job.location_type,
            team_size=job.team_snapshot.team_size if job.team_snapshot else None,
        ),
    )


def weights_as_map(weight_map: JobSignalWeightMap) -> Dict[SignalId, SignalWeight]:
    return {w.signal_id: w for w in weight_map.weights}


def high_priority_weights(weight_map: JobSignalWeightMap) -> List[SignalWeight]:
    return [w for w in weight_map.weights if w.weight >= config.HIGH_PRIORITY_WEIGHT]


def to_job_signal_requirements(weight_map: JobSignalWeightMap) -> List[JobSignalRequirement]:
    """Entries worth matching on: above the default weight with a known direction."""

    return [
        JobSignalRequirement(w.signal_id, w.expected_value, w.weight, w.reason)
        for w in weight_map.weights
        if w.weight > config.DEFAULT_SIGNAL_WEIGHT and w.expected_value is not None
    ]
