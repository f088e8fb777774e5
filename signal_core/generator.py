# signal_core/generator.py
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence, Tuple, Union
import logging

from . import config
from .mappers import MAPPERS
from .types import Signal
from .vocabulary import AnalysisPurpose, SignalCategory, SignalId, parse_purpose, require_complete

log = logging.getLogger(__name__)

_C = SignalCategory
CATEGORY_PRIORITY: Mapping[AnalysisPurpose, Tuple[SignalCategory, ...]] = MappingProxyType({
    AnalysisPurpose.JOB_MATCHING: (_C.WORK_STYLE, _C.COLLABORATION, _C.MOTIVATION, _C.DECISION_MAKING, _C.ENVIRONMENT, _C.GROWTH),
    AnalysisPurpose.TEAM_FIT: (_C.COLLABORATION, _C.ENVIRONMENT, _C.WORK_STYLE, _C.DECISION_MAKING, _C.MOTIVATION, _C.GROWTH),
    AnalysisPurpose.PROFILE_INSIGHT: (_C.MOTIVATION, _C.WORK_STYLE, _C.COLLABORATION, _C.DECISION_MAKING, _C.ENVIRONMENT, _C.GROWTH),
    AnalysisPurpose.GENERAL: (_C.WORK_STYLE, _C.COLLABORATION, _C.DECISION_MAKING, _C.MOTIVATION, _C.ENVIRONMENT, _C.GROWTH),
})
require_complete(CATEGORY_PRIORITY, "CATEGORY_PRIORITY", keys=AnalysisPurpose)


def _emit_trace(**values: object) -> None:
    if not config.DEBUG_TRACE:
        return
    ordered = [f"{key}={values[key]}" for key in config.TRACE_FIELDS if key in values]
    if ordered:
        log.info("trace %s", " ".join(ordered))


def base_confidence(scores: Mapping[str, float]) -> float:
    """Mean normalised dimension score plus a fixed boost, capped at 1."""

    vals = [float(v) for v in scores.values()]
    avg = sum(vals) / len(vals) if vals else 0.0
    return min(1.0, avg + config.BASE_CONFIDENCE_BOOST)


def calculate_agreement(signals: Sequence[Signal]) -> float:
    """1 when all values coincide, 0 when they span the full [-1, 1] range."""

    if len(signals) < 2:
        return 1.0
    values = [s.value for s in signals]
    return 1.0 - (max(values) - min(values)) / 2.0


def merge_signals(signals: Sequence[Signal]) -> Signal:
    """Merge same-id signals from different instruments.

    value      = Σ(value·confidence) / Σ(confidence)
    confidence = min(1, mean(confidence) · (1 + agreement · AGREEMENT_BONUS))
    """
    if not signals:
        raise ValueError("cannot merge an empty list of signals")
    if len(signals) == 1:
        return signals[0]
    ids = {s.id for s in signals}
    if len(ids) != 1:
        raise ValueError(f"cannot merge different signals: {sorted(i.value for i in ids)}")

    total_weight = sum(s.confidence for s in signals)
    weighted = sum(s.value * s.confidence for s in signals)
    value = weighted / total_weight if total_weight > 0 else 0.0

    avg_conf = total_weight / len(signals)
    agreement = calculate_agreement(signals)
    confidence = min(1.0, avg_conf * (1.0 + agreement * config.AGREEMENT_BONUS))

    sources = sorted({src for s in signals for src in s.sources})
    merged = Signal(
        id=signals[0].id,
        category=signals[0].category,
        value=value,
        confidence=confidence,
        sources=tuple(sources),
    )
    _emit_trace(
        signal=merged.id.value,
        sources="+".join(sources),
        value=round(merged.value, 4),
        confidence=round(merged.confidence, 4),
        agreement=round(agreement, 4),
    )
    return merged


def sort_signals(signals: Sequence[Signal], purpose: Union[AnalysisPurpose, str, None] = None) -> List[Signal]:
    priority = CATEGORY_PRIORITY[parse_purpose(purpose)]
    rank = {cat: idx for idx, cat in enumerate(priority)}
    return sorted(signals, key=lambda s: (rank.get(s.category, len(rank)), -s.confidence))


def generate_signals_for_test(test_type: str, scores: Mapping[str, float]) -> List[Signal]:
    mapper = MAPPERS.get(test_type)
    if mapper is None:
        return []
    return mapper(scores, base_confidence(scores))


def generate_signals(
    all_scores: Mapping[str, Mapping[str, float]],
    purpose: Union[AnalysisPurpose, str, None] = None,
) -> List[Signal]:
    """Map every instrument's normalised scores, merge per signal id, order by purpose."""

    by_id: Dict[SignalId, List[Signal]] = {}
    for test_type, scores in all_scores.items():
        for sig in generate_signals_for_test(test_type, scores):
            by_id.setdefault(sig.id, []).append(sig)

    merged = [merge_signals(group) for group in by_id.values()]
    return sort_signals(merged, purpose)
