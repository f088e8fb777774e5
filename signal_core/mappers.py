"""Instrument → signal mappers.

Each instrument is described by a table of ``(signal, negative pole,
positive pole)`` rows where a pole is one or more dimension ids whose scores
are averaged.  Every row is turned into a value with the same rule,
``clamp(to_bipolar(neg, pos), -1, 1)``, and every produced signal carries the
caller's base confidence unchanged.

Instruments may derive the same signal from different dimension pairs; the
generator merges those contributions.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Callable, List, Mapping, Tuple

from .normalizer import clamp_bipolar, to_bipolar
from .types import Signal
from .vocabulary import SignalId, category_of

Pole = Tuple[str, ...]
MappingRow = Tuple[SignalId, Pole, Pole]
Mapper = Callable[[Mapping[str, float], float], List[Signal]]

S = SignalId

DISC_MAP: Tuple[MappingRow, ...] = (
    (S.LEADERSHIP_TENDENCY, ("S",), ("D",)),        # supporting vs leading
    (S.COMMUNICATION_STYLE, ("I",), ("D",)),        # diplomatic vs direct
    (S.COLLABORATION_STYLE, ("D", "C"), ("I", "S")),
    (S.CONFLICT_APPROACH, ("S",), ("D",)),
    (S.DECISION_STYLE, ("I",), ("C",)),             # intuitive vs analytical
    (S.RISK_TOLERANCE, ("S", "C"), ("D", "I")),
    (S.CHANGE_ADAPTABILITY, ("S",), ("I",)),
    (S.PACE_PREFERENCE, ("S", "C"), ("D", "I")),
    (S.STRUCTURE_PREFERENCE, ("I",), ("C",)),
    (S.DETAIL_ORIENTATION, ("D",), ("C",)),
    (S.ACHIEVEMENT_DRIVE, ("S",), ("D",)),
    (S.RECOGNITION_NEED, ("C",), ("I",)),           # private vs public
    (S.AUTONOMY_NEED, ("S",), ("D",)),
    (S.SOCIAL_ENERGY, ("C",), ("I",)),
)

HOLLAND_MAP: Tuple[MappingRow, ...] = (
    (S.COLLABORATION_STYLE, ("R",), ("S",)),
    (S.LEADERSHIP_TENDENCY, ("S",), ("E",)),
    (S.DECISION_STYLE, ("A",), ("I",)),
    (S.RISK_TOLERANCE, ("C", "R"), ("E", "A")),
    (S.STRUCTURE_PREFERENCE, ("A",), ("C",)),
    (S.DETAIL_ORIENTATION, ("E",), ("I", "C")),
    (S.TASK_APPROACH, ("A",), ("C",)),              # parallel vs sequential
    (S.ACHIEVEMENT_DRIVE, ("S",), ("E",)),
    (S.AUTONOMY_NEED, ("S", "C"), ("A", "I")),
    (S.SOCIAL_ENERGY, ("R", "I"), ("S", "E")),
    (S.ROUTINE_PREFERENCE, ("A", "E"), ("C", "R")),
)


def _pole(scores: Mapping[str, float], dims: Pole) -> float:
    return sum(float(scores.get(d, 0.0) or 0.0) for d in dims) / len(dims)


def map_with_table(
    table: Tuple[MappingRow, ...],
    source: str,
    scores: Mapping[str, float],
    base_confidence: float,
) -> List[Signal]:
    return [
        Signal(
            id=sid,
            category=category_of(sid),
            value=clamp_bipolar(to_bipolar(_pole(scores, neg), _pole(scores, pos))),
            confidence=base_confidence,
            sources=(source,),
        )
        for sid, neg, pos in table
    ]


def disc_to_signals(scores: Mapping[str, float], base_confidence: float) -> List[Signal]:
    return map_with_table(DISC_MAP, "disc", scores, base_confidence)


def holland_to_signals(scores: Mapping[str, float], base_confidence: float) -> List[Signal]:
    return map_with_table(HOLLAND_MAP, "holland", scores, base_confidence)


MAPPERS: Mapping[str, Mapper] = MappingProxyType({
    "disc": disc_to_signals,
    "holland": holland_to_signals,
})
