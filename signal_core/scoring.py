from __future__ import annotations
from typing import Dict, Optional, Sequence
import logging

from . import config
from .question_bank import get_test_definition
from .types import Answer, AnswerValue, Question, ScoringResult, TestDefinition, TestResult

log = logging.getLogger(__name__)


def _answer_key(value: AnswerValue) -> str:
    # 1, 1.0 and "1" all select the same option
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    return str(value)


def _failure(error: str, total_questions: int = 0) -> ScoringResult:
    return ScoringResult(success=False, confidence=0.0, total_questions=total_questions, error=error)


def calculate_confidence(completion_rate: float, answers: Sequence[Answer]) -> float:
    """Completion ratio, penalised when too many answers were implausibly fast."""

    confidence = completion_rate
    fast = sum(
        1 for a in answers
        if a.response_time_ms is not None and a.response_time_ms < config.FAST_ANSWER_MS
    )
    if fast > len(answers) * config.FAST_ANSWER_RATIO:
        confidence *= config.FAST_ANSWER_PENALTY
    return max(0.0, min(1.0, confidence))


def score_test(result: TestResult, definition: Optional[TestDefinition] = None) -> ScoringResult:
    """Score one completed test against its definition.

    Unknown question ids are skipped and do not count toward completion.
    Each recognised answer adds the chosen option's weight to every dimension
    the question declares, and that dimension's best possible weight to the
    running maximum; normalised scores are raw / maximum.
    """
    definition = definition or get_test_definition(result.test_type)
    if definition is None:
        return _failure(f"Unknown test type: {result.test_type}")

    n_given = len(result.answers)
    if n_given < definition.minimum_questions:
        return _failure(
            f"Not enough answers: {n_given}/{definition.minimum_questions} required",
            total_questions=definition.total_questions,
        )

    scores: Dict[str, float] = {d: 0.0 for d in definition.dimension_ids}
    max_scores: Dict[str, float] = {d: 0.0 for d in definition.dimension_ids}
    questions: Dict[str, Question] = {q.id: q for q in definition.questions}

    answered = 0
    for ans in result.answers:
        question = questions.get(ans.question_id)
        if question is None:
            continue
        answered += 1
        key = _answer_key(ans.value)
        for qd in question.dimensions:
            scores[qd.dimension_id] = scores.get(qd.dimension_id, 0.0) + qd.weights.get(key, 0.0)
            max_scores[qd.dimension_id] = max_scores.get(qd.dimension_id, 0.0) + qd.max_weight

    normalized: Dict[str, float] = {}
    for dim in definition.dimension_ids:
        mx = max_scores[dim]
        normalized[dim] = scores[dim] / mx if mx > 0 else 0.0

    total = definition.total_questions
    completion = answered / total if total else 0.0
    confidence = calculate_confidence(completion, result.answers)
    log.debug(
        "scored %s v%s answered=%d/%d confidence=%.3f",
        definition.type, definition.version, answered, total, confidence,
    )
    return ScoringResult(
        success=True,
        scores=scores,
        normalized_scores=normalized,
        confidence=confidence,
        total_questions=total,
        answered=answered,
    )
