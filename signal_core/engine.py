# signal_core/engine.py
"""Single entry point of the signal engine.

``analyze`` takes the JSON-shaped input (camelCase keys, as received over the
wire), validates it once, scores every test independently, feeds the
successful ones to the generator and returns an :class:`AnalysisOutput`.
Nothing is raised for malformed-but-JSON input; problems are reported as
issues on the output.
"""
from __future__ import annotations
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional
import logging
import uuid

from . import config
from .generator import generate_signals
from .question_bank import get_test_definition
from .scoring import score_test
from .types import (
    AnalysisContext,
    AnalysisInput,
    AnalysisMetadata,
    AnalysisOutput,
    Answer,
    Issue,
    IssueCode,
    ProcessedTest,
    Signal,
    SignalGroup,
    TestResult,
)
from .vocabulary import SIGNAL_METADATA, SignalId, SignalMeta, parse_signal_id

log = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_number(x: object) -> bool:
    return isinstance(x, Real) and not isinstance(x, bool)


def _parse_answer(raw: object) -> Optional[Answer]:
    if not isinstance(raw, Mapping):
        return None
    qid = raw.get("questionId")
    value = raw.get("value")
    rt = raw.get("responseTimeMs")
    if not isinstance(qid, str):
        return None
    if not (_is_number(value) or isinstance(value, str)):
        return None
    if rt is not None and not _is_number(rt):
        return None
    return Answer(question_id=qid, value=value, response_time_ms=(float(rt) if rt is not None else None))


def _parse_test_result(raw: object) -> Optional[TestResult]:
    if not isinstance(raw, Mapping):
        return None
    test_type = raw.get("testType")
    version = raw.get("testVersion")
    answers_raw = raw.get("answers")
    completed_at = raw.get("completedAt", "")
    if not isinstance(test_type, str) or not isinstance(version, str):
        return None
    if not isinstance(answers_raw, (list, tuple)):
        return None
    if completed_at is not None and not isinstance(completed_at, str):
        return None
    answers: List[Answer] = []
    for a in answers_raw:
        parsed = _parse_answer(a)
        if parsed is None:
            return None
        answers.append(parsed)
    return TestResult(test_type=test_type, test_version=version, answers=answers, completed_at=completed_at or "")


def parse_input(payload: Any) -> Optional[AnalysisInput]:
    """Return the typed input, or ``None`` if the payload is not well formed."""

    if isinstance(payload, AnalysisInput):
        return payload if payload.session_id and payload.test_results else None
    if not isinstance(payload, Mapping):
        return None
    session_id = payload.get("sessionId")
    results_raw = payload.get("testResults")
    if not isinstance(session_id, str) or not session_id:
        return None
    if not isinstance(results_raw, (list, tuple)) or not results_raw:
        return None
    results: List[TestResult] = []
    for r in results_raw:
        parsed = _parse_test_result(r)
        if parsed is None:
            return None
        results.append(parsed)

    ctx_raw = payload.get("context") or {}
    if not isinstance(ctx_raw, Mapping):
        return None
    purpose = ctx_raw.get("purpose")
    locale = ctx_raw.get("locale")
    context = AnalysisContext(
        purpose=purpose if isinstance(purpose, str) else None,
        locale=locale if isinstance(locale, str) else None,
    )
    return AnalysisInput(session_id=session_id, test_results=results, context=context)


def group_signals_by_category(signals: List[Signal]) -> List[SignalGroup]:
    groups: Dict[Any, List[Signal]] = {}
    for s in signals:
        groups.setdefault(s.category, []).append(s)
    return [
        SignalGroup(
            category=cat,
            signals=members,
            average_confidence=sum(s.confidence for s in members) / len(members),
        )
        for cat, members in groups.items()
    ]


def overall_confidence(signals: List[Signal]) -> float:
    if not signals:
        return 0.0
    return sum(s.confidence for s in signals) / len(signals)


def create_error_output(session_id: str, issues: List[Issue]) -> AnalysisOutput:
    return AnalysisOutput(
        status="error",
        metadata=AnalysisMetadata(
            analysis_id=str(uuid.uuid4()),
            session_id=session_id,
            analyzed_at=_now_iso(),
            engine_version=config.ENGINE_VERSION,
        ),
        issues=list(issues),
    )


def create_success_output(metadata: AnalysisMetadata, signals: List[Signal], issues: List[Issue]) -> AnalysisOutput:
    return AnalysisOutput(
        status="partial" if issues else "success",
        metadata=metadata,
        signals=signals,
        signal_groups=group_signals_by_category(signals),
        overall_confidence=overall_confidence(signals),
        issues=list(issues),
    )


def analyze(payload: Any) -> AnalysisOutput:
    data = parse_input(payload)
    if data is None:
        sid = payload.get("sessionId") if isinstance(payload, Mapping) else None
        log.warning("analysis rejected: invalid input")
        return create_error_output(
            sid if isinstance(sid, str) and sid else "unknown",
            [Issue("error", IssueCode.INVALID_INPUT, "Invalid input format")],
        )

    issues: List[Issue] = []
    processed: List[ProcessedTest] = []
    all_scores: Dict[str, Dict[str, float]] = {}

    for tr in data.test_results:
        definition = get_test_definition(tr.test_type)
        if definition is None:
            log.warning("skipping unknown test type %r", tr.test_type)
            issues.append(Issue("warning", IssueCode.UNKNOWN_TEST_TYPE,
                                f"Unknown test type: {tr.test_type}", tr.test_type))
            continue

        res = score_test(tr, definition)
        if not res.success:
            log.warning("skipping %s: %s", tr.test_type, res.error)
            issues.append(Issue("warning", IssueCode.SCORING_ERROR,
                                res.error or "Scoring failed", tr.test_type))
            continue

        processed.append(ProcessedTest(
            test_type=tr.test_type,
            test_version=tr.test_version,
            questions_answered=res.answered,
            total_questions=res.total_questions,
            is_complete=res.answered >= res.total_questions,
            raw_scores=dict(res.scores),
        ))
        if res.confidence < config.LOW_CONFIDENCE_THRESHOLD:
            issues.append(Issue("warning", IssueCode.LOW_CONFIDENCE,
                                f"Low confidence in {tr.test_type} results", tr.test_type))
        # a repeated instrument replaces the earlier submission
        all_scores[tr.test_type] = dict(res.normalized_scores)

    if not processed:
        log.warning("analysis for session %s has no scorable tests", data.session_id)
        return create_error_output(
            data.session_id,
            [Issue("error", IssueCode.TOO_FEW_ANSWERS, "No valid tests to analyze"), *issues],
        )

    signals = generate_signals(all_scores, data.context.purpose)
    metadata = AnalysisMetadata(
        analysis_id=str(uuid.uuid4()),
        session_id=data.session_id,
        analyzed_at=_now_iso(),
        engine_version=config.ENGINE_VERSION,
        tests_processed=processed,
    )
    out = create_success_output(metadata, signals, issues)
    log.info("analysis %s status=%s signals=%d", metadata.analysis_id, out.status, len(signals))
    return out


def get_signal_metadata(signal_id: object) -> Optional[SignalMeta]:
    sid = parse_signal_id(signal_id)
    return SIGNAL_METADATA[sid] if sid is not None else None


def get_all_signal_metadata() -> Mapping[SignalId, SignalMeta]:
    return SIGNAL_METADATA


def get_version() -> str:
    return config.ENGINE_VERSION
