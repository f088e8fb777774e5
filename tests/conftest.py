from __future__ import annotations

import pytest

from signal_core.question_bank import DiscTest, HollandTest
from signal_core.types import Signal
from signal_core.vocabulary import SignalId, category_of


def disc_answers(
    count: int = 20,
    pattern: tuple[str, ...] = ("1",),
    response_time_ms: float | None = None,
) -> list[dict]:
    """First ``count`` DISC questions, cycling through ``pattern`` for values."""

    out = []
    for idx, q in enumerate(DiscTest.questions[:count]):
        ans = {"questionId": q.id, "value": pattern[idx % len(pattern)]}
        if response_time_ms is not None:
            ans["responseTimeMs"] = response_time_ms
        out.append(ans)
    return out


def holland_answers(
    count: int = 24,
    value: int = 3,
    overrides: dict[str, int] | None = None,
) -> list[dict]:
    """First ``count`` Holland questions; ``overrides`` maps a dimension letter to a value."""

    overrides = overrides or {}
    out = []
    for q in HollandTest.questions[:count]:
        dim = q.dimensions[0].dimension_id
        out.append({"questionId": q.id, "value": overrides.get(dim, value)})
    return out


def result_payload(test_type: str, answers: list[dict], version: str = "1.0.0") -> dict:
    return {
        "testType": test_type,
        "testVersion": version,
        "answers": answers,
        "completedAt": "2024-05-01T10:00:00Z",
    }


def analysis_input(*results: dict, session_id: str = "sess-1", purpose: str | None = None) -> dict:
    payload: dict = {"sessionId": session_id, "testResults": list(results)}
    if purpose is not None:
        payload["context"] = {"purpose": purpose, "locale": "fa"}
    return payload


def make_signal(
    sid: SignalId | str,
    value: float,
    confidence: float = 0.8,
    sources: tuple[str, ...] = ("disc",),
) -> Signal:
    sid = SignalId(sid)
    return Signal(id=sid, category=category_of(sid), value=value, confidence=confidence, sources=sources)


@pytest.fixture
def full_disc_payload() -> dict:
    return analysis_input(result_payload("disc", disc_answers(20, ("1", "2"))))
