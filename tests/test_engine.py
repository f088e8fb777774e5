from __future__ import annotations

import pytest

from signal_core import config
from signal_core.engine import analyze, get_all_signal_metadata, get_signal_metadata, get_version
from signal_core.types import AnalysisContext, AnalysisInput, Answer, IssueCode, TestResult
from signal_core.vocabulary import ALL_SIGNALS, SignalId

from tests.conftest import analysis_input, disc_answers, holland_answers, result_payload


def _codes(out) -> list[str]:
    return [i.code.value for i in out.issues]


def test_full_disc_is_success(full_disc_payload):
    out = analyze(full_disc_payload)
    assert out.status == "success"
    assert out.issues == []
    assert len(out.signals) == 14
    processed = out.metadata.tests_processed[0]
    assert processed.questions_answered == 20
    assert processed.is_complete
    assert out.metadata.engine_version == config.ENGINE_VERSION
    assert "issues" not in out.to_dict()


def test_mostly_first_option_disc_leans_toward_leading():
    answers = disc_answers(15, ("1",))
    for ans in answers[11:]:
        ans["value"] = "2"
    out = analyze(analysis_input(result_payload("disc", answers)))
    assert out.status == "success"
    by_id = {s.id: s for s in out.signals}
    assert by_id[SignalId.LEADERSHIP_TENDENCY].value > 0
    assert not out.metadata.tests_processed[0].is_complete


def test_two_instruments_merge_sources():
    out = analyze(analysis_input(
        result_payload("disc", disc_answers()),
        result_payload("holland", holland_answers(overrides={"E": 5, "S": 1})),
        purpose="job_matching",
    ))
    assert out.status == "success"
    by_id = {s.id: s for s in out.signals}
    assert by_id[SignalId.LEADERSHIP_TENDENCY].sources == ("disc", "holland")
    assert by_id[SignalId.ROUTINE_PREFERENCE].sources == ("holland",)
    assert len(out.signals) == len(set(by_id))
    assert len(out.metadata.tests_processed) == 2


def test_analysis_is_deterministic(full_disc_payload):
    first = analyze(full_disc_payload).to_dict()
    second = analyze(full_disc_payload).to_dict()
    assert first["signals"] == second["signals"]
    assert first["signalGroups"] == second["signalGroups"]
    assert first["metadata"]["analysisId"] != second["metadata"]["analysisId"]


def test_groups_partition_signals(full_disc_payload):
    out = analyze(full_disc_payload)
    grouped = [s for g in out.signal_groups for s in g.signals]
    assert sorted(s.id.value for s in grouped) == sorted(s.id.value for s in out.signals)
    for g in out.signal_groups:
        assert all(s.category == g.category for s in g.signals)
        assert g.average_confidence == pytest.approx(sum(s.confidence for s in g.signals) / len(g.signals))
    assert out.overall_confidence == pytest.approx(sum(s.confidence for s in out.signals) / len(out.signals))


@pytest.mark.parametrize(
    "payload",
    [
        None,
        "disc",
        {},
        {"sessionId": "", "testResults": [result_payload("disc", disc_answers())]},
        {"sessionId": "s", "testResults": []},
        {"sessionId": "s", "testResults": [{"testType": "disc", "answers": []}]},
        {"sessionId": "s", "testResults": [result_payload("disc", [{"questionId": 3, "value": "1"}])]},
        {"sessionId": "s", "testResults": [result_payload("disc", disc_answers())], "context": ["x"]},
    ],
)
def test_invalid_input_is_an_error_output(payload):
    out = analyze(payload)
    assert out.status == "error"
    assert _codes(out) == [IssueCode.INVALID_INPUT.value]
    assert out.signals == []
    assert out.overall_confidence == 0.0


def test_invalid_input_keeps_session_id_when_present():
    out = analyze({"sessionId": "abc", "testResults": "nope"})
    assert out.metadata.session_id == "abc"
    assert analyze(None).metadata.session_id == "unknown"


def test_unknown_test_type_is_skipped_with_warning():
    out = analyze(analysis_input(
        result_payload("mbti", [{"questionId": "q1", "value": "E"}]),
        result_payload("disc", disc_answers()),
    ))
    assert out.status == "partial"
    assert _codes(out) == [IssueCode.UNKNOWN_TEST_TYPE.value]
    assert out.issues[0].test_type == "mbti"
    assert out.signals


def test_only_failed_tests_is_an_error():
    out = analyze(analysis_input(
        result_payload("mbti", []),
        result_payload("disc", disc_answers(3)),
    ))
    assert out.status == "error"
    assert _codes(out) == [
        IssueCode.TOO_FEW_ANSWERS.value,
        IssueCode.UNKNOWN_TEST_TYPE.value,
        IssueCode.SCORING_ERROR.value,
    ]
    assert out.issues[0].severity == "error"
    assert out.issues[2].message == "Not enough answers: 3/12 required"


def test_short_test_alongside_good_one_is_partial():
    out = analyze(analysis_input(
        result_payload("disc", disc_answers(5)),
        result_payload("holland", holland_answers()),
    ))
    assert out.status == "partial"
    assert _codes(out) == [IssueCode.SCORING_ERROR.value]
    assert all(s.sources == ("holland",) for s in out.signals)


def test_low_confidence_warns_but_keeps_signals():
    out = analyze(analysis_input(result_payload("disc", disc_answers(12, response_time_ms=200))))
    assert out.status == "partial"
    assert _codes(out) == [IssueCode.LOW_CONFIDENCE.value]
    assert len(out.signals) == 14
    assert out.issues[0].severity == "warning"


def test_typed_input_is_accepted():
    data = AnalysisInput(
        session_id="typed",
        test_results=[TestResult("disc", "1.0.0", [Answer(q["questionId"], q["value"]) for q in disc_answers()])],
        context=AnalysisContext(purpose="team_fit"),
    )
    out = analyze(data)
    assert out.status == "success"
    assert out.metadata.session_id == "typed"


def test_output_shape_is_camel_case(full_disc_payload):
    doc = analyze(full_disc_payload).to_dict()
    assert set(doc) == {"status", "metadata", "signals", "signalGroups", "overallConfidence"}
    assert set(doc["metadata"]) == {"analysisId", "sessionId", "analyzedAt", "engineVersion", "testsProcessed"}
    assert set(doc["signals"][0]) == {"id", "category", "value", "confidence", "sources"}


def test_signal_metadata_lookup():
    meta = get_signal_metadata("risk_tolerance")
    assert meta is not None and meta.id == SignalId.RISK_TOLERANCE
    assert get_signal_metadata("not_a_signal") is None
    assert set(get_all_signal_metadata()) == set(ALL_SIGNALS)
    assert get_version() == config.ENGINE_VERSION
