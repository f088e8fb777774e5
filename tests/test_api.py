from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api.app import app
from signal_core import config
from signal_core.matching import STRENGTH_REASONS
from signal_core.vocabulary import ALL_SIGNALS, SignalId

from tests.conftest import analysis_input, disc_answers, holland_answers, result_payload


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    body = client.get("/health").json()
    assert body["engine_version"] == config.ENGINE_VERSION


def test_analyze_success(client):
    payload = analysis_input(
        result_payload("disc", disc_answers()),
        result_payload("holland", holland_answers()),
        purpose="job_matching",
    )
    res = client.post("/analyze", json=payload)
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "success"
    assert body["metadata"]["sessionId"] == "sess-1"
    assert body["signals"]


@pytest.mark.parametrize("payload", [{}, [], {"sessionId": "x", "testResults": []}, "text"])
def test_analyze_bad_payload_is_still_200(client, payload):
    res = client.post("/analyze", json=payload)
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "error"
    assert body["issues"][0]["code"] == "INVALID_INPUT"


def test_signal_metadata_endpoints(client):
    listing = client.get("/signals").json()["signals"]
    assert [s["id"] for s in listing] == [sid.value for sid in ALL_SIGNALS]
    one = client.get("/signals/risk_tolerance").json()
    assert one["category"] == "decision_making"
    assert client.get("/signals/nope").status_code == 404


def test_match_by_archetype(client):
    signals = [
        {"id": "leadership_tendency", "value": 0.7, "confidence": 0.9},
        {"id": "decision_style", "value": 0.3, "confidence": 0.9},
        {"id": "risk_tolerance", "value": 0.4, "confidence": 0.9},
        {"id": "communication_style", "value": 0.5, "confidence": 0.9},
    ]
    body = client.post("/match", json={"signals": signals, "archetype": "leadership"}).json()
    assert body["overallScore"] == 100
    assert body["explanation"] == STRENGTH_REASONS[SignalId.LEADERSHIP_TENDENCY]
    assert len(body["signalMatches"]) == 4


def test_match_with_explicit_requirements(client):
    body = client.post("/match", json={
        "signals": [{"id": "autonomy_need", "value": -0.9, "confidence": 0.8}],
        "requirements": [{"signal_id": "autonomy_need", "expected_value": 0.8, "weight": 1.0}],
    }).json()
    assert body["overallScore"] == 20
    assert body["frictionReasons"]


@pytest.mark.parametrize(
    "payload",
    [
        {"signals": []},
        {"signals": [], "archetype": "astronaut"},
        {"signals": [{"id": "nope", "value": 0.1}], "archetype": "sales"},
        {"signals": [{"id": "social_energy", "value": 3.0}], "archetype": "sales"},
        {"signals": [], "requirements": [{"signal_id": "nope", "expected_value": 0, "weight": 1}]},
    ],
)
def test_match_rejects_bad_bodies(client, payload):
    assert client.post("/match", json=payload).status_code == 422


def test_job_weights_endpoint(client):
    body = client.post("/jobs/weights", json={
        "id": "job-1",
        "title": "Barista",
        "location_type": "remote",
        "workstyle_expectations": {"structure": 5},
    }).json()
    assert body["jobId"] == "job-1"
    assert body["hasExplicitWeights"] is True
    weights = {w["signalId"]: w for w in body["weights"]}
    assert len(weights) == len(ALL_SIGNALS)
    assert weights["structure_preference"]["source"] == "explicit"
    assert weights["structure_preference"]["expectedValue"] == 1.0
    assert weights["autonomy_need"]["source"] == "derived"
    assert "expectedValue" not in weights["task_approach"]


def test_job_weights_validates_scale(client):
    res = client.post("/jobs/weights", json={"id": "j", "workstyle_expectations": {"pace": 9}})
    assert res.status_code == 422


def test_profile_insights(client):
    body = client.post("/profile/insights", json={"signals": [
        {"id": "leadership_tendency", "value": 0.8, "confidence": 0.9},
        {"id": "social_energy", "value": -0.5, "confidence": 0.7},
    ]}).json()
    assert [i["title"] for i in body["insights"]] == ["رهبری طبیعی", "درون‌گرا"]
    assert body["summary"]["primaryTraits"] == ["رهبر"]
    assert set(body["descriptions"]) == {"collaboration", "environment"}
