from __future__ import annotations
from fastapi import FastAPI, HTTPException, Body
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
import typing as t

# ---- Engine imports ----
from signal_core import config
from signal_core.engine import analyze, get_all_signal_metadata, get_signal_metadata, get_version
from signal_core.types import Signal
from signal_core.vocabulary import SignalId, parse_signal_id
from signal_core.matching import (
    JobSignalRequirement,
    generate_match_explanation,
    get_archetype_requirements,
    match_candidate_to_job,
)
from signal_core.job_weights import JobPosting, TeamSnapshot, WorkstyleExpectations, derive_weights
from signal_core.insights import generate_insights, generate_work_style_summary
from signal_core.descriptions import describe_signals

app = FastAPI(title="Signal Engine API")


@app.get("/")
def root():
    return {"status": "ok", "service": "signal-engine-api"}


app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.API_ALLOWED_ORIGINS),
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,  # keep False unless you use cookies
)

# ---- Schemas ----
class SignalIn(BaseModel):
    id: str
    value: float = Field(ge=-1.0, le=1.0)
    confidence: float = Field(default=1.0, ge=0.0, le=1.0)
    category: str | None = None
    sources: list[str] | None = None

class RequirementIn(BaseModel):
    signal_id: str
    expected_value: float = Field(ge=-1.0, le=1.0)
    weight: float = Field(gt=0.0)
    reason: str | None = None

class MatchReq(BaseModel):
    signals: list[SignalIn]
    archetype: str | None = None
    requirements: list[RequirementIn] | None = None

class WorkstyleIn(BaseModel):
    autonomy: float | None = Field(default=None, ge=1, le=5)
    collaboration: float | None = Field(default=None, ge=1, le=5)
    pace: float | None = Field(default=None, ge=1, le=5)
    structure: float | None = Field(default=None, ge=1, le=5)

class TeamSnapshotIn(BaseModel):
    team_size: int | None = Field(default=None, ge=0)
    works_with: list[str] = Field(default_factory=list)
    reports_to: str | None = None

class JobReq(BaseModel):
    id: str
    title: str = ""
    team_context: str | None = None
    location_type: str | None = None
    workstyle_expectations: WorkstyleIn | None = None
    team_snapshot: TeamSnapshotIn | None = None

class SignalsReq(BaseModel):
    signals: list[SignalIn]

# ---- Helpers ----
def _signal_id(raw: str) -> SignalId:
    sid = parse_signal_id(raw)
    if sid is None:
        raise HTTPException(422, f"unknown signal id: {raw}")
    return sid


def _to_signals(items: list[SignalIn]) -> list[Signal]:
    out = []
    for s in items:
        _signal_id(s.id)
        try:
            out.append(Signal.from_dict(s.model_dump(exclude_none=True)))
        except ValueError as exc:
            raise HTTPException(422, str(exc)) from exc
    return out


def _to_job(req: JobReq) -> JobPosting:
    ws = req.workstyle_expectations
    snap = req.team_snapshot
    return JobPosting(
        id=req.id,
        title=req.title,
        team_context=req.team_context,
        location_type=req.location_type,
        workstyle_expectations=WorkstyleExpectations(**ws.model_dump()) if ws else None,
        team_snapshot=TeamSnapshot(**snap.model_dump()) if snap else None,
    )

# ---- Health ----
@app.get("/health")
def health():
    return {"status": "ok", "engine_version": get_version()}

# ---- Analysis ----
@app.post("/analyze")
def analyze_endpoint(payload: t.Any = Body(...)):
    # problems with the payload are reported as issues, never as HTTP errors
    return analyze(payload).to_dict()

# ---- Signal metadata ----
@app.get("/signals")
def list_signals():
    return {"signals": [meta.to_dict() for meta in get_all_signal_metadata().values()]}


@app.get("/signals/{signal_id}")
def get_signal(signal_id: str):
    meta = get_signal_metadata(signal_id)
    if meta is None:
        raise HTTPException(404, "signal not found")
    return meta.to_dict()

# ---- Matching ----
@app.post("/match")
def match(req: MatchReq):
    signals = _to_signals(req.signals)
    if req.requirements:
        reqs = [
            JobSignalRequirement(_signal_id(r.signal_id), r.expected_value, r.weight, r.reason)
            for r in req.requirements
        ]
    elif req.archetype:
        reqs = get_archetype_requirements(req.archetype)
        if not reqs:
            raise HTTPException(422, f"unknown archetype: {req.archetype}")
    else:
        raise HTTPException(422, "either archetype or requirements is required")
    result = match_candidate_to_job(signals, reqs)
    return {**result.to_dict(), "explanation": generate_match_explanation(result)}


@app.post("/jobs/weights")
def job_weights(req: JobReq):
    return derive_weights(_to_job(req)).to_dict()

# ---- Profile ----
@app.post("/profile/insights")
def profile_insights(req: SignalsReq):
    signals = _to_signals(req.signals)
    grouped = describe_signals(signals)
    return {
        "insights": [i.to_dict() for i in generate_insights(signals)],
        "summary": generate_work_style_summary(signals).to_dict(),
        "descriptions": {cat.value: [d.to_dict() for d in items] for cat, items in grouped.items()},
    }
