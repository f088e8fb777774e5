from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Literal, Mapping, Optional, Tuple, Union

from .vocabulary import SignalCategory, SignalId, category_of

AnswerValue = Union[int, float, str]
AnalysisStatus = Literal["success", "partial", "error"]
Severity = Literal["warning", "error"]


class IssueCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    UNKNOWN_TEST_TYPE = "UNKNOWN_TEST_TYPE"
    INVALID_TEST_VERSION = "INVALID_TEST_VERSION"
    INCOMPLETE_TEST = "INCOMPLETE_TEST"
    TOO_FEW_ANSWERS = "TOO_FEW_ANSWERS"
    SCORING_ERROR = "SCORING_ERROR"
    SIGNAL_GENERATION_ERROR = "SIGNAL_GENERATION_ERROR"
    LOW_CONFIDENCE = "LOW_CONFIDENCE"
    INCONSISTENT_ANSWERS = "INCONSISTENT_ANSWERS"


def _clamp(x: float, lo: float, hi: float) -> float:
    return min(max(float(x), lo), hi)


# ---- test definitions (static) ----
@dataclass(frozen=True)
class Dimension:
    id: str; name: str; description: str

@dataclass(frozen=True)
class QuestionDimension:
    dimension_id: str
    weights: Mapping[str, float]

    @property
    def max_weight(self) -> float:
        return max(self.weights.values()) if self.weights else 0.0

@dataclass(frozen=True)
class Question:
    id: str; text: str
    dimensions: Tuple[QuestionDimension, ...]

@dataclass(frozen=True)
class TestDefinition:
    type: str
    version: str
    dimensions: Tuple[Dimension, ...]
    questions: Tuple[Question, ...]
    minimum_questions: int

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def dimension_ids(self) -> Tuple[str, ...]:
        return tuple(d.id for d in self.dimensions)


# ---- input ----
@dataclass
class Answer:
    question_id: str; value: AnswerValue
    response_time_ms: Optional[float] = None

@dataclass
class TestResult:
    test_type: str
    test_version: str
    answers: List[Answer]
    completed_at: str = ""


# ---- scoring ----
@dataclass
class ScoringResult:
    success: bool
    scores: Dict[str, float] = field(default_factory=dict)
    normalized_scores: Dict[str, float] = field(default_factory=dict)
    confidence: float = 0.0
    total_questions: int = 0
    answered: int = 0
    error: Optional[str] = None


# ---- signals ----
@dataclass(frozen=True)
class Signal:
    id: SignalId
    category: SignalCategory
    value: float
    confidence: float
    sources: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.sources:
            raise ValueError(f"signal {self.id.value} needs at least one source")
        object.__setattr__(self, "value", _clamp(self.value, -1.0, 1.0))
        object.__setattr__(self, "confidence", _clamp(self.confidence, 0.0, 1.0))
        object.__setattr__(self, "sources", tuple(self.sources))

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "category": self.category.value,
            "value": self.value,
            "confidence": self.confidence,
            "sources": list(self.sources),
        }

    @classmethod
    def from_dict(cls, raw: Mapping) -> "Signal":
        sid = SignalId(str(raw["id"]))
        cat = raw.get("category")
        category = SignalCategory(str(cat)) if cat else category_of(sid)
        return cls(
            id=sid,
            category=category,
            value=float(raw.get("value", 0.0)),
            confidence=float(raw.get("confidence", 0.0)),
            sources=tuple(raw.get("sources") or ("external",)),
        )


# ---- output ----
@dataclass
class Issue:
    severity: Severity
    code: IssueCode
    message: str
    test_type: Optional[str] = None

    def to_dict(self) -> dict:
        out = {"severity": self.severity, "code": self.code.value, "message": self.message}
        if self.test_type is not None:
            out["testType"] = self.test_type
        return out

@dataclass
class ProcessedTest:
    test_type: str
    test_version: str
    questions_answered: int
    total_questions: int
    is_complete: bool
    raw_scores: Dict[str, float]

    def to_dict(self) -> dict:
        return {
            "testType": self.test_type,
            "testVersion": self.test_version,
            "questionsAnswered": self.questions_answered,
            "totalQuestions": self.total_questions,
            "isComplete": self.is_complete,
            "rawScores": dict(self.raw_scores),
        }

@dataclass
class AnalysisMetadata:
    analysis_id: str
    session_id: str
    analyzed_at: str
    engine_version: str
    tests_processed: List[ProcessedTest] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "analysisId": self.analysis_id,
            "sessionId": self.session_id,
            "analyzedAt": self.analyzed_at,
            "engineVersion": self.engine_version,
            "testsProcessed": [t.to_dict() for t in self.tests_processed],
        }

@dataclass
class SignalGroup:
    category: SignalCategory
    signals: List[Signal]
    average_confidence: float

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "signals": [s.to_dict() for s in self.signals],
            "averageConfidence": self.average_confidence,
        }

@dataclass
class AnalysisOutput:
    status: AnalysisStatus
    metadata: AnalysisMetadata
    signals: List[Signal] = field(default_factory=list)
    signal_groups: List[SignalGroup] = field(default_factory=list)
    overall_confidence: float = 0.0
    issues: List[Issue] = field(default_factory=list)

    def to_dict(self) -> dict:
        out = {
            "status": self.status,
            "metadata": self.metadata.to_dict(),
            "signals": [s.to_dict() for s in self.signals],
            "signalGroups": [g.to_dict() for g in self.signal_groups],
            "overallConfidence": self.overall_confidence,
        }
        if self.issues:
            out["issues"] = [i.to_dict() for i in self.issues]
        return out


@dataclass
class AnalysisContext:
    purpose: Optional[str] = None
    locale: Optional[str] = None

@dataclass
class AnalysisInput:
    session_id: str
    test_results: List[TestResult]
    context: AnalysisContext = field(default_factory=AnalysisContext)
