from __future__ import annotations
import json
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional
from .types import Dimension, Question, QuestionDimension, TestDefinition

DATA_DIR = Path(__file__).with_name("data")
INSTRUMENTS: tuple[str, ...] = ("disc", "holland")


def build_definition(raw: dict) -> TestDefinition:
    dims = tuple(Dimension(**d) for d in raw["dimensions"])
    questions = tuple(
        Question(
            id=q["id"],
            text=q.get("text", ""),
            dimensions=tuple(
                QuestionDimension(
                    dimension_id=qd["dimension_id"],
                    weights=MappingProxyType({str(k): float(v) for k, v in qd["weights"].items()}),
                )
                for qd in q["dimensions"]
            ),
        )
        for q in raw["questions"]
    )
    return TestDefinition(
        type=raw["type"],
        version=str(raw["version"]),
        dimensions=dims,
        questions=questions,
        minimum_questions=int(raw["minimum_questions"]),
    )


def load_definition(name: str) -> TestDefinition:
    raw = json.loads((DATA_DIR / f"{name}.json").read_text(encoding="utf-8"))
    return build_definition(raw)


# read once at import; shared read-only by every call
TEST_DEFINITIONS: Mapping[str, TestDefinition] = MappingProxyType(
    {name: load_definition(name) for name in INSTRUMENTS}
)
DiscTest = TEST_DEFINITIONS["disc"]
HollandTest = TEST_DEFINITIONS["holland"]


def get_test_definition(test_type: str) -> Optional[TestDefinition]:
    return TEST_DEFINITIONS.get(test_type)
