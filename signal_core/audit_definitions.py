from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Mapping

from .mappers import DISC_MAP, HOLLAND_MAP, MappingRow
from .question_bank import TEST_DEFINITIONS
from .types import TestDefinition

MAPPER_TABLES: Mapping[str, tuple[MappingRow, ...]] = {"disc": DISC_MAP, "holland": HOLLAND_MAP}


def audit_definition(definition: TestDefinition) -> tuple[dict[str, object], list[str]]:
    name = definition.type
    known = set(definition.dimension_ids)
    per_dim: dict[str, int] = {d: 0 for d in definition.dimension_ids}
    max_score: dict[str, float] = {d: 0.0 for d in definition.dimension_ids}
    warnings: list[str] = []
    seen: set[str] = set()

    for q in definition.questions:
        if q.id in seen:
            warnings.append(f"{name} question {q.id} is duplicated")
        seen.add(q.id)
        for qd in q.dimensions:
            if qd.dimension_id not in known:
                warnings.append(f"{name} question {q.id} references unknown dimension {qd.dimension_id}")
                continue
            negative = [k for k, w in qd.weights.items() if w < 0]
            if negative:
                warnings.append(f"{name} question {q.id} has negative weights for {', '.join(negative)}")
            per_dim[qd.dimension_id] += 1
            max_score[qd.dimension_id] += qd.max_weight

    for dim, count in per_dim.items():
        if count == 0:
            warnings.append(f"{name} dimension {dim} has no questions")
        elif max_score[dim] <= 0:
            warnings.append(f"{name} dimension {dim} cannot score above 0")

    if definition.minimum_questions <= 0:
        warnings.append(f"{name} minimum_questions must be positive")
    if definition.minimum_questions > definition.total_questions:
        warnings.append(
            f"{name} minimum_questions {definition.minimum_questions} exceeds {definition.total_questions} questions"
        )

    for sid, neg, pos in MAPPER_TABLES.get(name, ()):
        for dim in (*neg, *pos):
            if dim not in known:
                warnings.append(f"{name} mapping for {sid.value} uses unknown dimension {dim}")

    coverage = {
        "questions": definition.total_questions,
        "minimum": definition.minimum_questions,
        "per_dimension": per_dim,
        "max_score": max_score,
    }
    return coverage, warnings


def audit_definitions(definitions: Iterable[TestDefinition]) -> dict[str, object]:
    coverage: dict[str, object] = {}
    warnings: list[str] = []
    for definition in definitions:
        cov, warn = audit_definition(definition)
        coverage[definition.type] = cov
        warnings.extend(warn)
    return {"coverage": coverage, "warnings": warnings, "totals": {"instruments": len(coverage)}}


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["coverage"]  # type: ignore[assignment]
    print("=== Test Definitions ===")
    for name in sorted(coverage):
        data = coverage[name]
        print(f"\nInstrument: {name}  questions={data['questions']}  minimum={data['minimum']}")
        per_dim: dict[str, int] = data["per_dimension"]  # type: ignore[assignment]
        max_score: dict[str, float] = data["max_score"]  # type: ignore[assignment]
        for dim in per_dim:
            print(f"  {dim:>3}: {per_dim[dim]:3d} questions, max {max_score[dim]:g}")

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")


def write_summary(summary: dict[str, object], path: Path = Path("/tmp/definition_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(_argv: list[str] | None = None) -> int:
    summary = audit_definitions(TEST_DEFINITIONS.values())
    print_report(summary)
    write_summary(summary)
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
