from __future__ import annotations
import os, json, pathlib


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


ENGINE_VERSION: str = "1.0.0"

# scoring: inattentive-answer heuristic
FAST_ANSWER_MS: int = 1000
FAST_ANSWER_RATIO: float = 0.30
FAST_ANSWER_PENALTY: float = 0.70

# signal generation
BASE_CONFIDENCE_BOOST: float = 0.30
AGREEMENT_BONUS: float = 0.20

LOW_CONFIDENCE_THRESHOLD: float = 0.50

# job matching
MATCH_TIERS: tuple[tuple[float, int], ...] = ((0.2, 100), (0.5, 70), (1.0, 40))
MATCH_FLOOR: int = 20
CONFIDENCE_MULTIPLIERS: tuple[tuple[float, float], ...] = ((0.7, 1.0), (0.4, 0.8))
CONFIDENCE_MULTIPLIER_FLOOR: float = 0.6
STRENGTH_SCORE_MIN: int = 70
FRICTION_SCORE_MAX: int = 40
STRENGTH_REASONS_MAX: int = 3
FRICTION_REASONS_MAX: int = 2

# job weight map
DEFAULT_SIGNAL_WEIGHT: float = 0.3
HIGH_PRIORITY_WEIGHT: float = 0.6

# profile adapter
INSIGHT_MIN_ABS: float = 0.3
INSIGHT_LIMIT: int = 8
INSIGHT_NOTABLE_STRENGTH: int = 50
DISPLAY_MIN_CONFIDENCE: float = 0.5
DISPLAY_MIN_ABS: float = 0.2
TRAIT_MIN_ABS: float = 0.4
TRAIT_LIMIT: int = 4
MODE_THRESHOLD: float = 0.3

DEBUG_TRACE: bool = False
TRACE_FIELDS: tuple[str, ...] = (
    "signal",
    "sources",
    "value",
    "confidence",
    "agreement",
)

API_ALLOWED_ORIGINS: tuple[str, ...] = ("http://localhost:3000",)

# env overrides for staging/ops
FAST_ANSWER_MS = _env_int("FAST_ANSWER_MS", FAST_ANSWER_MS)
FAST_ANSWER_RATIO = _env_float("FAST_ANSWER_RATIO", FAST_ANSWER_RATIO)
FAST_ANSWER_PENALTY = _env_float("FAST_ANSWER_PENALTY", FAST_ANSWER_PENALTY)
BASE_CONFIDENCE_BOOST = _env_float("BASE_CONFIDENCE_BOOST", BASE_CONFIDENCE_BOOST)
AGREEMENT_BONUS = _env_float("AGREEMENT_BONUS", AGREEMENT_BONUS)
LOW_CONFIDENCE_THRESHOLD = _env_float("LOW_CONFIDENCE_THRESHOLD", LOW_CONFIDENCE_THRESHOLD)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", DEBUG_TRACE)
API_ALLOWED_ORIGINS = _env_list("API_ALLOWED_ORIGINS", API_ALLOWED_ORIGINS)


def load_config(path: str = "config.json") -> dict:
    cfg: dict = {}
    p = pathlib.Path(path)
    if p.exists():
        try:
            cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            cfg = {}
    e = os.environ
    if e.get("DEFAULT_PURPOSE"): cfg["DEFAULT_PURPOSE"] = e.get("DEFAULT_PURPOSE")
    if e.get("DEFAULT_LOCALE"): cfg["DEFAULT_LOCALE"] = e.get("DEFAULT_LOCALE")
    if e.get("LOG_LEVEL"): cfg["LOG_LEVEL"] = e.get("LOG_LEVEL")
    return cfg
