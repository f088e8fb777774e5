"""Profile-facing views of a signal vector: insights, a work-style summary,
and the subset of signals worth displaying."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Tuple

from . import config
from .normalizer import percent
from .types import Signal
from .vocabulary import SignalId

S = SignalId

CollaborationMode = Literal["independent", "team_oriented", "balanced"]
DecisionApproach = Literal["analytical", "intuitive", "balanced"]
EnvironmentPreference = Literal["structured", "flexible", "balanced"]


@dataclass(frozen=True)
class ProfileInsight:
    category: str
    title: str
    description: str
    strength: int
    is_notable: bool

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "strength": self.strength,
            "isNotable": self.is_notable,
        }


@dataclass
class WorkStyleSummary:
    primary_traits: List[str] = field(default_factory=list)
    collaboration_mode: CollaborationMode = "balanced"
    decision_approach: DecisionApproach = "balanced"
    environment_preference: EnvironmentPreference = "balanced"

    def to_dict(self) -> dict:
        return {
            "primaryTraits": list(self.primary_traits),
            "collaborationMode": self.collaboration_mode,
            "decisionApproach": self.decision_approach,
            "environmentPreference": self.environment_preference,
        }


# (positive title, positive text), (negative title, negative text)
INSIGHT_TEXT: Mapping[SignalId, Tuple[Tuple[str, str], Tuple[str, str]]] = MappingProxyType({
    S.LEADERSHIP_TENDENCY: (("رهبری طبیعی", "تمایل به هدایت تیم و تصمیم‌گیری"),
                            ("پشتیبانی تیم", "ترجیح نقش حمایتی و همکاری")),
    S.COLLABORATION_STYLE: (("تیم‌محور", "انرژی‌گرفتن از کار گروهی"),
                            ("مستقل", "بهترین عملکرد در کار فردی")),
    S.DECISION_STYLE: (("تحلیل‌گر", "تصمیم‌گیری مبتنی بر داده و منطق"),
                       ("شهودی", "تصمیم‌گیری سریع بر اساس تجربه")),
    S.RISK_TOLERANCE: (("ریسک‌پذیر", "راحتی با عدم قطعیت و چالش"),
                       ("محتاط", "ترجیح رویکرد محافظه‌کارانه")),
    S.STRUCTURE_PREFERENCE: (("ساختارمند", "ترجیح فرآیندها و قوانین مشخص"),
                             ("انعطاف‌پذیر", "سازگاری با تغییرات")),
    S.PACE_PREFERENCE: (("پرسرعت", "رشد در محیط‌های پویا"),
                        ("متعادل", "ترجیح ریتم کاری ثابت")),
    S.ACHIEVEMENT_DRIVE: (("نتیجه‌محور", "تمرکز بر دستیابی به اهداف"),
                          ("فرآیندمحور", "ارزش‌گذاری بر مسیر و تجربه")),
    S.AUTONOMY_NEED: (("استقلال‌طلب", "ترجیح آزادی عمل"),
                      ("راهنمایی‌پذیر", "استقبال از هدایت")),
    S.SOCIAL_ENERGY: (("اجتماعی", "انرژی از تعامل با دیگران"),
                      ("درون‌گرا", "تمرکز در سکوت")),
})

# (positive, negative)
TRAIT_WORDS: Mapping[SignalId, Tuple[str, str]] = MappingProxyType({
    S.LEADERSHIP_TENDENCY: ("رهبر", "پشتیبان"),
    S.COLLABORATION_STYLE: ("تیم‌ساز", "مستقل"),
    S.DECISION_STYLE: ("تحلیل‌گر", "شهودی"),
    S.RISK_TOLERANCE: ("جسور", "محتاط"),
    S.ACHIEVEMENT_DRIVE: ("هدف‌محور", "فرآیندمحور"),
})


def signal_to_insight(signal: Signal) -> Optional[ProfileInsight]:
    text = INSIGHT_TEXT.get(signal.id)
    if text is None:
        return None
    title, desc = text[0] if signal.value > 0 else text[1]
    strength = percent(signal.value)
    return ProfileInsight(
        category=signal.category.value,
        title=title,
        description=desc,
        strength=strength,
        is_notable=strength >= config.INSIGHT_NOTABLE_STRENGTH,
    )


def generate_insights(signals: Iterable[Signal]) -> List[ProfileInsight]:
    """Top insights by strength; neutral-ish signals are skipped."""

    out = []
    for sig in signals:
        if abs(sig.value) < config.INSIGHT_MIN_ABS:
            continue
        insight = signal_to_insight(sig)
        if insight is not None:
            out.append(insight)
    # stable sort keeps input order among equal strengths
    out.sort(key=lambda i: -i.strength)
    return out[: config.INSIGHT_LIMIT]


def signal_to_trait(signal: Signal) -> Optional[str]:
    words = TRAIT_WORDS.get(signal.id)
    if words is None:
        return None
    return words[0] if signal.value > 0 else words[1]


def extract_primary_traits(signals: Iterable[Signal]) -> List[str]:
    strong = [
        s for s in signals
        if abs(s.value) >= config.TRAIT_MIN_ABS and s.confidence >= config.DISPLAY_MIN_CONFIDENCE
    ]
    strong.sort(key=lambda s: -abs(s.value))
    traits = []
    for sig in strong[: config.TRAIT_LIMIT]:
        trait = signal_to_trait(sig)
        if trait:
            traits.append(trait)
    return traits


def _mode(by_id: Dict[SignalId, Signal], sid: SignalId, positive: str, negative: str) -> str:
    sig = by_id.get(sid)
    if sig is None:
        return "balanced"
    if sig.value > config.MODE_THRESHOLD:
        return positive
    if sig.value < -config.MODE_THRESHOLD:
        return negative
    return "balanced"


def generate_work_style_summary(signals: Iterable[Signal]) -> WorkStyleSummary:
    signals = list(signals)
    by_id = {s.id: s for s in signals}
    return WorkStyleSummary(
        primary_traits=extract_primary_traits(signals),
        collaboration_mode=_mode(by_id, S.COLLABORATION_STYLE, "team_oriented", "independent"),
        decision_approach=_mode(by_id, S.DECISION_STYLE, "analytical", "intuitive"),
        environment_preference=_mode(by_id, S.STRUCTURE_PREFERENCE, "structured", "flexible"),
    )


def get_displayable_signals(signals: Iterable[Signal]) -> List[Signal]:
    return [
        s for s in signals
        if s.confidence >= config.DISPLAY_MIN_CONFIDENCE and abs(s.value) >= config.DISPLAY_MIN_ABS
    ]
