"""Persian display text for signals: names, value-band descriptions, icons
and colours.  Icon names are lucide identifiers."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Literal, Mapping, NamedTuple

from .normalizer import percent
from .types import Signal
from .vocabulary import ALL_CATEGORIES, SignalCategory, SignalId, require_complete

S = SignalId
C = SignalCategory

Band = Literal["strong_negative", "negative", "neutral", "positive", "strong_positive"]

NEUTRAL_COLOR = "#6b7280"
POSITIVE_COLOR = "#2563eb"
NEGATIVE_COLOR = "#059669"


class SignalText(NamedTuple):
    name: str
    icon: str
    strong_negative: str
    negative: str
    neutral: str
    positive: str
    strong_positive: str


@dataclass(frozen=True)
class SignalDescription:
    id: SignalId
    category_name: str
    name: str
    short_description: str
    full_description: str
    icon: str
    color: str

    def to_dict(self) -> dict:
        return {
            "id": self.id.value,
            "categoryName": self.category_name,
            "name": self.name,
            "shortDescription": self.short_description,
            "fullDescription": self.full_description,
            "icon": self.icon,
            "color": self.color,
        }


CATEGORY_NAMES: Mapping[SignalCategory, str] = MappingProxyType({
    C.WORK_STYLE: "سبک کار",
    C.COLLABORATION: "همکاری",
    C.DECISION_MAKING: "تصمیم‌گیری",
    C.MOTIVATION: "انگیزه",
    C.ENVIRONMENT: "محیط کار",
    C.GROWTH: "رشد و توسعه",
})
require_complete(CATEGORY_NAMES, "CATEGORY_NAMES", keys=ALL_CATEGORIES)

CATEGORY_ICONS: Mapping[SignalCategory, str] = MappingProxyType({
    C.WORK_STYLE: "Briefcase",
    C.COLLABORATION: "Users",
    C.DECISION_MAKING: "GitBranch",
    C.MOTIVATION: "Target",
    C.ENVIRONMENT: "Building2",
    C.GROWTH: "TrendingUp",
})
require_complete(CATEGORY_ICONS, "CATEGORY_ICONS", keys=ALL_CATEGORIES)

SIGNAL_DESCRIPTIONS: Mapping[SignalId, SignalText] = MappingProxyType({
    S.STRUCTURE_PREFERENCE: SignalText(
        "ساختارپذیری", "LayoutGrid",
        "ترجیح قوی برای انعطاف‌پذیری و خلاقیت",
        "راحتی با محیط‌های غیررسمی و انعطاف‌پذیر",
        "تعادل بین ساختار و انعطاف",
        "ترجیح برای فرآیندها و قوانین مشخص",
        "نیاز قوی به ساختار و نظم",
    ),
    S.PACE_PREFERENCE: SignalText(
        "ریتم کار", "Gauge",
        "ترجیح قوی برای محیط آرام و متعادل",
        "راحتی با ریتم کاری ثابت و قابل پیش‌بینی",
        "انعطاف در ریتم کاری",
        "رشد در محیط‌های پویا و پرسرعت",
        "شکوفایی در محیط‌های بسیار پرسرعت",
    ),
    S.DETAIL_ORIENTATION: SignalText(
        "جزئی‌نگری", "Search",
        "تمرکز قوی بر تصویر بزرگ و استراتژی",
        "ترجیح دید کلی بر جزئیات",
        "تعادل بین جزئیات و کلیات",
        "توجه خوب به جزئیات",
        "دقت بسیار بالا در جزئیات",
    ),
    S.TASK_APPROACH: SignalText(
        "رویکرد به وظایف", "ListTodo",
        "توانایی قوی در چندوظیفه‌ای",
        "راحتی با انجام چند کار همزمان",
        "انعطاف در مدیریت وظایف",
        "ترجیح تمرکز بر یک کار",
        "تمرکز عمیق روی یک وظیفه",
    ),
    S.COLLABORATION_STYLE: SignalText(
        "سبک همکاری", "Users",
        "بهترین عملکرد در کار فردی",
        "ترجیح کار مستقل",
        "انعطاف در کار تیمی و فردی",
        "رشد در محیط تیمی",
        "شکوفایی در کار گروهی",
    ),
    S.COMMUNICATION_STYLE: SignalText(
        "سبک ارتباطی", "MessageCircle",
        "ارتباط بسیار دیپلماتیک و ملایم",
        "ترجیح ارتباط غیرمستقیم و محتاطانه",
        "تعادل در سبک ارتباطی",
        "ارتباط صریح و مستقیم",
        "ارتباط بسیار رک و بی‌پرده",
    ),
    S.CONFLICT_APPROACH: SignalText(
        "مدیریت تعارض", "Scale",
        "اولویت قوی برای حفظ هماهنگی",
        "ترجیح اجتناب از تعارض",
        "تعادل در مواجهه با تعارض",
        "آمادگی برای مواجهه مستقیم",
        "پذیرش و حل فعال تعارض",
    ),
    S.LEADERSHIP_TENDENCY: SignalText(
        "گرایش رهبری", "Crown",
        "ترجیح قوی برای نقش پشتیبانی",
        "راحتی در نقش‌های حمایتی",
        "انعطاف بین رهبری و پشتیبانی",
        "تمایل به هدایت و رهبری",
        "رهبری طبیعی و قوی",
    ),
    S.DECISION_STYLE: SignalText(
        "سبک تصمیم‌گیری", "GitBranch",
        "تصمیم‌گیری بسیار شهودی",
        "اتکا به تجربه و احساس",
        "ترکیب تحلیل و شهود",
        "رویکرد تحلیلی به تصمیم‌گیری",
        "تصمیم‌گیری کاملاً داده‌محور",
    ),
    S.RISK_TOLERANCE: SignalText(
        "ریسک‌پذیری", "Rocket",
        "رویکرد بسیار محتاطانه",
        "ترجیح ایمنی و ثبات",
        "تعادل در ریسک‌پذیری",
        "راحتی با عدم قطعیت",
        "استقبال از چالش و ریسک",
    ),
    S.CHANGE_ADAPTABILITY: SignalText(
        "انطباق با تغییر", "RefreshCcw",
        "ترجیح قوی برای ثبات",
        "نیاز به زمان برای تطبیق",
        "انعطاف در مواجهه با تغییر",
        "استقبال از تغییرات",
        "شکوفایی در محیط‌های متغیر",
    ),
    S.ACHIEVEMENT_DRIVE: SignalText(
        "انگیزه موفقیت", "Target",
        "تمرکز قوی بر فرآیند و تجربه",
        "ارزش‌گذاری بر مسیر",
        "تعادل بین نتیجه و فرآیند",
        "تمرکز بر دستاوردها",
        "هدف‌محوری بسیار قوی",
    ),
    S.RECOGNITION_NEED: SignalText(
        "نیاز به قدردانی", "Award",
        "ترجیح قوی برای قدردانی خصوصی",
        "راحتی بدون توجه عمومی",
        "انعطاف در نوع قدردانی",
        "انگیزه از تقدیر عمومی",
        "نیاز قوی به شناخته شدن",
    ),
    S.AUTONOMY_NEED: SignalText(
        "نیاز به استقلال", "Compass",
        "ترجیح قوی برای راهنمایی",
        "راحتی با هدایت و ساختار",
        "تعادل بین استقلال و راهنمایی",
        "ترجیح آزادی عمل",
        "نیاز قوی به استقلال کامل",
    ),
    S.SOCIAL_ENERGY: SignalText(
        "انرژی اجتماعی", "Zap",
        "شارژ قوی از تنهایی",
        "ترجیح محیط‌های آرام",
        "تعادل اجتماعی",
        "انرژی از تعامل اجتماعی",
        "شکوفایی در جمع",
    ),
    S.NOISE_TOLERANCE: SignalText(
        "تحمل محیط", "Volume2",
        "نیاز قوی به سکوت",
        "ترجیح محیط آرام",
        "انعطاف در محیط کاری",
        "راحتی با محیط شلوغ",
        "رشد در محیط‌های پویا و پرانرژی",
    ),
    S.ROUTINE_PREFERENCE: SignalText(
        "ترجیح روتین", "Calendar",
        "نیاز قوی به تنوع و تجربیات جدید",
        "ترجیح تغییر و تنوع",
        "تعادل بین روتین و تنوع",
        "راحتی با برنامه ثابت",
        "ترجیح قوی برای ثبات و پیش‌بینی‌پذیری",
    ),
})
require_complete(SIGNAL_DESCRIPTIONS, "SIGNAL_DESCRIPTIONS")


def value_band(value: float) -> Band:
    if value <= -0.6:
        return "strong_negative"
    if value <= -0.2:
        return "negative"
    if value < 0.2:
        return "neutral"
    if value < 0.6:
        return "positive"
    return "strong_positive"


def color_for_value(value: float) -> str:
    if abs(value) < 0.2:
        return NEUTRAL_COLOR
    return POSITIVE_COLOR if value > 0 else NEGATIVE_COLOR


def full_description(signal: Signal) -> str:
    base = getattr(SIGNAL_DESCRIPTIONS[signal.id], value_band(signal.value))
    return f"{base} (قوت: {percent(signal.value)}٪، اطمینان: {percent(signal.confidence)}٪)"


def describe_signal(signal: Signal) -> SignalDescription:
    text = SIGNAL_DESCRIPTIONS[signal.id]
    return SignalDescription(
        id=signal.id,
        category_name=CATEGORY_NAMES[signal.category],
        name=text.name,
        short_description=getattr(text, value_band(signal.value)),
        full_description=full_description(signal),
        icon=text.icon or CATEGORY_ICONS[signal.category],
        color=color_for_value(signal.value),
    )


def describe_signals(signals: Iterable[Signal]) -> Dict[SignalCategory, List[SignalDescription]]:
    """Descriptions grouped by category, categories in first-seen order."""

    grouped: Dict[SignalCategory, List[SignalDescription]] = {}
    for sig in signals:
        grouped.setdefault(sig.category, []).append(describe_signal(sig))
    return grouped


def get_category_name(category: SignalCategory | str) -> str:
    return CATEGORY_NAMES[SignalCategory(category)]


def get_all_category_names() -> Dict[str, str]:
    return {cat.value: name for cat, name in CATEGORY_NAMES.items()}
