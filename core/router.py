"""
core/router.py

Lexical intent classification of a single user message.

Key functions:
- extract_keywords(text, language): travel keywords present in the message, in table order.
- detect_flow(text, language): 'greeting' > 'booking' > default 'recommendation'.
- detect_mood(text, language): 'excited' > 'concerned' > default 'neutral'.
- extract_topic(text, language): first topic group that matches, else 'general'.
- detect_travel_type(text): business/religious/cultural/leisure/family or None.
- extract_destinations(text): coarse region labels mentioned in the message.
- detect_script_language(text): 'ar' when the text contains Arabic script.
- interaction_hints(text): travel_type/destinations extras for a recorded turn.

All tables are plain data keyed by locale so they can be extended without touching
control flow. Unknown languages use the English tables. Nothing here raises.
"""

import re

from core.locale import contains_arabic, normalize_locale


KEYWORDS = {
    "en": (
        "travel", "trip", "tourism", "hotel", "food", "restaurant", "halal", "prayer", "mosque",
        "family", "children", "weather", "price", "budget", "booking", "flight",
    ),
    "ar": (
        "سفر", "رحلة", "سياحة", "فندق", "طعام", "مطعم", "حلال", "صلاة", "مسجد",
        "عائلة", "أطفال", "طقس", "جو", "سعر", "ميزانية", "حجز", "طيران",
    ),
}

GREETING_HINTS = {
    "en": (
        "hello", "hi", "greetings", "peace",
        "good morning", "good afternoon", "good evening",
    ),
    "ar": ("مرحبا", "السلام", "أهلا", "مساء", "صباح"),
}

BOOKING_HINTS = {
    "en": ("book", "booking", "reserve", "price", "need", "want"),
    "ar": ("حجز", "احجز", "أريد", "أحتاج", "سعر"),
}

EXCITED_HINTS = {
    "en": ("amazing", "great", "wonderful", "excited", "fantastic"),
    "ar": ("رائع", "ممتاز", "جميل", "مذهل", "متحمس"),
}

CONCERNED_HINTS = {
    "en": ("worried", "concerned", "problem", "difficult", "unsure"),
    "ar": ("قلق", "خوف", "مشكلة", "صعب", "مشكوك"),
}

# Priority order matters: the first group that matches wins.
TOPIC_HINTS = {
    "en": (
        ("accommodation", ("hotel", "stay", "accommodation", "resort")),
        ("food", ("food", "restaurant", "halal", "dining")),
        ("transportation", ("flight", "car", "transport", "ticket")),
        ("activities", ("activities", "visit", "museum", "tourism")),
        ("weather", ("weather", "climate", "hot", "cold")),
        ("budget", ("price", "budget", "cost", "cheap")),
    ),
    "ar": (
        ("accommodation", ("فندق", "إقامة", "مبيت", "منتجع")),
        ("food", ("طعام", "مطعم", "حلال", "أكل")),
        ("transportation", ("طيران", "سيارة", "نقل", "تذكرة")),
        ("activities", ("أنشطة", "زيارة", "متحف", "سياحة")),
        ("weather", ("طقس", "جو", "حر", "برد")),
        ("budget", ("سعر", "ميزانية", "تكلفة", "رخيص")),
    ),
}

DEFAULT_TOPIC = "general"

# Mixed en/ar lists, checked regardless of the declared language.
TRAVEL_TYPE_HINTS = (
    ("business", ("business", "أعمال", "conference", "مؤتمر", "meeting", "اجتماع", "work", "عمل")),
    ("religious", ("hajj", "حج", "umrah", "عمرة", "pilgrimage", "mecca", "مكة", "medina", "المدينة")),
    ("cultural", ("culture", "ثقافة", "museum", "متحف", "art", "فن", "history", "تاريخ")),
    ("leisure", ("vacation", "إجازة", "holiday", "عطلة", "relaxation", "استرخاء", "fun", "متعة")),
    ("family", ("family", "عائلة", "kids", "أطفال", "children", "الأطفال", "family-friendly", "مناسب للعائلات")),
)

DESTINATION_HINTS = (
    ("Saudi Arabia", ("saudi", "السعودية", "riyadh", "الرياض", "jeddah", "جدة", "mecca", "مكة", "medina", "المدينة")),
    ("Gulf Countries", ("dubai", "دبي", "abu dhabi", "أبو ظبي", "qatar", "قطر", "kuwait", "الكويت", "bahrain", "البحرين")),
    ("Middle East", ("egypt", "مصر", "jordan", "الأردن", "lebanon", "لبنان", "turkey", "تركيا", "morocco", "المغرب")),
)


def _table(tables, language):
    return tables.get(normalize_locale(language), tables["en"])


def _matches(low: str, hint: str, language: str) -> bool:
    """Return True if `hint` appears in the lowercased text.

    - Arabic hints are matched as substrings (articles and clitics attach to the word).
    - English single tokens need word boundaries; tokens longer than three
      letters also accept a plural 's' ('hotels'), short ones do not ('his').
    - English multi-word phrases are matched as substrings.
    """
    if language == "ar" or " " in hint:
        return hint in low
    plural = "s?" if len(hint) > 3 else ""
    return re.search(r"\b" + re.escape(hint) + plural + r"\b", low) is not None


def _contains_hint(text: str, hints, language: str) -> bool:
    low = (text or "").lower()
    return any(_matches(low, h, language) for h in hints)


def _contains_any_script(low: str, hints) -> bool:
    """Match a mixed en/ar hint list, choosing the rule per hint by its script."""
    return any(_matches(low, h, "ar" if contains_arabic(h) else "en") for h in hints)


def extract_keywords(text, language):
    lang = normalize_locale(language)
    low = (text or "").lower()
    return [kw for kw in _table(KEYWORDS, lang) if _matches(low, kw, lang)]


def detect_flow(text, language):
    lang = normalize_locale(language)
    if _contains_hint(text, _table(GREETING_HINTS, lang), lang):
        return "greeting"
    if _contains_hint(text, _table(BOOKING_HINTS, lang), lang):
        return "booking"
    return "recommendation"


def detect_mood(text, language):
    lang = normalize_locale(language)
    if _contains_hint(text, _table(EXCITED_HINTS, lang), lang):
        return "excited"
    if _contains_hint(text, _table(CONCERNED_HINTS, lang), lang):
        return "concerned"
    return "neutral"


def extract_topic(text, language):
    lang = normalize_locale(language)
    for topic, hints in _table(TOPIC_HINTS, lang):
        if _contains_hint(text, hints, lang):
            return topic
    return DEFAULT_TOPIC


def detect_travel_type(text):
    low = (text or "").lower()
    for travel_type, hints in TRAVEL_TYPE_HINTS:
        if _contains_any_script(low, hints):
            return travel_type
    return None


def extract_destinations(text):
    low = (text or "").lower()
    return [label for label, hints in DESTINATION_HINTS if _contains_any_script(low, hints)]


def detect_script_language(text):
    return "ar" if contains_arabic(text) else "en"


def interaction_hints(text):
    """Travel type and destinations a chat handler can pass as interaction extras."""
    hints = {"destinations": extract_destinations(text)}
    travel_type = detect_travel_type(text)
    if travel_type:
        hints["travel_type"] = travel_type
    return hints
