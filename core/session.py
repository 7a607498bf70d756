"""
core/session.py

Per-session conversation memory records and their JSON-safe serialization.
- ConversationMemory: everything remembered about one session
- TravelInteraction: one immutable user/assistant turn
- PersonalPreferences: explicit traveler profile (updated only on request)
- ConversationContext: live classification state refreshed every turn
- memory_to_dict / memory_from_dict: persistence layout (timestamps as ISO-8601)
- merge_fields: permissive shallow merge of a mapping over a record
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from enum import Enum

from core.calendar import CulturalPreferences
from core.locale import normalize_locale
from util.dates import parse_iso, to_iso, utcnow


logger = logging.getLogger(__name__)


class Mood(str, Enum):
    EXCITED = "excited"
    CURIOUS = "curious"
    CONCERNED = "concerned"
    NEUTRAL = "neutral"
    FRUSTRATED = "frustrated"


class ConversationFlow(str, Enum):
    GREETING = "greeting"
    INFORMATION_GATHERING = "information-gathering"
    RECOMMENDATION = "recommendation"
    BOOKING = "booking"
    FOLLOW_UP = "follow-up"


class TravelType(str, Enum):
    FAMILY = "family"
    RELIGIOUS = "religious"
    CULTURAL = "cultural"
    BUSINESS = "business"
    LEISURE = "leisure"


class CulturalSensitivity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class InteractionPreferences:
    budget: str | None = None
    duration: str | None = None
    group_size: int | None = None
    interests: list[str] | None = None


@dataclass(frozen=True)
class TravelInteraction:
    id: str
    timestamp: datetime
    user_message: str
    ai_response: str
    language: str
    travel_type: TravelType = TravelType.LEISURE
    destinations: list[str] = field(default_factory=list)
    preferences: InteractionPreferences = field(default_factory=InteractionPreferences)
    recommended_packages: list[str] | None = None
    follow_up_questions: list[str] | None = None


@dataclass
class LanguageLevel:
    arabic: str = "none"   # native | fluent | intermediate | basic | none
    english: str = "none"


@dataclass
class SeasonalPreferences:
    preferred: list[str] = field(default_factory=list)
    avoided: list[str] = field(default_factory=list)


@dataclass
class AccommodationPreferences:
    type: str = "hotel"  # hotel | apartment | traditional | mixed
    amenities: list[str] = field(default_factory=list)
    location: str = "city-center"  # city-center | suburban | rural | mixed


@dataclass
class PersonalPreferences:
    name: str | None = None
    title: str | None = None  # Mr., Mrs., Dr., ...
    preferred_greeting: str | None = None
    travel_style: str = "mid-range"  # luxury | mid-range | budget | mixed
    group_type: str = "family"  # solo | couple | family | friends | business
    interests: list[str] = field(default_factory=list)
    dietary_restrictions: list[str] = field(default_factory=list)
    mobility_requirements: list[str] | None = None
    language_level: LanguageLevel = field(default_factory=LanguageLevel)
    frequent_destinations: list[str] = field(default_factory=list)
    avoided_destinations: list[str] = field(default_factory=list)
    seasonal_preferences: SeasonalPreferences = field(default_factory=SeasonalPreferences)
    accommodation_preferences: AccommodationPreferences = field(default_factory=AccommodationPreferences)


@dataclass
class ConversationContext:
    current_topic: str = ""
    previous_topics: list[str] = field(default_factory=list)
    pending_questions: list[str] = field(default_factory=list)
    user_mood: Mood = Mood.NEUTRAL
    conversation_flow: ConversationFlow = ConversationFlow.GREETING
    cultural_sensitivity: CulturalSensitivity = CulturalSensitivity.HIGH
    needs_translation: bool = False
    has_language_mixed: bool = False
    recent_keywords: list[str] = field(default_factory=list)
    contextual_hints: list[str] = field(default_factory=list)


@dataclass
class ConversationMemory:
    session_id: str
    preferred_language: str
    cultural_preferences: CulturalPreferences
    personal_preferences: PersonalPreferences
    conversation_context: ConversationContext = field(default_factory=ConversationContext)
    travel_history: list[TravelInteraction] = field(default_factory=list)
    last_interaction: datetime = field(default_factory=utcnow)
    total_interactions: int = 0


def default_personal_preferences(locale) -> PersonalPreferences:
    loc = normalize_locale(locale)
    return PersonalPreferences(
        language_level=LanguageLevel(
            arabic="native" if loc == "ar" else "none",
            english="native" if loc == "en" else "basic",
        ),
    )


# Enum-typed fields are coerced from their string values on merge/load.
_ENUM_FIELDS = {
    "user_mood": Mood,
    "conversation_flow": ConversationFlow,
    "cultural_sensitivity": CulturalSensitivity,
    "travel_type": TravelType,
}


# Nested records arrive as plain dicts from JSON and HTTP bodies.
_NESTED_FIELDS = {
    "language_level": LanguageLevel,
    "seasonal_preferences": SeasonalPreferences,
    "accommodation_preferences": AccommodationPreferences,
    "preferences": InteractionPreferences,
    "cultural_preferences": CulturalPreferences,
    "conversation_context": ConversationContext,
}


# Returned by _coerce for values that must not reach the record.
_DROP = object()


def _coerce(name, value):
    nested_cls = _NESTED_FIELDS.get(name)
    if nested_cls is not None and isinstance(value, dict):
        return _pick(nested_cls, value)
    enum_cls = _ENUM_FIELDS.get(name)
    if enum_cls is not None and not isinstance(value, enum_cls):
        try:
            return enum_cls(value)
        except ValueError:
            logger.warning("Dropping unrecognized %s value %r", name, value)
            return _DROP
    return value


def merge_fields(record, partial):
    """Return a copy of `record` with known keys of `partial` merged over it.

    Shallow: nested records are replaced wholesale. Unknown keys and values
    outside a closed enum are dropped and logged; other values are not validated.
    """
    if not partial:
        return replace(record)
    known = {f.name for f in fields(record)}
    updates = {}
    for key, value in dict(partial).items():
        if key not in known:
            logger.warning("Ignoring unknown %s field %r", type(record).__name__, key)
            continue
        coerced = _coerce(key, value)
        if coerced is not _DROP:
            updates[key] = coerced
    return replace(record, **updates)


def _plain(value):
    if hasattr(value, "__dataclass_fields__"):
        return _record_to_dict(value)
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def _record_to_dict(record):
    return {f.name: _plain(getattr(record, f.name)) for f in fields(record)}


def _pick(cls, data):
    """Build `cls` from the keys of `data` it knows about; dropped values keep their defaults."""
    known = {f.name for f in fields(cls)}
    picked = {k: _coerce(k, v) for k, v in (data or {}).items() if k in known}
    return cls(**{k: v for k, v in picked.items() if v is not _DROP})


def interaction_to_dict(interaction: TravelInteraction) -> dict:
    return _record_to_dict(interaction)


def interaction_from_dict(data) -> TravelInteraction:
    raw = dict(data)
    raw["timestamp"] = parse_iso(raw["timestamp"])
    return _pick(TravelInteraction, raw)


def memory_to_dict(memory: ConversationMemory) -> dict:
    return _record_to_dict(memory)


def memory_from_dict(data) -> ConversationMemory:
    return ConversationMemory(
        session_id=data["session_id"],
        preferred_language=normalize_locale(data.get("preferred_language")),
        cultural_preferences=_pick(CulturalPreferences, data.get("cultural_preferences")),
        personal_preferences=_pick(PersonalPreferences, data.get("personal_preferences")),
        conversation_context=_pick(ConversationContext, data.get("conversation_context")),
        travel_history=[interaction_from_dict(i) for i in data.get("travel_history", [])],
        last_interaction=parse_iso(data["last_interaction"]),
        total_interactions=int(data.get("total_interactions", 0)),
    )
