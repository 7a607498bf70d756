"""
core/memory.py

MemoryStore: owns every session's ConversationMemory.

Lifecycle:
- __init__ loads the whole session table from the backend (failures -> empty store, logged)
- every mutating call writes the whole table back (failures logged, in-memory state kept)

Records never leave the store by reference: reads return deep copies and
imports store a deep copy. There is no locking; drive each session from one
conversation thread at a time.

Environment:
- MEMORY_MAX_HISTORY: interactions kept per session (default 50)
"""

from __future__ import annotations

import copy
import logging
import os
import uuid
from datetime import timedelta

from core.calendar import default_cultural_preferences
from core.locale import normalize_locale
from core.router import (
    detect_flow,
    detect_mood,
    detect_script_language,
    extract_keywords,
    extract_topic,
)
from core.session import (
    ConversationContext,
    ConversationFlow,
    ConversationMemory,
    Mood,
    TravelInteraction,
    default_personal_preferences,
    memory_from_dict,
    memory_to_dict,
    merge_fields,
)
from core.storage import default_backend
from util.dates import utcnow


logger = logging.getLogger(__name__)


def _env_max_history():
    try:
        return max(1, int(os.getenv("MEMORY_MAX_HISTORY", "50")))
    except ValueError:
        return 50


MAX_HISTORY = _env_max_history()
MAX_RECENT_KEYWORDS = 10
MAX_PREVIOUS_TOPICS = 10


def _apply_caps(ctx):
    """Trim the rolling context lists, oldest entries first."""
    ctx.recent_keywords = list(ctx.recent_keywords)[-MAX_RECENT_KEYWORDS:]
    ctx.previous_topics = list(ctx.previous_topics)[-MAX_PREVIOUS_TOPICS:]


class MemoryStore:
    def __init__(self, backend=None, max_history=None, clock=utcnow):
        self.backend = backend if backend is not None else default_backend()
        self.max_history = MAX_HISTORY if max_history is None else max(1, int(max_history))
        self._clock = clock
        self._sessions: dict[str, ConversationMemory] = {}
        self._load()

    def __contains__(self, session_id):
        return session_id in self._sessions

    def __len__(self):
        return len(self._sessions)

    # persistence

    def _load(self):
        try:
            table = self.backend.load()
            if not table:
                return
            self._sessions = {sid: memory_from_dict(raw) for sid, raw in table.items()}
            logger.info("Loaded %d conversation sessions from %r", len(self._sessions), self.backend)
        except Exception:
            logger.exception("Failed to load conversation memory from %r; starting empty", self.backend)
            self._sessions = {}

    def _save(self):
        try:
            table = {sid: memory_to_dict(m) for sid, m in self._sessions.items()}
            self.backend.save(table)
        except Exception:
            logger.exception("Failed to save conversation memory to %r", self.backend)

    # sessions

    def _get_or_create(self, session_id, locale):
        memory = self._sessions.get(session_id)
        if memory is None:
            loc = normalize_locale(locale)
            memory = ConversationMemory(
                session_id=session_id,
                preferred_language=loc,
                cultural_preferences=default_cultural_preferences(loc),
                personal_preferences=default_personal_preferences(loc),
                conversation_context=ConversationContext(),
                last_interaction=self._clock(),
            )
            self._sessions[session_id] = memory
            logger.debug("Created conversation memory for session %s (%s)", session_id, loc)
            self._save()
        return memory

    def get_or_create_memory(self, session_id, locale="en") -> ConversationMemory:
        """Return the session's memory, creating it with `locale` defaults if needed.

        An existing session is never reset, whatever `locale` is passed.
        """
        return copy.deepcopy(self._get_or_create(session_id, locale))

    def get_memory(self, session_id) -> ConversationMemory | None:
        memory = self._sessions.get(session_id)
        return copy.deepcopy(memory) if memory is not None else None

    def session_ids(self):
        return list(self._sessions)

    # turns

    def add_interaction(self, session_id, user_message, ai_response, language, extra=None) -> TravelInteraction:
        """Record one turn and refresh the session's conversation context.

        `extra` fields are merged over the computed defaults without validation.
        """
        lang = normalize_locale(language)
        memory = self._get_or_create(session_id, lang)
        now = self._clock()

        interaction = TravelInteraction(
            id=uuid.uuid4().hex,
            timestamp=now,
            user_message=user_message,
            ai_response=ai_response,
            language=lang,
        )
        if extra:
            interaction = merge_fields(interaction, extra)

        memory.travel_history.append(interaction)
        memory.total_interactions += 1
        memory.last_interaction = now
        if len(memory.travel_history) > self.max_history:
            memory.travel_history = memory.travel_history[-self.max_history:]

        self._update_context(memory, user_message, lang)
        self._save()
        return copy.deepcopy(interaction)

    def _update_context(self, memory, message, language):
        ctx = memory.conversation_context

        if memory.preferred_language != language:
            memory.preferred_language = language
            ctx.has_language_mixed = True
        ctx.needs_translation = bool(message) and detect_script_language(message) != language

        # Re-mentioned keywords keep their first-seen position.
        keywords = extract_keywords(message, language)
        ctx.recent_keywords = ctx.recent_keywords + [k for k in keywords if k not in ctx.recent_keywords]

        ctx.conversation_flow = ConversationFlow(detect_flow(message, language))
        ctx.user_mood = Mood(detect_mood(message, language))

        if ctx.current_topic:
            ctx.previous_topics.append(ctx.current_topic)
        ctx.current_topic = extract_topic(message, language)
        _apply_caps(ctx)

    def recent_interactions(self, session_id, count=5):
        memory = self._sessions.get(session_id)
        if memory is None or count <= 0:
            return []
        return copy.deepcopy(memory.travel_history[-count:])

    # explicit updates

    def update_personal_preferences(self, session_id, partial, locale="en"):
        memory = self._get_or_create(session_id, locale)
        memory.personal_preferences = merge_fields(memory.personal_preferences, partial)
        self._save()
        return copy.deepcopy(memory.personal_preferences)

    def update_cultural_preferences(self, session_id, partial, locale="en"):
        memory = self._get_or_create(session_id, locale)
        memory.cultural_preferences = merge_fields(memory.cultural_preferences, partial)
        self._save()
        return copy.deepcopy(memory.cultural_preferences)

    def update_conversation_context(self, session_id, partial, locale="en"):
        """Override context fields directly, e.g. a 'curious' or 'frustrated' mood
        supplied by an outside sentiment source."""
        memory = self._get_or_create(session_id, locale)
        memory.conversation_context = merge_fields(memory.conversation_context, partial)
        _apply_caps(memory.conversation_context)
        self._save()
        return copy.deepcopy(memory.conversation_context)

    # lifecycle

    def clear_memory(self, session_id) -> bool:
        removed = self._sessions.pop(session_id, None) is not None
        self._save()
        return removed

    def export_memory(self, session_id) -> ConversationMemory | None:
        return self.get_memory(session_id)

    def import_memory(self, memory):
        """Restore a full record, overwriting any session with the same id.

        Accepts a ConversationMemory or its dict form (as written by memory_to_dict).
        """
        if isinstance(memory, dict):
            memory = memory_from_dict(memory)
        self._sessions[memory.session_id] = copy.deepcopy(memory)
        self._save()
        return memory.session_id

    def expire_sessions(self, max_age: timedelta, now=None):
        """Drop sessions whose last interaction is older than `max_age`; return their ids."""
        cutoff = (now or self._clock()) - max_age
        stale = [sid for sid, m in self._sessions.items() if m.last_interaction < cutoff]
        for sid in stale:
            del self._sessions[sid]
        if stale:
            logger.info("Expired %d stale conversation sessions", len(stale))
            self._save()
        return stale
