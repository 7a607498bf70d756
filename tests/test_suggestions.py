"""Tests for greetings and follow-up suggestions (core/suggestions.py)."""

from core.suggestions import (
    MAX_SUGGESTIONS,
    SWITCH_TO_ARABIC,
    SWITCH_TO_ENGLISH,
    contextual_suggestions,
    language_switch_notice,
    personalized_greeting,
    starter_suggestions,
    welcome_greetings,
)


class TestPersonalizedGreeting:
    def test_unknown_session_gets_generic_welcome(self, store):
        assert personalized_greeting(store, "new", "en") == "Welcome to your AI travel assistant!"
        assert personalized_greeting(store, "new", "ar") == "مرحباً بك في مساعد السفر الذكي!"
        assert "new" not in store, "greeting must not create a session"

    def test_session_without_turns_gets_generic_welcome(self, store):
        store.update_personal_preferences("s1", {"name": "Sara"})
        assert personalized_greeting(store, "s1", "en") == "Welcome to your AI travel assistant!"

    def test_returning_user_with_name(self, store):
        store.add_interaction("s1", "hi", "", "en")
        store.update_personal_preferences("s1", {"name": "Sara"})
        greeting = personalized_greeting(store, "s1", "en")
        assert greeting == "Welcome back Sara! How can I help you today?"

    def test_title_is_prefixed(self, store):
        store.add_interaction("s1", "hi", "", "en")
        store.update_personal_preferences("s1", {"name": "Khalid", "title": "Dr."})
        assert "Dr. Khalid" in personalized_greeting(store, "s1", "en")
        assert "Dr. Khalid" in personalized_greeting(store, "s1", "ar")

    def test_returning_user_without_name(self, store):
        store.add_interaction("s1", "hi", "", "en")
        assert personalized_greeting(store, "s1", "en") == "Welcome back!"
        assert personalized_greeting(store, "s1", "ar") == "أهلاً بك مرة أخرى!"


class TestContextualSuggestions:
    def test_unknown_session(self, store):
        assert contextual_suggestions(store, "ghost", "en") == []

    def test_no_signals(self, store):
        store.add_interaction("s1", "hello", "", "en")
        assert contextual_suggestions(store, "s1", "en") == []

    def test_hotel_keyword(self, store):
        store.add_interaction("s1", "I need a hotel", "", "en")
        assert contextual_suggestions(store, "s1", "en") == ["Recommend family-friendly hotels"]

    def test_arabic_hotel_keyword(self, store):
        store.add_interaction("s1", "أريد فندق", "", "ar")
        assert contextual_suggestions(store, "s1", "ar") == ["أوصني بفنادق مناسبة للعائلات"]

    def test_all_signals_in_order(self, store):
        store.add_interaction("s1", "hotel", "", "en")
        store.update_personal_preferences("s1", {"interests": ["culture"], "frequent_destinations": ["Jeddah", "Dubai"]})
        found = contextual_suggestions(store, "s1", "en")
        assert found == [
            "Recommend family-friendly hotels",
            "Show me cultural sites",
            "What's new in Jeddah?",
        ]
        assert len(found) <= MAX_SUGGESTIONS

    def test_localized_destination_prompt(self, store):
        store.update_personal_preferences("s1", {"frequent_destinations": ["الرياض"]})
        assert contextual_suggestions(store, "s1", "ar") == ["ما الجديد في الرياض؟"]


class TestCannedLines:
    def test_starter_suggestions(self):
        assert len(starter_suggestions("en")) == 5
        assert len(starter_suggestions("ar")) == 5
        assert starter_suggestions("xx") == starter_suggestions("en")

    def test_welcome_greetings(self):
        assert welcome_greetings("ar")[0] == "السلام عليكم ورحمة الله وبركاته"
        assert len(welcome_greetings("en")) == 4

    def test_returned_lists_are_fresh(self):
        lines = starter_suggestions("en")
        lines.clear()
        assert starter_suggestions("en")

    def test_language_switch_notice(self):
        assert language_switch_notice("en", "ar") == SWITCH_TO_ARABIC
        assert language_switch_notice("ar-SA", "en") == SWITCH_TO_ENGLISH
        assert language_switch_notice("en", "en") == ""
