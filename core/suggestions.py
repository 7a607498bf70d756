"""
core/suggestions.py

Greeting and follow-up suggestions derived from a session's memory.
- personalized_greeting: generic welcome, or a "welcome back" using the stored name/title
- contextual_suggestions: up to three follow-up prompts from keywords, interests, destinations
- starter_suggestions / welcome_greetings: canned opening lines per locale
- language_switch_notice: bilingual notice when a session moves between en and ar

Reads only; nothing here mutates the store.
"""

from core.locale import Localized, normalize_locale


MAX_SUGGESTIONS = 3

WELCOME = Localized("Welcome to your AI travel assistant!", "مرحباً بك في مساعد السفر الذكي!")
WELCOME_BACK = Localized("Welcome back!", "أهلاً بك مرة أخرى!")
WELCOME_BACK_NAMED = Localized(
    "Welcome back {who}! How can I help you today?",
    "أهلاً وسهلاً بعودتك {who}! كيف يمكنني مساعدتك اليوم؟",
)

ACCOMMODATION_KEYWORDS = ("hotel", "فندق")
CULTURAL_INTERESTS = ("culture", "ثقافة")

SUGGEST_FAMILY_HOTELS = Localized("Recommend family-friendly hotels", "أوصني بفنادق مناسبة للعائلات")
SUGGEST_CULTURAL_SITES = Localized("Show me cultural sites", "أعرض لي المواقع الثقافية")
SUGGEST_WHATS_NEW = Localized("What's new in {destination}?", "ما الجديد في {destination}؟")

STARTER_SUGGESTIONS = Localized(
    (
        "What are the best family-friendly places in Saudi Arabia?",
        "Show me halal restaurants in Dubai",
        "How is the weather in Mecca this month?",
        "I want a budget trip to Morocco",
        "What are the Hajj requirements for Muslims?",
    ),
    (
        "ما هي أفضل الأماكن للعائلات في السعودية؟",
        "أعرض لي مطاعم حلال في دبي",
        "كيف الطقس في مكة المكرمة هذا الشهر؟",
        "أريد رحلة بميزانية محدودة للمغرب",
        "ما هي متطلبات الحج للمسلمين؟",
    ),
)

WELCOME_GREETINGS = Localized(
    (
        "As-salamu alaykum and welcome!",
        "Ahlan wa sahlan! How can I assist you today?",
        "Welcome to your culturally-aware travel assistant",
        "How may I help you plan your journey?",
    ),
    (
        "السلام عليكم ورحمة الله وبركاته",
        "أهلاً وسهلاً بك",
        "مرحباً بك في مساعد السفر الذكي",
        "كيف يمكنني مساعدتك اليوم؟",
    ),
)

SWITCH_TO_ARABIC = "I will now switch to Arabic. أهلاً وسهلاً، سأتحدث معك بالعربية الآن."
SWITCH_TO_ENGLISH = "سأتحول إلى الإنجليزية الآن. I will now switch to English."


def personalized_greeting(store, session_id, locale):
    loc = normalize_locale(locale)
    memory = store.get_memory(session_id)
    if memory is None:
        return WELCOME.get(loc)

    prefs = memory.personal_preferences
    returning = memory.total_interactions > 0
    if returning and prefs.name:
        who = " ".join(p for p in (prefs.title, prefs.name) if p)
        return WELCOME_BACK_NAMED.get(loc).format(who=who)
    return WELCOME_BACK.get(loc) if returning else WELCOME.get(loc)


def contextual_suggestions(store, session_id, locale):
    loc = normalize_locale(locale)
    memory = store.get_memory(session_id)
    if memory is None:
        return []

    keywords = memory.conversation_context.recent_keywords
    prefs = memory.personal_preferences
    suggestions = []
    if any(k in keywords for k in ACCOMMODATION_KEYWORDS):
        suggestions.append(SUGGEST_FAMILY_HOTELS.get(loc))
    if any(i in prefs.interests for i in CULTURAL_INTERESTS):
        suggestions.append(SUGGEST_CULTURAL_SITES.get(loc))
    if prefs.frequent_destinations:
        suggestions.append(SUGGEST_WHATS_NEW.get(loc).format(destination=prefs.frequent_destinations[0]))
    return suggestions[:MAX_SUGGESTIONS]


def starter_suggestions(locale):
    return list(STARTER_SUGGESTIONS.get(locale))


def welcome_greetings(locale):
    return list(WELCOME_GREETINGS.get(locale))


def language_switch_notice(from_locale, to_locale):
    src, dst = normalize_locale(from_locale), normalize_locale(to_locale)
    if src == "en" and dst == "ar":
        return SWITCH_TO_ARABIC
    if src == "ar" and dst == "en":
        return SWITCH_TO_ENGLISH
    return ""
