"""
core/locale.py

Locale handling for the bilingual (English / Arabic) assistant.
- normalize_locale: map any incoming tag onto the closed set, failing closed to 'en'
- Localized: immutable en/ar value pair with English fallback
- contains_arabic: script check used for language detection
"""

import re
from dataclasses import dataclass
from typing import Any


SUPPORTED_LOCALES = ("en", "ar")
DEFAULT_LOCALE = "en"

_ARABIC_RE = re.compile(r"[\u0600-\u06FF]")


def normalize_locale(value) -> str:
    """Return 'en' or 'ar' for tags like 'AR', 'ar-SA', 'en_US'; anything else is 'en'."""
    if not value:
        return DEFAULT_LOCALE
    tag = str(value).strip().lower().replace("_", "-").split("-")[0]
    return tag if tag in SUPPORTED_LOCALES else DEFAULT_LOCALE


def contains_arabic(text: str) -> bool:
    return bool(text) and _ARABIC_RE.search(text) is not None


@dataclass(frozen=True)
class Localized:
    """A bilingual value. Variants may be strings or tuples of strings."""
    en: Any
    ar: Any = None

    def get(self, locale=DEFAULT_LOCALE):
        if normalize_locale(locale) == "ar" and self.ar:
            return self.ar
        return self.en

    def to_dict(self):
        def plain(v):
            return list(v) if isinstance(v, tuple) else v
        return {"en": plain(self.en), "ar": plain(self.ar)}

    @classmethod
    def from_dict(cls, data):
        def frozen(v):
            return tuple(v) if isinstance(v, list) else v
        if isinstance(data, (str, list, tuple)):
            return cls(en=frozen(data))
        return cls(en=frozen(data.get("en")), ar=frozen(data.get("ar")))
