"""
core/calendar.py

Cultural calendar reference data and date-driven lookups.
- CulturalPreferences: the boolean bias flags seeded per locale
- HOLIDAYS / SEASONS / LOCAL_CUSTOMS / TRAVEL_TERMS / REGIONS: immutable bilingual tables
- active_holidays: holidays within +/- HOLIDAY_WINDOW_DAYS of a date (table order)
- active_season: the single season whose recurring [start, end) window holds a date
- default_cultural_preferences: locale -> baseline preference flags
- current_cultural_context: bundle of the above for a locale and date
- region_insights / region_for_destination: per-region climate, sights and cuisine
- load_holidays: read a re-authored holiday table from JSON

Lunar (Hijri) observances are stored as fixed Gregorian dates for the
reference year below; re-author them yearly, e.g. via load_holidays().

Environment:
- HOLIDAY_WINDOW_DAYS: active-holiday window in days (default 30)
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta

from core.locale import Localized, normalize_locale
from util.dates import as_date, days_apart, utcnow


REFERENCE_YEAR = 2026


def _env_window_days():
    try:
        return int(os.getenv("HOLIDAY_WINDOW_DAYS", "30"))
    except ValueError:
        return 30


HOLIDAY_WINDOW_DAYS = _env_window_days()


class CalendarDataError(ValueError):
    """Raised when an authored calendar table cannot be loaded."""


@dataclass
class CulturalPreferences:
    family_friendly: bool = True
    conservative_dress: bool = True
    ramadan_conscious: bool = True
    hajj_season_aware: bool = True
    gender_separation: bool = False
    alcohol_free: bool = True
    friday_prayers: bool = True

    def to_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class Holiday:
    id: str
    name: Localized
    category: str  # islamic | national | cultural
    date: date
    is_lunar: bool
    significance: Localized
    travel_considerations: Localized
    recommendations: Localized

    def to_dict(self, locale=None):
        if locale:
            return {
                "id": self.id,
                "name": self.name.get(locale),
                "category": self.category,
                "date": self.date.isoformat(),
                "is_lunar": self.is_lunar,
                "significance": self.significance.get(locale),
                "travel_considerations": list(self.travel_considerations.get(locale)),
                "recommendations": list(self.recommendations.get(locale)),
            }
        return {
            "id": self.id,
            "name": self.name.to_dict(),
            "category": self.category,
            "date": self.date.isoformat(),
            "is_lunar": self.is_lunar,
            "significance": self.significance.to_dict(),
            "travel_considerations": self.travel_considerations.to_dict(),
            "recommendations": self.recommendations.to_dict(),
        }


@dataclass(frozen=True)
class Season:
    """A named window that recurs every year.

    start/end are (month, day) pairs; the window is [start, end). When end
    precedes start the window wraps over New Year (e.g. winter).
    """
    id: str
    name: Localized
    description: Localized
    start: tuple[int, int]
    end: tuple[int, int]
    travel_impact: Localized
    recommendations: Localized

    def contains(self, value) -> bool:
        d = as_date(value)
        key = (d.month, d.day)
        if self.start <= self.end:
            return self.start <= key < self.end
        return key >= self.start or key < self.end

    def to_dict(self, locale=None):
        if locale:
            return {
                "id": self.id,
                "name": self.name.get(locale),
                "description": self.description.get(locale),
                "start": "%02d-%02d" % self.start,
                "end": "%02d-%02d" % self.end,
                "travel_impact": self.travel_impact.get(locale),
                "recommendations": list(self.recommendations.get(locale)),
            }
        return {
            "id": self.id,
            "name": self.name.to_dict(),
            "description": self.description.to_dict(),
            "start": "%02d-%02d" % self.start,
            "end": "%02d-%02d" % self.end,
            "travel_impact": self.travel_impact.to_dict(),
            "recommendations": self.recommendations.to_dict(),
        }


@dataclass(frozen=True)
class LocalCustom:
    id: str
    category: str  # dress | behavior | dining | religious | social
    title: Localized
    description: Localized
    importance: str  # critical | important | helpful
    tips: Localized


@dataclass(frozen=True)
class TravelTerm:
    key: str
    arabic: str
    transliteration: str
    english: str
    context: str
    usage: Localized


@dataclass(frozen=True)
class Attraction:
    name: Localized
    type: str  # historical | modern | religious | natural
    cultural_significance: Localized
    visiting_tips: Localized


@dataclass(frozen=True)
class Dish:
    name: Localized
    description: Localized
    is_halal: bool
    recommendations: Localized


@dataclass(frozen=True)
class Region:
    id: str
    name: Localized
    climate: Localized
    best_time: Localized
    attractions: tuple[Attraction, ...]
    local_cuisine: tuple[Dish, ...]
    transportation: Localized
    accommodation: Localized

    def to_dict(self, locale="en"):
        return {
            "id": self.id,
            "name": self.name.get(locale),
            "climate": self.climate.get(locale),
            "best_time": self.best_time.get(locale),
            "attractions": [
                {
                    "name": a.name.get(locale),
                    "type": a.type,
                    "cultural_significance": a.cultural_significance.get(locale),
                    "visiting_tips": list(a.visiting_tips.get(locale)),
                }
                for a in self.attractions
            ],
            "local_cuisine": [
                {
                    "name": d.name.get(locale),
                    "description": d.description.get(locale),
                    "is_halal": d.is_halal,
                    "recommendations": list(d.recommendations.get(locale)),
                }
                for d in self.local_cuisine
            ],
            "transportation": list(self.transportation.get(locale)),
            "accommodation": list(self.accommodation.get(locale)),
        }


HOLIDAYS: tuple[Holiday, ...] = (
    Holiday(
        id="ramadan",
        name=Localized("Ramadan", "رمضان"),
        category="islamic",
        date=date(2026, 2, 18),
        is_lunar=True,
        significance=Localized(
            "Holy month of fasting and spiritual reflection in Islam",
            "الشهر المقدس للصيام والتأمل الروحي في الإسلام",
        ),
        travel_considerations=Localized(
            (
                "Restaurants may be closed during daytime",
                "Reduced business hours",
                "Respectful behavior expected in public",
                "Drinking and eating in public discouraged",
            ),
            (
                "قد تكون المطاعم مغلقة خلال النهار",
                "ساعات عمل مقلصة",
                "سلوك محترم متوقع في الأماكن العامة",
                "تجنب الشرب والأكل في الأماكن العامة",
            ),
        ),
        recommendations=Localized(
            (
                "Experience authentic Iftar meals",
                "Visit night markets and festivals",
                "Enjoy extended evening hours",
                "Participate in charitable activities",
            ),
            (
                "تجربة وجبات إفطار أصيلة",
                "زيارة الأسواق الليلية والمهرجانات",
                "الاستمتاع بساعات المساء الممتدة",
                "المشاركة في الأنشطة الخيرية",
            ),
        ),
    ),
    Holiday(
        id="eid-al-fitr",
        name=Localized("Eid al-Fitr", "عيد الفطر"),
        category="islamic",
        date=date(2026, 3, 20),
        is_lunar=True,
        significance=Localized(
            "Festival marking the end of Ramadan",
            "عيد يحتفل بنهاية شهر رمضان",
        ),
        travel_considerations=Localized(
            (
                "Public holiday of several days",
                "Domestic travel peaks",
                "Family gatherings fill restaurants and malls",
            ),
            (
                "عطلة رسمية لعدة أيام",
                "ذروة السفر الداخلي",
                "التجمعات العائلية تملأ المطاعم والمراكز التجارية",
            ),
        ),
        recommendations=Localized(
            (
                "Book flights and hotels early",
                "Enjoy Eid festivals and fireworks",
                "Try traditional Eid sweets",
            ),
            (
                "احجز الطيران والفنادق مبكراً",
                "استمتع بمهرجانات العيد والألعاب النارية",
                "جرب حلويات العيد التقليدية",
            ),
        ),
    ),
    Holiday(
        id="hajj",
        name=Localized("Hajj Season", "موسم الحج"),
        category="islamic",
        date=date(2026, 5, 25),
        is_lunar=True,
        significance=Localized(
            "Annual Islamic pilgrimage to Mecca",
            "الحج الإسلامي السنوي إلى مكة المكرمة",
        ),
        travel_considerations=Localized(
            (
                "Mecca and Medina extremely crowded",
                "Accommodation prices surge",
                "Transportation heavily booked",
                "Increased security measures",
            ),
            (
                "مكة المكرمة والمدينة المنورة مكتظة جداً",
                "ارتفاع أسعار الإقامة",
                "حجوزات النقل مكتظة",
                "إجراءات أمنية مشددة",
            ),
        ),
        recommendations=Localized(
            (
                "Book well in advance",
                "Consider alternative cities",
                "Respect pilgrim routes",
                "Be patient with crowds",
            ),
            (
                "احجز مسبقاً",
                "فكر في مدن بديلة",
                "احترم طرق الحجاج",
                "تحلى بالصبر مع الحشود",
            ),
        ),
    ),
    Holiday(
        id="eid-al-adha",
        name=Localized("Eid al-Adha", "عيد الأضحى"),
        category="islamic",
        date=date(2026, 5, 27),
        is_lunar=True,
        significance=Localized(
            "Festival of Sacrifice concluding the Hajj",
            "عيد الأضحى المبارك في ختام مناسك الحج",
        ),
        travel_considerations=Localized(
            (
                "Extended public holiday",
                "Businesses and government offices closed",
                "High demand for family resorts",
            ),
            (
                "عطلة رسمية ممتدة",
                "إغلاق الشركات والدوائر الحكومية",
                "طلب مرتفع على المنتجعات العائلية",
            ),
        ),
        recommendations=Localized(
            (
                "Reserve family resorts early",
                "Join community celebrations",
                "Plan around closures of offices",
            ),
            (
                "احجز المنتجعات العائلية مبكراً",
                "شارك في احتفالات المجتمع",
                "خطط لرحلتك مع مراعاة إغلاق المكاتب",
            ),
        ),
    ),
    Holiday(
        id="saudi-founding-day",
        name=Localized("Saudi Founding Day", "يوم التأسيس السعودي"),
        category="national",
        date=date(2026, 2, 22),
        is_lunar=False,
        significance=Localized(
            "Commemorates the founding of the first Saudi state in 1727",
            "يخلد ذكرى تأسيس الدولة السعودية الأولى عام 1727",
        ),
        travel_considerations=Localized(
            (
                "National holiday - government offices closed",
                "Heritage events in major cities",
            ),
            (
                "عطلة وطنية - إغلاق الدوائر الحكومية",
                "فعاليات تراثية في المدن الكبرى",
            ),
        ),
        recommendations=Localized(
            (
                "Visit Diriyah heritage events",
                "Watch traditional Ardah performances",
            ),
            (
                "زر فعاليات الدرعية التراثية",
                "شاهد عروض العرضة التقليدية",
            ),
        ),
    ),
    Holiday(
        id="saudi-national-day",
        name=Localized("Saudi National Day", "اليوم الوطني السعودي"),
        category="national",
        date=date(2026, 9, 23),
        is_lunar=False,
        significance=Localized(
            "Celebrates the unification of Saudi Arabia",
            "يحتفل بتوحيد المملكة العربية السعودية",
        ),
        travel_considerations=Localized(
            (
                "National holiday - many businesses closed",
                "Public celebrations and fireworks",
                "Heavy traffic in major cities",
                "Patriotic decorations everywhere",
            ),
            (
                "عطلة وطنية - العديد من الشركات مغلقة",
                "احتفالات عامة وألعاب نارية",
                "حركة مرور كثيفة في المدن الكبرى",
                "زينة وطنية في كل مكان",
            ),
        ),
        recommendations=Localized(
            (
                "Join in national celebrations",
                "Visit cultural events",
                "Enjoy special performances",
                "Experience Saudi pride",
            ),
            (
                "انضم للاحتفالات الوطنية",
                "زر الفعاليات الثقافية",
                "استمتع بالعروض الخاصة",
                "اختبر الفخر السعودي",
            ),
        ),
    ),
    Holiday(
        id="world-heritage-day",
        name=Localized("World Heritage Day", "يوم التراث العالمي"),
        category="cultural",
        date=date(2026, 4, 18),
        is_lunar=False,
        significance=Localized(
            "International day for monuments and heritage sites",
            "اليوم الدولي للمعالم ومواقع التراث",
        ),
        travel_considerations=Localized(
            (
                "Free or discounted entry at many heritage sites",
                "Busier museums and guided tours",
            ),
            (
                "دخول مجاني أو مخفض في كثير من مواقع التراث",
                "ازدحام المتاحف والجولات المرشدة",
            ),
        ),
        recommendations=Localized(
            (
                "Tour AlUla and Diriyah",
                "Join heritage walking tours",
            ),
            (
                "تجول في العلا والدرعية",
                "انضم لجولات المشي التراثية",
            ),
        ),
    ),
)


SEASONS: tuple[Season, ...] = (
    Season(
        id="winter",
        name=Localized("Winter Season", "فصل الشتاء"),
        description=Localized(
            "Best weather for travel across most of Saudi Arabia",
            "أفضل طقس للسفر عبر معظم أنحاء المملكة العربية السعودية",
        ),
        start=(12, 1),
        end=(3, 1),
        travel_impact=Localized(
            "Peak tourism season with pleasant temperatures",
            "موسم الذروة السياحية مع درجات حرارة لطيفة",
        ),
        recommendations=Localized(
            (
                "Book accommodations early",
                "Perfect for desert activities",
                "Ideal for outdoor exploration",
                "Great for family trips",
            ),
            (
                "احجز الإقامة مبكراً",
                "مثالي للأنشطة الصحراوية",
                "مناسب للاستكشاف الخارجي",
                "رائع للرحلات العائلية",
            ),
        ),
    ),
    Season(
        id="spring",
        name=Localized("Spring Season", "فصل الربيع"),
        description=Localized(
            "Mild temperatures with occasional rain",
            "درجات حرارة معتدلة مع أمطار عرضية",
        ),
        start=(3, 1),
        end=(6, 1),
        travel_impact=Localized(
            "Good weather for most activities",
            "طقس جيد لمعظم الأنشطة",
        ),
        recommendations=Localized(
            (
                "Enjoy blooming landscapes",
                "Perfect for hiking",
                "Great for cultural tours",
                "Photography season",
            ),
            (
                "استمتع بالمناظر المزهرة",
                "مثالي للمشي لمسافات طويلة",
                "رائع للجولات الثقافية",
                "موسم التصوير",
            ),
        ),
    ),
    Season(
        id="summer",
        name=Localized("Summer Season", "فصل الصيف"),
        description=Localized(
            "Very hot weather, especially in central regions",
            "طقس حار جداً، خاصة في المناطق الوسطى",
        ),
        start=(6, 1),
        end=(9, 1),
        travel_impact=Localized(
            "Challenging outdoor activities due to heat",
            "أنشطة خارجية صعبة بسبب الحر",
        ),
        recommendations=Localized(
            (
                "Visit cooler mountain regions",
                "Focus on indoor attractions",
                "Early morning/evening activities",
                "Stay hydrated always",
            ),
            (
                "زر المناطق الجبلية الباردة",
                "ركز على المعالم الداخلية",
                "أنشطة الصباح الباكر/المساء",
                "حافظ على رطوبة الجسم دائماً",
            ),
        ),
    ),
    Season(
        id="autumn",
        name=Localized("Autumn Season", "فصل الخريف"),
        description=Localized(
            "Temperatures ease after the summer heat",
            "تنخفض درجات الحرارة بعد حر الصيف",
        ),
        start=(9, 1),
        end=(12, 1),
        travel_impact=Localized(
            "Shoulder season with growing event calendars",
            "موسم انتقالي مع تزايد الفعاليات",
        ),
        recommendations=Localized(
            (
                "Catch the Riyadh Season events",
                "Good value on hotels before winter",
                "Evenings are ideal for souq visits",
            ),
            (
                "تابع فعاليات موسم الرياض",
                "أسعار فنادق مناسبة قبل الشتاء",
                "الأمسيات مثالية لزيارة الأسواق",
            ),
        ),
    ),
)


LOCAL_CUSTOMS: tuple[LocalCustom, ...] = (
    LocalCustom(
        id="dress-code",
        category="dress",
        title=Localized("Modest Dress Code", "قواعد اللباس المحتشم"),
        description=Localized(
            "Both men and women should dress modestly in public",
            "يجب على الرجال والنساء ارتداء ملابس محتشمة في الأماكن العامة",
        ),
        importance="critical",
        tips=Localized(
            (
                "Cover shoulders and knees",
                "Avoid tight-fitting clothes",
                "Women should consider loose-fitting attire",
                "Respect local customs in religious sites",
            ),
            (
                "غطِ الكتفين والركبتين",
                "تجنب الملابس الضيقة",
                "النساء يجب أن يفكرن في الملابس الفضفاضة",
                "احترم العادات المحلية في المواقع الدينية",
            ),
        ),
    ),
    LocalCustom(
        id="prayer-times",
        category="religious",
        title=Localized("Prayer Times Respect", "احترام أوقات الصلاة"),
        description=Localized(
            "Business and activities pause during prayer times",
            "الأعمال والأنشطة تتوقف خلال أوقات الصلاة",
        ),
        importance="important",
        tips=Localized(
            (
                "Expect shops to close briefly",
                "Plan activities around prayer times",
                "Show respect during prayer calls",
                "Use prayer apps for timing",
            ),
            (
                "توقع إغلاق المحلات لفترة قصيرة",
                "خطط الأنشطة حول أوقات الصلاة",
                "أظهر الاحترام خلال الأذان",
                "استخدم تطبيقات الصلاة للمواعيد",
            ),
        ),
    ),
    LocalCustom(
        id="greetings",
        category="social",
        title=Localized("Traditional Greetings", "التحيات التقليدية"),
        description=Localized(
            "Learn common Arabic greetings and customs",
            "تعلم التحيات العربية الشائعة والعادات",
        ),
        importance="helpful",
        tips=Localized(
            (
                'Say "As-salamu alaykum" (Peace be upon you)',
                'Respond with "Wa alaykum as-salam"',
                "Use right hand for greetings",
                "Show respect to elders",
            ),
            (
                'قل "السلام عليكم"',
                'اجب بـ"وعليكم السلام"',
                "استخدم اليد اليمنى للتحية",
                "أظهر الاحترام للكبار",
            ),
        ),
    ),
    LocalCustom(
        id="dining-etiquette",
        category="dining",
        title=Localized("Dining Etiquette", "آداب الطعام"),
        description=Localized(
            "Traditional dining customs and table manners",
            "عادات الطعام التقليدية وآداب المائدة",
        ),
        importance="important",
        tips=Localized(
            (
                "Eat with right hand",
                "Accept hospitality graciously",
                "Try traditional foods",
                "Leave some food to show satisfaction",
            ),
            (
                "كل باليد اليمنى",
                "اقبل الضيافة بلطف",
                "جرب الأطعمة التقليدية",
                "اترك بعض الطعام لإظهار الرضا",
            ),
        ),
    ),
)


TRAVEL_TERMS: tuple[TravelTerm, ...] = (
    TravelTerm("airport", "مطار", "matar", "airport", "transportation",
               Localized("Which airport should I fly into?", "أي مطار يجب أن أطير إليه؟")),
    TravelTerm("hotel", "فندق", "funduq", "hotel", "accommodation",
               Localized("I need a hotel reservation", "أحتاج حجز فندق")),
    TravelTerm("restaurant", "مطعم", "matam", "restaurant", "dining",
               Localized("Where is the nearest restaurant?", "أين أقرب مطعم؟")),
    TravelTerm("mosque", "مسجد", "masjid", "mosque", "religious",
               Localized("Are there mosques nearby?", "هل توجد مساجد قريبة؟")),
    TravelTerm("desert", "صحراء", "sahra", "desert", "geography",
               Localized("I want to visit the desert", "أريد زيارة الصحراء")),
    TravelTerm("pilgrimage", "حج", "hajj", "pilgrimage", "religious",
               Localized("Information about pilgrimage routes", "معلومات عن طرق الحج")),
    TravelTerm("marketplace", "سوق", "souq", "marketplace/bazaar", "shopping",
               Localized("Take me to the traditional market", "خذني إلى السوق التقليدي")),
    TravelTerm("journey", "رحلة", "rihla", "journey/trip", "travel",
               Localized("Plan my journey", "خطط رحلتي")),
    TravelTerm("guide", "مرشد", "murshid", "guide", "assistance",
               Localized("I need a tour guide", "أحتاج مرشد سياحي")),
    TravelTerm("heritage", "تراث", "turath", "heritage", "culture",
               Localized("Show me cultural heritage sites", "أرني مواقع التراث الثقافي")),
)


REGIONS: tuple[Region, ...] = (
    Region(
        id="riyadh",
        name=Localized("Riyadh Region", "منطقة الرياض"),
        climate=Localized(
            "Hot desert climate with very hot summers and mild winters",
            "مناخ صحراوي حار مع صيف حار جداً وشتاء معتدل",
        ),
        best_time=Localized("November to March for pleasant weather", "نوفمبر إلى مارس للطقس اللطيف"),
        attractions=(
            Attraction(
                name=Localized("Masmak Fortress", "قصر المصمك"),
                type="historical",
                cultural_significance=Localized(
                    "Birthplace of modern Saudi Arabia",
                    "مهد المملكة العربية السعودية الحديثة",
                ),
                visiting_tips=Localized(
                    (
                        "Visit during cooler hours",
                        "Respect photography restrictions",
                        "Guided tours available in Arabic and English",
                    ),
                    (
                        "زر في الساعات الباردة",
                        "احترم قيود التصوير",
                        "جولات مرشدة متاحة بالعربية والإنجليزية",
                    ),
                ),
            ),
            Attraction(
                name=Localized("Kingdom Centre Tower", "برج المملكة"),
                type="modern",
                cultural_significance=Localized(
                    "Symbol of modern Saudi development",
                    "رمز التطور السعودي الحديث",
                ),
                visiting_tips=Localized(
                    (
                        "Sky bridge offers panoramic views",
                        "Shopping and dining available",
                        "Best visited in evening for city lights",
                    ),
                    (
                        "الجسر السماوي يوفر مناظر بانورامية",
                        "التسوق والطعام متاحان",
                        "الأفضل زيارته في المساء لأضواء المدينة",
                    ),
                ),
            ),
        ),
        local_cuisine=(
            Dish(
                name=Localized("Kabsa", "كبسة"),
                description=Localized(
                    "Traditional Saudi rice dish with meat and spices",
                    "طبق الأرز السعودي التقليدي مع اللحم والتوابل",
                ),
                is_halal=True,
                recommendations=Localized(
                    (
                        "Try authentic versions at local restaurants",
                        "Usually served for lunch",
                        "Eaten with hands traditionally",
                    ),
                    (
                        "جرب الأصناف الأصيلة في المطاعم المحلية",
                        "عادة يقدم للغداء",
                        "يؤكل باليد تقليدياً",
                    ),
                ),
            ),
        ),
        transportation=Localized(
            (
                "Riyadh Metro (modern public transport)",
                "Taxis and ride-sharing services",
                "Car rental widely available",
                "Bus system connects major areas",
            ),
            (
                "قطار الرياض (النقل العام الحديث)",
                "سيارات الأجرة وخدمات النقل التشاركي",
                "تأجير السيارات متاح بكثرة",
                "نظام الحافلات يربط المناطق الرئيسية",
            ),
        ),
        accommodation=Localized(
            (
                "Luxury hotels in business districts",
                "Family-friendly accommodations",
                "Budget options available",
                "Traditional Arabic hospitality",
            ),
            (
                "فنادق فاخرة في المناطق التجارية",
                "إقامة مناسبة للعائلات",
                "خيارات اقتصادية متاحة",
                "ضيافة عربية تقليدية",
            ),
        ),
    ),
    Region(
        id="mecca",
        name=Localized("Mecca Region", "منطقة مكة المكرمة"),
        climate=Localized("Hot desert climate, very hot and humid", "مناخ صحراوي حار، حار جداً ورطب"),
        best_time=Localized(
            "October to April, avoid Hajj season crowds",
            "أكتوبر إلى أبريل، تجنب زحام موسم الحج",
        ),
        attractions=(
            Attraction(
                name=Localized("Masjid al-Haram", "المسجد الحرام"),
                type="religious",
                cultural_significance=Localized(
                    "Holiest site in Islam, contains the Kaaba",
                    "أقدس مكان في الإسلام، يحتوي على الكعبة المشرفة",
                ),
                visiting_tips=Localized(
                    (
                        "Dress modestly and appropriately",
                        "Respect prayer times",
                        "Follow crowd management guidelines",
                        "Bring prayer mat and water",
                    ),
                    (
                        "البس بطريقة محتشمة ومناسبة",
                        "احترم أوقات الصلاة",
                        "اتبع إرشادات إدارة الحشود",
                        "أحضر سجادة صلاة وماء",
                    ),
                ),
            ),
        ),
        local_cuisine=(
            Dish(
                name=Localized("Mutabbaq", "مطبق"),
                description=Localized(
                    "Stuffed pancake with meat, vegetables, or cheese",
                    "فطيرة محشوة باللحم أو الخضار أو الجبن",
                ),
                is_halal=True,
                recommendations=Localized(
                    ("Popular street food", "Available at most food stalls", "Great for quick meals"),
                    ("طعام شعبي شائع", "متاح في معظم المحلات", "رائع للوجبات السريعة"),
                ),
            ),
        ),
        transportation=Localized(
            (
                "Haramain High-Speed Railway",
                "Shuttle buses to holy sites",
                "Taxis and ride-sharing",
                "Walking is common in holy areas",
            ),
            (
                "قطار الحرمين السريع",
                "حافلات مكوكية للمواقع المقدسة",
                "سيارات الأجرة والنقل التشاركي",
                "المشي شائع في المناطق المقدسة",
            ),
        ),
        accommodation=Localized(
            (
                "Hotels near Haram for pilgrims",
                "Luxury accommodations available",
                "Budget-friendly options",
                "Book well in advance",
            ),
            (
                "فنادق قريبة من الحرم للحجاج",
                "إقامة فاخرة متاحة",
                "خيارات اقتصادية",
                "احجز مسبقاً",
            ),
        ),
    ),
)


def active_holidays(reference_date, holidays=HOLIDAYS, window_days=None):
    """Return holidays whose date is within +/- window_days of reference_date.

    The boundary is inclusive and the result keeps table order, so callers
    wanting a "primary" holiday take the first element.
    """
    if window_days is None:
        window_days = HOLIDAY_WINDOW_DAYS
    ref = as_date(reference_date)
    return [h for h in holidays if days_apart(ref, h.date) <= window_days]


def active_season(reference_date, seasons=SEASONS):
    """Return the season containing reference_date, or None for a gapped table."""
    for season in seasons:
        if season.contains(reference_date):
            return season
    return None


def validate_seasons(seasons=SEASONS, year=REFERENCE_YEAR):
    """Return every date of `year` not covered by exactly one season."""
    bad = []
    day = date(year, 1, 1)
    while day.year == year:
        hits = sum(1 for s in seasons if s.contains(day))
        if hits != 1:
            bad.append(day)
        day += timedelta(days=1)
    return bad


def default_cultural_preferences(locale) -> CulturalPreferences:
    """Locale-derived defaults, applied once when a session is created."""
    prefs = CulturalPreferences()
    if normalize_locale(locale) == "ar":
        prefs.gender_separation = True
        prefs.ramadan_conscious = True
        prefs.hajj_season_aware = True
    return prefs


def customs_for(category=None, customs=LOCAL_CUSTOMS):
    if category is None:
        return list(customs)
    return [c for c in customs if c.category == category]


def lookup_term(word, terms=TRAVEL_TERMS):
    """Find a glossary entry by key, English word or Arabic word."""
    if not word:
        return None
    needle = word.strip().lower()
    for term in terms:
        if needle in (term.key, term.english.lower(), term.arabic, term.transliteration):
            return term
        if needle in term.english.lower().split("/"):
            return term
    return None


def region_insights(region_id=None, regions=REGIONS):
    if region_id is None:
        return list(regions)
    return [r for r in regions if r.id == region_id]


def region_for_destination(text, regions=REGIONS):
    """First region whose id or en/ar name root appears in `text`, else None."""
    low = (text or "").lower()
    for region in regions:
        # 'Riyadh Region' -> 'riyadh', 'منطقة الرياض' -> 'الرياض'
        names = (region.id, region.name.en.lower().split()[0], region.name.ar.split()[1])
        if any(n in low for n in names):
            return region
    return None


@dataclass
class CulturalContext:
    locale: str
    preferences: CulturalPreferences
    active_holidays: list[Holiday] = field(default_factory=list)
    active_season: Season | None = None

    @property
    def primary_holiday(self):
        return self.active_holidays[0] if self.active_holidays else None

    def to_dict(self):
        return {
            "locale": self.locale,
            "preferences": self.preferences.to_dict(),
            "active_holidays": [h.to_dict(self.locale) for h in self.active_holidays],
            "active_season": self.active_season.to_dict(self.locale) if self.active_season else None,
        }


def current_cultural_context(locale, reference_date=None) -> CulturalContext:
    loc = normalize_locale(locale)
    when = as_date(reference_date) if reference_date is not None else utcnow().date()
    return CulturalContext(
        locale=loc,
        preferences=default_cultural_preferences(loc),
        active_holidays=active_holidays(when),
        active_season=active_season(when),
    )


def _holiday_from_dict(raw) -> Holiday:
    return Holiday(
        id=raw["id"],
        name=Localized.from_dict(raw["name"]),
        category=raw.get("category", "cultural"),
        date=as_date(raw["date"]),
        is_lunar=bool(raw.get("is_lunar", False)),
        significance=Localized.from_dict(raw.get("significance", "")),
        travel_considerations=Localized.from_dict(raw.get("travel_considerations", [])),
        recommendations=Localized.from_dict(raw.get("recommendations", [])),
    )


def load_holidays(path) -> tuple[Holiday, ...]:
    """Load a holiday table authored as a JSON list (ISO dates, en/ar objects)."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, list):
            raise CalendarDataError(f"{path}: expected a list of holidays")
        return tuple(_holiday_from_dict(item) for item in raw)
    except CalendarDataError:
        raise
    except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
        raise CalendarDataError(f"{path}: {exc}") from exc
