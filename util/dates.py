"""
util/dates.py

Date and timestamp helpers shared by the calendar and the memory store.
- utcnow: timezone-aware "now" used as the default store clock
- to_iso / parse_iso: ISO-8601 round trip for persisted timestamps
- as_date: normalize date/datetime/ISO string inputs to a calendar date
- days_apart: absolute distance in whole days between two calendar dates
"""

from datetime import date, datetime, timezone

from dateutil import parser


ISO_DATE_FMT = "%Y-%m-%d"


def utcnow():
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a timestamp as ISO-8601. Naive values are assumed to be UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def parse_iso(text: str) -> datetime:
    """Parse an ISO-8601 timestamp written by to_iso (or any ISO variant).

    Naive results are pinned to UTC so comparisons against utcnow() never mix
    aware and naive values.
    """
    dt = parser.isoparse(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parser.isoparse(value).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def days_apart(a, b) -> int:
    return abs((as_date(a) - as_date(b)).days)
