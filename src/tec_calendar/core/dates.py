"""Date normalization for flexible, natural-language and canonical inputs."""

from __future__ import annotations

import re
from datetime import datetime, time
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Tuple

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from ..domain.models import DATE_FORMAT, DATETIME_FORMAT, DATETIME_PATTERN, ValidationErrorRecord

DATE_FIELDS: Tuple[str, ...] = (
    "start_date",
    "end_date",
    "start_date_utc",
    "end_date_utc",
    "sale_price_start_date",
    "sale_price_end_date",
)
DATE_ONLY_FIELDS = frozenset({"sale_price_start_date", "sale_price_end_date"})

_CANONICAL = re.compile(DATETIME_PATTERN)

_UNITS = {
    "sec": "seconds",
    "second": "seconds",
    "min": "minutes",
    "minute": "minutes",
    "hour": "hours",
    "hr": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}
_UNIT_PATTERN = "|".join(sorted(_UNITS, key=len, reverse=True))
_OFFSET = re.compile(rf"([+-]?)\s*(\d+)\s*({_UNIT_PATTERN})s?\b")
_RELATIVE = re.compile(
    rf"^(?:in\s+)?((?:[+-]?\s*\d+\s*(?:{_UNIT_PATTERN})s?\s*)+)(ago|from now|from today|later)?$"
)
_ARTICLE = re.compile(rf"\b(?:a|an)\s+(?=(?:{_UNIT_PATTERN})s?\b)")
_PERIOD = re.compile(rf"^(?P<modifier>next|last)\s+(?P<unit>{_UNIT_PATTERN})$")
_WEEKEND = re.compile(r"^(?:(?P<modifier>this|next)\s+)?weekend$")
_KEYWORD = re.compile(r"^(now|today|tonight|tomorrow|yesterday)(?:\s+(?:at\s+)?(?P<time>.+))?$")
_WEEKDAY = re.compile(
    r"^(?:(?P<modifier>next|this|last)\s+)?"
    r"(?P<day>monday|tuesday|wednesday|thursday|friday|saturday|sunday|mon|tue|tues|wed|thu|thur|thurs|fri|sat|sun)"
    r"(?:\s+(?:at\s+)?(?P<time>.+))?$"
)
_CLOCK = re.compile(r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?::(?P<second>\d{2}))?\s*(?P<ampm>am|pm)?$")

_WEEKDAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
_DAY_OFFSETS = {"today": 0, "tonight": 0, "tomorrow": 1, "yesterday": -1}
_NAMED_TIMES = {
    "morning": time(9, 0),
    "noon": time(12, 0),
    "midday": time(12, 0),
    "afternoon": time(15, 0),
    "evening": time(18, 0),
    "tonight": time(20, 0),
    "night": time(20, 0),
    "midnight": time(0, 0),
}


class DateParser(Protocol):
    def parse(self, text: str) -> Optional[datetime]:
        ...


def parse_time_of_day(text: str) -> Optional[time]:
    cleaned = text.strip().lower().replace(".", "")
    if cleaned in _NAMED_TIMES:
        return _NAMED_TIMES[cleaned]
    match = _CLOCK.match(cleaned)
    if not match:
        return None
    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    second = int(match.group("second") or 0)
    ampm = match.group("ampm")
    if ampm:
        if not 1 <= hour <= 12:
            return None
        if ampm == "pm" and hour < 12:
            hour += 12
        if ampm == "am" and hour == 12:
            hour = 0
    if hour > 23 or minute > 59 or second > 59:
        return None
    return time(hour, minute, second)


class FlexibleDateParser:
    """Parse absolute dates plus common relative phrases.

    Handles "+3 days", "in a week", "2 hours ago", "2 days from now",
    "tomorrow 3pm", "noon tomorrow", "next monday 9am", "next month",
    "this weekend", and anything ``dateutil`` understands. Dates written
    without a year resolve to their next occurrence. Results are naive local
    wall-clock datetimes with second precision.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self.clock = clock

    def parse(self, text: str) -> Optional[datetime]:
        if not isinstance(text, str):
            return None
        cleaned = _ARTICLE.sub("1 ", " ".join(text.strip().lower().split()))
        if not cleaned:
            return None
        now = self.clock().replace(microsecond=0, tzinfo=None)
        for handler in (self._relative, self._period, self._weekend, self._keyword, self._weekday, self._time_first):
            try:
                result = handler(cleaned, now)
            except (ValueError, OverflowError):
                result = None
            if result is not None:
                return result
        return self._absolute(text.strip(), now)

    def _relative(self, text: str, now: datetime) -> Optional[datetime]:
        match = _RELATIVE.match(text)
        if not match:
            return None
        direction = -1 if match.group(2) == "ago" else 1
        delta = relativedelta()
        for sign, amount, unit in _OFFSET.findall(match.group(1)):
            value = int(amount) * (-1 if sign == "-" else 1) * direction
            delta += relativedelta(**{_UNITS[unit]: value})
        return now + delta

    def _period(self, text: str, now: datetime) -> Optional[datetime]:
        match = _PERIOD.match(text)
        if not match:
            return None
        step = 1 if match.group("modifier") == "next" else -1
        return now + relativedelta(**{_UNITS[match.group("unit")]: step})

    def _weekend(self, text: str, now: datetime) -> Optional[datetime]:
        match = _WEEKEND.match(text)
        if not match:
            return None
        # Saturday of the current weekend; on a Sunday that is yesterday.
        ahead = -1 if now.weekday() == 6 else 5 - now.weekday()
        if match.group("modifier") == "next":
            ahead += 7
        return (now + relativedelta(days=ahead)).replace(hour=0, minute=0, second=0)

    def _keyword(self, text: str, now: datetime) -> Optional[datetime]:
        match = _KEYWORD.match(text)
        if not match:
            return None
        word = match.group(1)
        time_text = match.group("time")
        if word == "now":
            if time_text:
                return None
            return now
        day = now + relativedelta(days=_DAY_OFFSETS[word])
        return self._at(day, time_text, default=_NAMED_TIMES["tonight"] if word == "tonight" else time(0, 0))

    def _weekday(self, text: str, now: datetime) -> Optional[datetime]:
        match = _WEEKDAY.match(text)
        if not match:
            return None
        target = _WEEKDAYS.index(match.group("day")[:3])
        modifier = match.group("modifier")
        ahead = (target - now.weekday()) % 7
        if modifier == "next" and ahead == 0:
            ahead = 7
        elif modifier == "last":
            ahead = ahead - 7 if ahead else -7
        return self._at(now + relativedelta(days=ahead), match.group("time"), default=time(0, 0))

    def _time_first(self, text: str, now: datetime) -> Optional[datetime]:
        """Handle a time written before its day, as in "noon tomorrow" or "3pm on friday"."""

        words = text.removeprefix("at ").split()
        for split in range(1, len(words)):
            head = " ".join(words[:split])
            if parse_time_of_day(head) is None:
                continue
            rest = " ".join(words[split:]).removeprefix("on ")
            for handler in (self._keyword, self._weekday):
                result = handler(f"{rest} {head}", now)
                if result is not None:
                    return result
        return None

    def _absolute(self, text: str, now: datetime) -> Optional[datetime]:
        default = now.replace(hour=0, minute=0, second=0)
        try:
            parsed = date_parser.parse(text, default=default)
        except (ValueError, OverflowError):
            return None
        parsed = parsed.replace(tzinfo=None, microsecond=0)
        if parsed.date() < now.date() and not self._names_year(text, default, parsed):
            parsed += relativedelta(years=1)
        return parsed

    @staticmethod
    def _names_year(text: str, default: datetime, parsed: datetime) -> bool:
        # dateutil fills a missing year from the default; a different default year exposes that.
        try:
            shifted = date_parser.parse(text, default=default + relativedelta(years=4))
        except (ValueError, OverflowError):
            return True
        return shifted.year == parsed.year

    @staticmethod
    def _at(day: datetime, time_text: Optional[str], *, default: time) -> Optional[datetime]:
        moment = parse_time_of_day(time_text) if time_text else default
        if moment is None:
            return None
        return day.replace(hour=moment.hour, minute=moment.minute, second=moment.second)


def format_datetime(value: datetime) -> str:
    return value.strftime(DATETIME_FORMAT)


def format_date(value: datetime) -> str:
    return value.strftime(DATE_FORMAT)


def parse_wall_clock(value: Any) -> Optional[datetime]:
    """Read a backend timestamp as a naive wall-clock datetime."""

    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace(" ", "T", 1))
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)


def normalize_date(field: str, value: str, parser: DateParser) -> Optional[str]:
    """Return the canonical form of ``value`` or ``None`` when it is unusable."""

    raw = value.strip()
    formatter = format_date if field in DATE_ONLY_FIELDS else format_datetime
    parsed = parser.parse(raw)
    if parsed is not None:
        return formatter(parsed)
    if _CANONICAL.match(raw):
        return raw
    fallback = parse_wall_clock(raw)
    if fallback is not None:
        return formatter(fallback)
    return None


def normalize_date_fields(
    payload: Mapping[str, Any],
    parser: DateParser,
) -> Tuple[Dict[str, Any], List[ValidationErrorRecord]]:
    """Normalize every recognised date field, collecting the ones that fail."""

    normalized = dict(payload)
    invalid: List[ValidationErrorRecord] = []
    for field in DATE_FIELDS:
        value = normalized.get(field)
        if not value or not isinstance(value, str):
            continue
        canonical = normalize_date(field, value, parser)
        if canonical is None:
            invalid.append(ValidationErrorRecord(field=field, value=value.strip()))
        else:
            normalized[field] = canonical
    return normalized, invalid
