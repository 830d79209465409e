import pytest

from tec_calendar.core.dates import (
    FlexibleDateParser,
    normalize_date,
    normalize_date_fields,
    parse_time_of_day,
    parse_wall_clock,
)
from tec_calendar.domain import ValidationErrorRecord

from conftest import FIXED_NOW


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("2024-07-15 18:00:00", "2024-07-15 18:00:00"),
        ("2024-07-15T18:00:00", "2024-07-15 18:00:00"),
        ("2024-07-15T18:00:00Z", "2024-07-15 18:00:00"),
        ("December 15, 2024 7:00 PM", "2024-12-15 19:00:00"),
        ("+3 days", "2024-07-13 14:30:00"),
        ("in 2 weeks", "2024-07-24 14:30:00"),
        ("2 hours ago", "2024-07-10 12:30:00"),
        ("3 days 1 hour", "2024-07-13 15:30:00"),
        ("now", "2024-07-10 14:30:00"),
        ("tomorrow 3pm", "2024-07-11 15:00:00"),
        ("today at noon", "2024-07-10 12:00:00"),
        ("next monday 9am", "2024-07-15 09:00:00"),
        ("next wednesday", "2024-07-17 00:00:00"),
        ("friday 6:30pm", "2024-07-12 18:30:00"),
        ("last friday", "2024-07-05 00:00:00"),
    ],
)
def test_normalize_datetime_inputs(parser, text, expected):
    assert normalize_date("start_date", text, parser) == expected


@pytest.mark.parametrize("text", ["2024-12-01", "December 1, 2024", "2024-12-01 10:00:00"])
def test_sale_price_fields_use_date_only_form(parser, text):
    assert normalize_date("sale_price_start_date", text, parser) == "2024-12-01"


def test_sale_price_relative_phrase(parser):
    assert normalize_date("sale_price_end_date", "tomorrow", parser) == "2024-07-11"


@pytest.mark.parametrize(
    "text",
    ["2024-07-15 18:00:00", "next monday 9am", "+2 days", "tomorrow 3pm", "2024-02-29T23:59:59"],
)
def test_normalization_reaches_a_fixed_point(parser, text):
    once = normalize_date("end_date", text, parser)
    assert once is not None
    assert normalize_date("end_date", once, parser) == once


def test_canonical_string_returned_unchanged(parser):
    assert normalize_date("start_date", "2025-01-01 10:00:00", parser) == "2025-01-01 10:00:00"


def test_canonical_pattern_passes_through_when_parser_declines():
    class NullParser:
        def parse(self, text):
            return None

    assert normalize_date("start_date", "2025-01-01 10:00:00", NullParser()) == "2025-01-01 10:00:00"
    assert normalize_date("start_date", "2025-01-01 10:00", NullParser()) == "2025-01-01 10:00:00"
    assert normalize_date("start_date", "soon", NullParser()) is None


@pytest.mark.parametrize("text", ["not a date", "sometime later", "tomorrow whenever"])
def test_unparseable_input_returns_none(parser, text):
    assert normalize_date("start_date", text, parser) is None


def test_normalize_fields_collects_every_invalid_field(parser):
    payload = {
        "title": "GA",
        "start_date": "not a date",
        "end_date": "sometime later",
        "sale_price_start_date": "2024-12-01",
        "stock": 5,
    }

    normalized, invalid = normalize_date_fields(payload, parser)

    assert invalid == [
        ValidationErrorRecord(field="start_date", value="not a date"),
        ValidationErrorRecord(field="end_date", value="sometime later"),
    ]
    assert normalized["sale_price_start_date"] == "2024-12-01"
    assert payload["start_date"] == "not a date"


def test_normalize_fields_skips_empty_and_non_string_values(parser):
    normalized, invalid = normalize_date_fields({"start_date": "", "end_date": None, "start_date_utc": 12}, parser)

    assert invalid == []
    assert normalized == {"start_date": "", "end_date": None, "start_date_utc": 12}


@pytest.mark.parametrize(
    ("text", "hour", "minute"),
    [("3pm", 15, 0), ("12am", 0, 0), ("12pm", 12, 0), ("18:45", 18, 45), ("9:05 a.m.", 9, 5), ("noon", 12, 0)],
)
def test_parse_time_of_day(text, hour, minute):
    moment = parse_time_of_day(text)
    assert (moment.hour, moment.minute) == (hour, minute)


@pytest.mark.parametrize("text", ["13pm", "25:00", "7:75", "late"])
def test_parse_time_of_day_rejects_invalid(text):
    assert parse_time_of_day(text) is None


def test_parser_uses_injected_clock():
    parser = FlexibleDateParser(clock=lambda: FIXED_NOW)
    assert parser.parse("tomorrow") == FIXED_NOW.replace(day=11, hour=0, minute=0)
    assert parser.parse("   ") is None


def test_parse_wall_clock_ignores_timezone():
    assert parse_wall_clock("2024-07-15 18:00:00").hour == 18
    assert parse_wall_clock("2024-07-15T18:00:00+02:00").tzinfo is None
    assert parse_wall_clock("garbage") is None
    assert parse_wall_clock(None) is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("next week", "2024-07-17 14:30:00"),
        ("next month", "2024-08-10 14:30:00"),
        ("last year", "2023-07-10 14:30:00"),
        ("in a week", "2024-07-17 14:30:00"),
        ("an hour ago", "2024-07-10 13:30:00"),
        ("2 days from now", "2024-07-12 14:30:00"),
        ("3 days later", "2024-07-13 14:30:00"),
        ("noon tomorrow", "2024-07-11 12:00:00"),
        ("3 pm on friday", "2024-07-12 15:00:00"),
        ("at 9am next monday", "2024-07-15 09:00:00"),
        ("this weekend", "2024-07-13 00:00:00"),
        ("next weekend", "2024-07-20 00:00:00"),
    ],
)
def test_casual_phrases(parser, text, expected):
    assert normalize_date("start_date", text, parser) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Jan 3", "2025-01-03 00:00:00"),
        ("March 5 10am", "2025-03-05 10:00:00"),
        ("Dec 25", "2024-12-25 00:00:00"),
        ("July 10", "2024-07-10 00:00:00"),
        ("Jan 3 2024", "2024-01-03 00:00:00"),
    ],
)
def test_dates_without_year_resolve_forward(parser, text, expected):
    assert normalize_date("start_date", text, parser) == expected


def test_weekend_seen_from_a_sunday():
    sunday = FlexibleDateParser(clock=lambda: FIXED_NOW.replace(day=14))
    assert sunday.parse("this weekend") == FIXED_NOW.replace(day=13, hour=0, minute=0)
