from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from src.time_tracker.time_tracker.core.enums import PeriodType
from src.time_tracker.time_tracker.core.exceptions import ValidationError
from src.time_tracker.time_tracker.reports.periods import (
    format_date_range,
    format_period_name,
    generate_date_range,
    get_month_end,
    get_month_start,
    get_next_month,
    get_next_week,
    get_previous_month,
    get_previous_week,
    get_week_end,
    get_week_number,
    get_week_start,
)


def test_thursday_maps_to_its_monday_and_sunday():
    thursday = date(2025, 11, 13)
    assert get_week_start(thursday) == date(2025, 11, 10)
    assert get_week_end(thursday) == date(2025, 11, 16)


def test_sunday_closes_the_previous_week():
    assert get_week_start(date(2025, 11, 16)) == date(2025, 11, 10)
    assert get_week_start(date(2025, 11, 17)) == date(2025, 11, 17)


def test_week_start_across_month_and_year():
    assert get_week_start(date(2025, 1, 1)) == date(2024, 12, 30)
    assert get_week_start(date(2025, 3, 2)) == date(2025, 2, 24)


def test_week_start_accepts_strings_and_datetimes():
    assert get_week_start("2025-11-13") == date(2025, 11, 10)
    assert get_week_start(datetime(2025, 11, 13, 23, 59)) == date(2025, 11, 10)


def test_week_range_always_has_seven_days():
    d = date(2024, 12, 1)
    for _ in range(120):
        assert len(list(generate_date_range(get_week_start(d), get_week_end(d)))) == 7
        d += timedelta(days=1)


def test_month_boundaries():
    assert get_month_start(date(2024, 2, 17)) == date(2024, 2, 1)
    assert get_month_end(date(2024, 2, 17)) == date(2024, 2, 29)
    assert get_month_end(date(2025, 12, 5)) == date(2025, 12, 31)


def test_date_range_is_inclusive_and_restartable():
    days = generate_date_range("2025-02-27", "2025-03-02")
    assert list(days) == ["2025-02-27", "2025-02-28", "2025-03-01", "2025-03-02"]
    assert list(days) == []

    again = list(generate_date_range("2025-02-27", "2025-03-02"))
    assert len(again) == 4


def test_date_range_single_day_and_reversed_bounds():
    assert list(generate_date_range("2025-11-13", "2025-11-13")) == ["2025-11-13"]
    assert list(generate_date_range("2025-11-14", "2025-11-13")) == []


def test_invalid_date_string_is_rejected():
    with pytest.raises(ValidationError):
        get_week_start("13/11/2025")


def test_previous_and_next_periods():
    assert get_previous_week("2025-11-13") == (date(2025, 11, 3), date(2025, 11, 9))
    assert get_next_week("2025-11-13") == (date(2025, 11, 17), date(2025, 11, 23))
    assert get_previous_month("2025-03-31") == (date(2025, 2, 1), date(2025, 2, 28))
    assert get_next_month("2025-12-15") == (date(2026, 1, 1), date(2026, 1, 31))


def test_week_number_is_iso():
    assert get_week_number("2025-11-13") == 46
    assert get_week_number("2024-12-30") == 1


def test_period_names():
    assert format_period_name("2025-11-10", "2025-11-16", PeriodType.WEEK) == "Week 46 (2025-11-10 - 2025-11-16)"
    assert format_period_name("2025-11-01", "2025-11-30", "month") == "November 2025"
    assert format_period_name("2025-11-03", "2025-11-05", PeriodType.CUSTOM) == "2025-11-03 - 2025-11-05"


def test_date_range_labels():
    assert format_date_range("2025-11-13", "2025-11-19") == "13-19 Nov 2025"
    assert format_date_range("2025-10-27", "2025-11-02") == "27 Oct - 2 Nov 2025"
    assert format_date_range("2025-12-29", "2026-01-04") == "29 Dec 2025 - 4 Jan 2026"


def test_date_range_stops_at_the_last_representable_day():
    assert list(generate_date_range("9999-12-30", "9999-12-31")) == ["9999-12-30", "9999-12-31"]


def test_week_past_the_calendar_end_is_rejected():
    # week of Friday 9999-12-31 would end in year 10000
    assert get_week_start("9999-12-31") == date(9999, 12, 27)
    with pytest.raises(ValidationError):
        get_week_end("9999-12-31")
    with pytest.raises(ValidationError):
        get_next_week("9999-12-20")


def test_month_beyond_the_calendar_is_rejected():
    with pytest.raises(ValidationError):
        get_next_month("9999-12-15")
    with pytest.raises(ValidationError):
        get_previous_month(date(1, 1, 15))
