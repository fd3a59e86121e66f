"""
Tests for OOH day qualification in OnCallPeriod.
"""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from oohpay.models.domain.oncall_domain import (
    InvalidIntervalError,
    InvalidTimezoneError,
    OnCallPeriod,
    OnCallPeriodError,
)

LONDON = "Europe/London"


def london(*args) -> datetime:
    return datetime(*args, tzinfo=ZoneInfo(LONDON))


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


# Week of Monday 2024-01-15 (GMT, so London == UTC)


def test_weekday_evening_into_next_morning_is_one_weekday():
    period = OnCallPeriod(london(2024, 1, 15, 17, 30), london(2024, 1, 16, 9, 0), LONDON)

    assert period.weekday_count == 1
    assert period.weekend_count == 0
    assert period.ooh_days == (date(2024, 1, 15),)
    assert period.duration_hours == 15.5


def test_friday_evening_counts_as_weekend():
    period = OnCallPeriod(london(2024, 1, 19, 17, 30), london(2024, 1, 20, 9, 0), LONDON)

    assert period.weekday_count == 0
    assert period.weekend_count == 1


def test_thursday_to_monday_spans_one_weekday_and_three_weekend_days():
    period = OnCallPeriod(london(2024, 1, 18, 17, 30), london(2024, 1, 22, 9, 0), LONDON)

    assert period.weekday_count == 1
    assert period.weekend_count == 3
    assert period.ooh_days == (
        date(2024, 1, 18),
        date(2024, 1, 19),
        date(2024, 1, 20),
        date(2024, 1, 21),
    )


def test_office_hours_shift_does_not_qualify():
    period = OnCallPeriod(london(2024, 1, 15, 9, 0), london(2024, 1, 15, 17, 0), LONDON)

    assert period.weekday_count == 0
    assert period.weekend_count == 0
    assert period.is_ooh is False
    assert period.duration_hours == 8


def test_shift_ending_exactly_at_cutoff_does_not_qualify():
    period = OnCallPeriod(utc(2024, 1, 15, 10, 0), utc(2024, 1, 15, 17, 30), "UTC")

    assert period.is_ooh is False


def test_shift_past_cutoff_with_six_hours_qualifies_same_day():
    period = OnCallPeriod(utc(2024, 1, 15, 11, 0), utc(2024, 1, 15, 17, 31), "UTC")

    assert period.weekday_count == 1


def test_exactly_six_hours_past_cutoff_qualifies():
    period = OnCallPeriod(utc(2024, 1, 15, 17, 30), utc(2024, 1, 15, 23, 30), "UTC")

    assert period.weekday_count == 1


def test_one_second_short_of_six_hours_does_not_qualify():
    period = OnCallPeriod(utc(2024, 1, 15, 17, 30), utc(2024, 1, 15, 23, 29, 59), "UTC")

    assert period.weekday_count == 0
    assert period.weekend_count == 0


def test_short_overnight_shift_split_by_midnight_does_not_qualify():
    # 7 hours in total, but only 4h before and 3h after midnight
    period = OnCallPeriod(utc(2024, 1, 19, 20, 0), utc(2024, 1, 20, 3, 0), "UTC")

    assert period.is_ooh is False


def test_full_days_each_count():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 18, 23, 59, 59), "UTC")

    assert period.weekday_count == 4


def test_period_ending_at_midnight_does_not_count_the_next_day():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 16), "UTC")

    assert period.weekday_count == 1
    assert period.ooh_days == (date(2024, 1, 15),)


def test_weekend_days_are_friday_to_sunday():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 21, 23, 59, 59), "UTC")

    assert period.weekday_count == 4
    assert period.weekend_count == 3


def test_multi_week_period_classifies_every_day():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 29), "UTC")

    assert len(period.ooh_days) == 14
    assert period.weekday_count == 8
    assert period.weekend_count == 6
    assert period.weekday_count + period.weekend_count == len(period.ooh_days)


def test_days_are_localized_to_schedule_timezone():
    since = utc(2024, 1, 15, 17, 0)
    until = utc(2024, 1, 15, 23, 30)

    # 17:00-23:30 on Monday in UTC, but 02:00-08:30 on Tuesday in Tokyo
    assert OnCallPeriod(since, until, "UTC").weekday_count == 1
    assert OnCallPeriod(since, until, "Asia/Tokyo").is_ooh is False


def test_summer_time_offsets_apply():
    # 17:30 BST is 16:30 UTC
    period = OnCallPeriod(utc(2024, 7, 15, 16, 30), utc(2024, 7, 16, 8, 0), LONDON)

    assert period.weekday_count == 1
    assert period.ooh_days == (date(2024, 7, 15),)


def test_spring_forward_day_still_counts_as_one_day():
    # Clocks go forward on Sunday 2024-03-31, a 23-hour day
    period = OnCallPeriod(london(2024, 3, 30, 17, 30), london(2024, 4, 1, 9, 0), LONDON)

    assert period.ooh_days == (date(2024, 3, 30), date(2024, 3, 31))
    assert period.weekend_count == 2
    assert period.weekday_count == 0
    assert period.duration_hours == 38.5


def test_fall_back_day_still_counts_as_one_day():
    # Clocks go back on Sunday 2024-10-27, a 25-hour day
    period = OnCallPeriod(london(2024, 10, 27, 0, 0), london(2024, 10, 27, 23, 0), LONDON)

    assert period.ooh_days == (date(2024, 10, 27),)
    assert period.weekend_count == 1
    assert period.duration_hours == 24


def test_accepts_iso_strings_and_naive_utc():
    from_strings = OnCallPeriod("2024-01-15T17:30:00Z", "2024-01-16T09:00:00+00:00", "UTC")
    from_naive = OnCallPeriod(datetime(2024, 1, 15, 17, 30), datetime(2024, 1, 16, 9, 0))

    assert from_strings.weekday_count == 1
    assert from_naive.weekday_count == 1
    assert from_naive.since == utc(2024, 1, 15, 17, 30)
    assert from_naive.timezone == "UTC"


def test_timezone_defaults_to_utc_when_none():
    period = OnCallPeriod(utc(2024, 1, 15, 17, 30), utc(2024, 1, 16, 9, 0), None)

    assert period.timezone == "UTC"


def test_results_are_deterministic():
    args = (london(2024, 1, 18, 17, 30), london(2024, 1, 22, 9, 0), LONDON)
    first = OnCallPeriod(*args)

    for _ in range(5):
        again = OnCallPeriod(*args)
        assert (again.weekday_count, again.weekend_count) == (
            first.weekday_count,
            first.weekend_count,
        )
        assert again.ooh_days == first.ooh_days


def test_counts_are_read_only():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 16), "UTC")

    with pytest.raises(AttributeError):
        period.weekday_count = 5


@pytest.mark.parametrize("timezone", ["Mars/Olympus_Mons", "Not A Zone", "", "../etc/passwd"])
def test_invalid_timezone_fails_fast(timezone):
    with pytest.raises(InvalidTimezoneError) as exc_info:
        OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 16), timezone)

    assert exc_info.value.timezone == timezone


def test_end_before_start_is_rejected():
    with pytest.raises(InvalidIntervalError):
        OnCallPeriod(utc(2024, 1, 16), utc(2024, 1, 15), "UTC")


def test_zero_length_interval_is_rejected():
    moment = utc(2024, 1, 15, 12)

    with pytest.raises(OnCallPeriodError):
        OnCallPeriod(moment, moment + timedelta(0), "UTC")


def test_to_dict_shape():
    period = OnCallPeriod(utc(2024, 1, 15), utc(2024, 1, 16, 23, 59, 59), "UTC")

    assert period.to_dict() == {
        "start": "2024-01-15T00:00:00+00:00",
        "end": "2024-01-16T23:59:59+00:00",
        "timezone": "UTC",
        "is_ooh": True,
        "weekday_count": 2,
        "weekend_count": 0,
    }
