from datetime import UTC, datetime

from oohpay.models.domain.oncall_domain import OnCallPeriod, OnCallUser


def utc_period(start: str, end: str) -> OnCallPeriod:
    return OnCallPeriod(
        datetime.fromisoformat(start).replace(tzinfo=UTC),
        datetime.fromisoformat(end).replace(tzinfo=UTC),
        "UTC",
    )


def test_user_without_periods_has_zero_totals():
    user = OnCallUser("user1", "Jane Doe", [])

    assert user.periods == []
    assert user.email is None
    assert user.total_ooh_weekdays == 0
    assert user.total_ooh_weekends == 0
    assert user.total_duration_hours == 0
    assert user.ooh_periods == []


def test_totals_sum_across_periods():
    user = OnCallUser(
        "user1",
        "Jane Doe",
        [
            utc_period("2024-01-15T00:00:00", "2024-01-16T23:59:59"),  # Mon-Tue
            utc_period("2024-01-19T00:00:00", "2024-01-21T23:59:59"),  # Fri-Sun
        ],
        email="jane@example.com",
    )

    assert user.total_ooh_weekdays == 2
    assert user.total_ooh_weekends == 3
    assert user.email == "jane@example.com"


def test_ooh_periods_excludes_short_daytime_cover():
    ooh = utc_period("2024-01-15T00:00:00", "2024-01-16T23:59:59")
    daytime = utc_period("2024-01-17T09:00:00", "2024-01-17T10:00:00")

    user = OnCallUser("user1", "Jane Doe", [ooh, daytime])

    assert user.ooh_periods == [ooh]
    assert user.total_ooh_weekdays == 2


def test_total_duration_includes_non_ooh_periods():
    user = OnCallUser(
        "user1",
        "Jane Doe",
        [
            utc_period("2024-01-15T00:00:00", "2024-01-16T00:00:00"),  # 24h, OOH
            utc_period("2024-01-17T09:00:00", "2024-01-17T10:00:00"),  # 1h, not OOH
        ],
    )

    assert user.total_duration_hours == 25


def test_to_dict_includes_period_details():
    user = OnCallUser(
        "user1", "Jane Doe", [utc_period("2024-01-15T00:00:00", "2024-01-16T23:59:59")]
    )

    data = user.to_dict()

    assert data["id"] == "user1"
    assert data["email"] is None
    assert data["total_ooh_weekdays"] == 2
    assert data["total_ooh_weekends"] == 0
    assert data["periods"][0]["is_ooh"] is True
    assert data["periods"][0]["timezone"] == "UTC"
    assert data["periods"][0]["weekday_count"] == 2
