from datetime import UTC, datetime

import pytest

from oohpay.models.domain.oncall_domain import InvalidTimezoneError
from oohpay.models.domain.schedule_domain import Schedule
from oohpay.services.multi_schedule_service import build_multi_schedule_report


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=UTC)


def _schedules(make_entry):
    primary = Schedule(
        id="PRIMARY",
        name="Primary",
        time_zone="UTC",
        entries=[
            make_entry(utc(2024, 1, 15), utc(2024, 1, 16), user_id="alice", name="Alice"),
            make_entry(utc(2024, 1, 19, 17, 30), utc(2024, 1, 20, 9), user_id="bob", name="Bob"),
        ],
    )
    secondary = Schedule(
        id="SECONDARY",
        name="Secondary",
        time_zone="UTC",
        entries=[
            make_entry(utc(2024, 1, 15), utc(2024, 1, 16), user_id="alice", name="Alice"),
        ],
    )
    return primary, secondary


def test_overlapping_cover_is_shared_between_schedules(make_entry, rates):
    primary, secondary = _schedules(make_entry)

    report = build_multi_schedule_report([primary, secondary], rates)

    assert [r.metadata["id"] for r in report.reports] == ["PRIMARY", "SECONDARY"]

    alice_primary, bob = report.reports[0].employees
    assert alice_primary.name == "Alice"
    assert alice_primary.weekday_days == 0.5
    assert alice_primary.total_compensation == 25
    assert alice_primary.is_overlapping is True

    assert bob.name == "Bob"
    assert bob.weekend_days == 1
    assert bob.total_compensation == 75
    assert bob.is_overlapping is False

    (alice_secondary,) = report.reports[1].employees
    assert alice_secondary.total_compensation == 25
    assert alice_secondary.is_overlapping is True

    assert report.grand_total == 125


def test_single_schedule_matches_plain_engine(make_entry, rates):
    schedule = Schedule(
        id="ONLY",
        name="Only",
        time_zone="Europe/London",
        entries=[
            make_entry(utc(2024, 1, 18, 17, 30), utc(2024, 1, 22, 9), user_id="carol", name="Carol")
        ],
    )

    report = build_multi_schedule_report([schedule], rates)

    (carol,) = report.reports[0].employees
    assert carol.weekday_days == 1
    assert carol.weekend_days == 3
    assert carol.total_compensation == 275


def test_report_period_filters_entries(make_entry, rates):
    primary, secondary = _schedules(make_entry)

    report = build_multi_schedule_report(
        [primary, secondary],
        rates,
        since="2024-01-18T00:00:00Z",
        until="2024-01-25T00:00:00Z",
    )

    assert report.period == {
        "start": "2024-01-18T00:00:00+00:00",
        "end": "2024-01-25T00:00:00+00:00",
    }
    assert [e.name for e in report.reports[0].employees] == ["Bob"]
    assert report.reports[1].employees == []


def test_users_without_ooh_days_are_omitted(make_entry, rates):
    schedule = Schedule(
        id="DAY",
        name="Daytime",
        entries=[make_entry(utc(2024, 1, 15, 9), utc(2024, 1, 15, 17), user_id="dave")],
    )

    report = build_multi_schedule_report([schedule], rates)

    assert report.reports[0].employees == []
    assert report.grand_total == 0


@pytest.mark.parametrize("time_zone", ["Mars/Base", ""])
def test_unresolvable_schedule_timezone_raises(make_entry, rates, time_zone):
    primary, _ = _schedules(make_entry)
    broken = Schedule(
        id="BROKEN",
        name="Broken",
        time_zone=time_zone,
        entries=[make_entry(utc(2024, 1, 15, 17, 30), utc(2024, 1, 16, 9), user_id="dave")],
    )

    with pytest.raises(InvalidTimezoneError):
        build_multi_schedule_report([primary, broken], rates)
