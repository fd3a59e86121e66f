from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from oohpay.models.domain.compensation_domain import RateConfig
from oohpay.models.domain.schedule_domain import Schedule, ScheduleEntry, ScheduleUser

LONDON = "Europe/London"


def local(timezone: str, *args) -> datetime:
    """Aware datetime from local wall-clock fields."""
    return datetime(*args, tzinfo=ZoneInfo(timezone))


@pytest.fixture
def rates():
    return RateConfig(weekday_rate=50, weekend_rate=75)


@pytest.fixture
def make_entry():
    def _make(start, end, user_id="user-1", name="Alice Example"):
        return ScheduleEntry(start=start, end=end, user=ScheduleUser(id=user_id, summary=name))

    return _make


@pytest.fixture
def london_schedule(make_entry):
    # Week of Monday 2024-01-15; London is on GMT in January
    return Schedule(
        id="PSCHED1",
        name="Platform Primary",
        time_zone=LONDON,
        html_url="https://example.pagerduty.com/schedules/PSCHED1",
        entries=[
            make_entry(local(LONDON, 2024, 1, 19, 17, 30), local(LONDON, 2024, 1, 20, 9, 0)),
            make_entry(
                local(LONDON, 2024, 1, 15, 17, 30),
                local(LONDON, 2024, 1, 16, 9, 0),
                user_id="user-2",
                name="Bob Example",
            ),
            make_entry(local(LONDON, 2024, 1, 15, 9, 0), local(LONDON, 2024, 1, 15, 17, 0)),
        ],
    )
