# oohpay/models/domain/schedule_domain.py
"""
Schedule Domain Models
Rendered PagerDuty schedule data as delivered by the fetching collaborator.

These lightweight dataclasses describe the shapes consumed by the
compensation, report and analytics services. They carry no business logic.
"""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class ScheduleUser:
    """The person an on-call entry is attributed to."""

    id: str
    name: str | None = None
    summary: str | None = None
    email: str | None = None

    @property
    def display_name(self) -> str:
        return self.summary or self.name or "Unknown User"


@dataclass(slots=True)
class ScheduleEntry:
    """One rendered schedule entry: ``user`` is on call from ``start`` to ``end``."""

    start: datetime
    end: datetime
    user: ScheduleUser

    @property
    def duration_hours(self) -> float:
        return (self.end - self.start).total_seconds() / 3600


@dataclass(slots=True)
class Schedule:
    """A schedule and its rendered entries; ``time_zone`` applies to every entry."""

    id: str
    name: str
    time_zone: str = "UTC"
    html_url: str = ""
    entries: list[ScheduleEntry] = field(default_factory=list)

    def metadata(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "html_url": self.html_url,
            "time_zone": self.time_zone,
        }
