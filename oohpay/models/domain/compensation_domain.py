# oohpay/models/domain/compensation_domain.py
"""
Compensation Domain Models
Rate configuration and the result shapes produced by the compensation service.
"""

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from oohpay.models.domain.oncall_domain import OnCallPeriod, OnCallUser


class RateConfig(BaseModel, frozen=True):
    """Currency amount paid per qualifying weekday (Mon-Thu) and weekend day (Fri-Sun)."""

    weekday_rate: float = Field(ge=0, allow_inf_nan=False)
    weekend_rate: float = Field(ge=0, allow_inf_nan=False)


@dataclass(slots=True, frozen=True)
class OwnedPeriod:
    """An on-call period attributed to an opaque owner key."""

    period: OnCallPeriod
    owner: Hashable


@dataclass(slots=True)
class OwnerCompensation:
    """Running totals for one owner."""

    owner: Hashable
    weekday_count: int = 0
    weekend_count: int = 0
    total_compensation: float = 0.0
    total_hours: float = 0.0
    entry_count: int = 0

    def to_dict(self) -> dict:
        return {
            "owner": self.owner,
            "weekday_count": self.weekday_count,
            "weekend_count": self.weekend_count,
            "total_compensation": self.total_compensation,
            "total_hours": self.total_hours,
            "entry_count": self.entry_count,
        }


@dataclass(slots=True)
class CompensationReport:
    """Per-owner breakdowns (first-seen order) plus the grand total."""

    owners: dict[Hashable, OwnerCompensation] = field(default_factory=dict)
    skipped_entries: int = 0

    @property
    def grand_total(self) -> float:
        return sum(owner.total_compensation for owner in self.owners.values())

    def sorted_owners(
        self,
        key: Callable[[OwnerCompensation], Any] | None = None,
        reverse: bool = False,
    ) -> list[OwnerCompensation]:
        """Owner breakdowns, first-seen order unless a sort key is given."""
        owners = list(self.owners.values())
        if key is None:
            return owners[::-1] if reverse else owners
        return sorted(owners, key=key, reverse=reverse)


@dataclass(slots=True)
class OnCallCompensation:
    """Total payable to one user across their periods."""

    user: OnCallUser
    total_compensation: float


@dataclass(slots=True)
class EntryCompensation:
    """One schedule entry with its day counts and pay."""

    start: datetime
    end: datetime
    duration_hours: float
    weekday_days: int
    weekend_days: int
    compensation: float


@dataclass(slots=True)
class UserScheduleSummary:
    """A user's chronologically sorted entries within one schedule, with totals."""

    user_id: str
    user_name: str
    entries: list[EntryCompensation] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(entry.duration_hours for entry in self.entries)

    @property
    def total_weekdays(self) -> int:
        return sum(entry.weekday_days for entry in self.entries)

    @property
    def total_weekends(self) -> int:
        return sum(entry.weekend_days for entry in self.entries)

    @property
    def total_compensation(self) -> float:
        return sum(entry.compensation for entry in self.entries)


@dataclass(slots=True)
class ScheduleReport:
    """Compensation for every user on one schedule."""

    schedule: dict
    rates: RateConfig
    users: list[UserScheduleSummary] = field(default_factory=list)
    skipped_entries: int = 0

    @property
    def grand_total(self) -> float:
        return sum(user.total_compensation for user in self.users)
