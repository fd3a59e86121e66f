"""
Analytics over on-call entries.

Burden distribution, interruption-vs-pay correlation, a 7x24 on-call
frequency matrix and rotation cadence. Pay figures come from the same
OnCallPeriod engine as the compensation reports, so weekends are Fri-Sun
everywhere.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import timedelta

from oohpay.infrastructure.observability.logging import get_logger, log_skipped_entry
from oohpay.models.domain.compensation_domain import RateConfig
from oohpay.models.domain.oncall_domain import OnCallPeriod, resolve_timezone
from oohpay.models.domain.schedule_domain import ScheduleEntry
from oohpay.services.compensation_service import compensation_for

logger = get_logger(__name__)

DAY_NAMES = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(slots=True)
class UserBurden:
    user_id: str
    user_name: str
    total_on_call_hours: float
    percentage: float


@dataclass(slots=True)
class UserInterruption:
    user_id: str
    user_name: str
    total_interruptions: int  # on-call hours stand in for interruptions
    total_pay: float


@dataclass(slots=True)
class SlotUser:
    name: str
    count: int


@dataclass(slots=True)
class FrequencyMatrixCell:
    day_of_week: int  # 0 = Sunday
    hour: int
    count: int
    users: list[SlotUser] | None = None


@dataclass(slots=True)
class ShiftInterval:
    start: str
    end: str
    duration_weeks: float


@dataclass(slots=True)
class UserRotationMetrics:
    user_id: str
    user_name: str
    shift_history: list[ShiftInterval] = field(default_factory=list)
    gap_history: list[float] = field(default_factory=list)  # weeks of rest between shifts
    average_rest: float = 0.0


def get_day_name(day_of_week: int) -> str:
    if 0 <= day_of_week < len(DAY_NAMES):
        return DAY_NAMES[day_of_week]
    return "Unknown"


def format_hour(hour: int) -> str:
    """24h hour to a 12h label."""
    if hour == 0:
        return "12 AM"
    if hour == 12:
        return "12 PM"
    if hour < 12:
        return f"{hour} AM"
    return f"{hour - 12} PM"


def calculate_burden_distribution(entries: Iterable[ScheduleEntry]) -> list[UserBurden]:
    """Share of total on-call time per user, heaviest first."""
    user_hours: dict[str, list] = {}
    total_hours = 0.0

    for entry in entries:
        hours = entry.duration_hours
        if entry.user.id in user_hours:
            user_hours[entry.user.id][1] += hours
        else:
            user_hours[entry.user.id] = [entry.user.display_name, hours]
        total_hours += hours

    distribution = [
        UserBurden(
            user_id=user_id,
            user_name=name,
            total_on_call_hours=round(hours, 2),
            percentage=round(hours / total_hours * 100, 2) if total_hours > 0 else 0.0,
        )
        for user_id, (name, hours) in user_hours.items()
    ]
    distribution.sort(key=lambda burden: burden.total_on_call_hours, reverse=True)
    return distribution


def calculate_interruption_correlation(
    entries: Iterable[ScheduleEntry],
    timezone: str,
    rates: RateConfig,
) -> list[UserInterruption]:
    """Per-user on-call hours against OOH pay, users in first-seen order."""
    resolve_timezone(timezone)
    user_data: dict[str, list] = {}

    for entry in entries:
        try:
            period = OnCallPeriod(entry.start, entry.end, timezone)
        except ValueError as e:
            log_skipped_entry(entry.user.id, str(e))
            continue

        pay = compensation_for(period, rates)
        if entry.user.id in user_data:
            user_data[entry.user.id][1] += period.duration_hours
            user_data[entry.user.id][2] += pay
        else:
            user_data[entry.user.id] = [entry.user.display_name, period.duration_hours, pay]

    return [
        UserInterruption(
            user_id=user_id,
            user_name=name,
            total_interruptions=round(hours),
            total_pay=round(pay, 2),
        )
        for user_id, (name, hours, pay) in user_data.items()
    ]


def build_frequency_matrix(
    entries: Iterable[ScheduleEntry],
    timezone: str,
    user_id: str | None = None,
) -> list[FrequencyMatrixCell]:
    """
    Count on-call hours per (local weekday, local hour) slot.

    Each entry is walked hour by hour from its start; the slot of every step
    is incremented once for that entry's user.

    Args:
        entries: Schedule entries
        timezone: Schedule timezone used to localize slots
        user_id: Restrict the matrix to one user

    Returns:
        168 cells ordered by day (0 = Sunday) then hour, each with a
        per-user breakdown sorted by count descending.
    """
    tz = resolve_timezone(timezone)
    slots: dict[tuple[int, int], dict[str, SlotUser]] = {}

    for entry in entries:
        if user_id is not None and entry.user.id != user_id:
            continue

        current = entry.start
        while current < entry.end:
            local = current.astimezone(tz)
            key = (local.isoweekday() % 7, local.hour)
            slot_users = slots.setdefault(key, {})
            slot_user = slot_users.get(entry.user.id)
            if slot_user is None:
                slot_user = SlotUser(name=entry.user.display_name, count=0)
                slot_users[entry.user.id] = slot_user
            slot_user.count += 1
            current += timedelta(hours=1)

    cells = []
    for day in range(7):
        for hour in range(24):
            slot_users = slots.get((day, hour))
            users = None
            count = 0
            if slot_users:
                users = sorted(slot_users.values(), key=lambda u: u.count, reverse=True)
                count = sum(u.count for u in users)
            cells.append(FrequencyMatrixCell(day_of_week=day, hour=hour, count=count, users=users))
    return cells


def get_rotation_metrics(entries: Iterable[ScheduleEntry]) -> dict[str, UserRotationMetrics]:
    """Shift lengths and rest gaps (in weeks) per user."""
    by_user: dict[str, list[ScheduleEntry]] = {}
    for entry in entries:
        by_user.setdefault(entry.user.id, []).append(entry)

    metrics = {}
    for user_id, shifts in by_user.items():
        shifts = sorted(shifts, key=lambda entry: entry.start)
        user_metrics = UserRotationMetrics(user_id=user_id, user_name=shifts[0].user.display_name)

        for index, shift in enumerate(shifts):
            user_metrics.shift_history.append(
                ShiftInterval(
                    start=shift.start.isoformat(),
                    end=shift.end.isoformat(),
                    duration_weeks=(shift.end - shift.start) / timedelta(weeks=1),
                )
            )
            if index < len(shifts) - 1:
                gap = shifts[index + 1].start - shift.end
                user_metrics.gap_history.append(gap / timedelta(weeks=1))

        if user_metrics.gap_history:
            user_metrics.average_rest = sum(user_metrics.gap_history) / len(user_metrics.gap_history)
        metrics[user_id] = user_metrics

    return metrics
