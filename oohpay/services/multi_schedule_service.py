"""
Multi-schedule compensation report.

A user can sit on several schedules at once. Each user's timeline is split at
every entry boundary; every segment is evaluated as its own OnCallPeriod (in
the timezone of the first schedule active in it) and its OOH days are shared
equally between the schedules covering it, so overlapping cover is paid once.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from oohpay.infrastructure.observability.logging import get_logger
from oohpay.models.domain.compensation_domain import RateConfig
from oohpay.models.domain.oncall_domain import OnCallPeriod, parse_instant, resolve_timezone
from oohpay.models.domain.schedule_domain import Schedule, ScheduleUser
from oohpay.services.schedule_service import filter_entries_by_date_range

logger = get_logger(__name__)

_SAMPLE_OFFSET = timedelta(milliseconds=1)


@dataclass(slots=True)
class _Interval:
    start: datetime
    end: datetime
    schedule_id: str
    user: ScheduleUser


@dataclass(slots=True)
class _ScheduleShare:
    weekday: float = 0.0
    weekend: float = 0.0
    user: ScheduleUser | None = None

    @property
    def active(self) -> bool:
        return self.weekday > 0 or self.weekend > 0


@dataclass(slots=True)
class EmployeeCompensation:
    name: str
    total_compensation: float
    weekday_days: float
    weekend_days: float
    is_overlapping: bool = False


@dataclass(slots=True)
class ScheduleCompensationReport:
    metadata: dict
    employees: list[EmployeeCompensation] = field(default_factory=list)


@dataclass(slots=True)
class MultiScheduleReport:
    reports: list[ScheduleCompensationReport]
    period: dict

    @property
    def grand_total(self) -> float:
        return sum(
            employee.total_compensation for report in self.reports for employee in report.employees
        )


def _collect_user_intervals(
    schedules: list[Schedule], since: datetime | None, until: datetime | None
) -> dict[str, list[_Interval]]:
    user_intervals: dict[str, list[_Interval]] = {}
    for schedule in schedules:
        entries = schedule.entries
        if since is not None and until is not None:
            entries = filter_entries_by_date_range(entries, since, until)
        for entry in entries:
            if not entry.user or not entry.user.id:
                continue
            user_intervals.setdefault(entry.user.id, []).append(
                _Interval(entry.start, entry.end, schedule.id, entry.user)
            )
    return user_intervals


def _split_user_timeline(
    intervals: list[_Interval],
    time_zones: dict[str, str],
    shares: dict[str, _ScheduleShare],
) -> None:
    points = sorted({i.start for i in intervals} | {i.end for i in intervals})

    for seg_start, seg_end in zip(points, points[1:]):
        midpoint = seg_start + _SAMPLE_OFFSET
        active = [i for i in intervals if i.start <= midpoint and i.end >= midpoint]
        if not active:
            continue

        period = OnCallPeriod(seg_start, seg_end, time_zones[active[0].schedule_id])

        weekday_share = period.weekday_count / len(active)
        weekend_share = period.weekend_count / len(active)
        for interval in active:
            share = shares[interval.schedule_id]
            share.weekday += weekday_share
            share.weekend += weekend_share
            share.user = interval.user


def build_multi_schedule_report(
    schedules: list[Schedule],
    rates: RateConfig,
    since: datetime | str | None = None,
    until: datetime | str | None = None,
) -> MultiScheduleReport:
    """
    Compensation per schedule and employee across overlapping schedules.

    Args:
        schedules: Schedules with rendered entries
        rates: Rate configuration to price qualifying days
        since: Optional report start; entries outside [since, until) are ignored
        until: Optional report end

    Returns:
        MultiScheduleReport with one report per schedule, in input order.
        Day counts may be fractional where schedules overlap.

    Raises:
        InvalidTimezoneError: If any schedule's timezone cannot be resolved
    """
    for schedule in schedules:
        resolve_timezone(schedule.time_zone)

    since = parse_instant(since) if since is not None else None
    until = parse_instant(until) if until is not None else None

    time_zones = {schedule.id: schedule.time_zone for schedule in schedules}
    user_intervals = _collect_user_intervals(schedules, since, until)

    user_shares: dict[str, dict[str, _ScheduleShare]] = {}
    for user_id, intervals in user_intervals.items():
        shares = {schedule.id: _ScheduleShare() for schedule in schedules}
        _split_user_timeline(intervals, time_zones, shares)
        user_shares[user_id] = shares

    reports = []
    for schedule in schedules:
        employees = []
        for shares in user_shares.values():
            share = shares[schedule.id]
            if not share.active or share.user is None:
                continue

            total = share.weekday * rates.weekday_rate + share.weekend * rates.weekend_rate
            active_schedules = sum(1 for s in shares.values() if s.active)
            employees.append(
                EmployeeCompensation(
                    name=share.user.name or share.user.summary or "Unknown User",
                    total_compensation=round(total, 2),
                    weekday_days=round(share.weekday, 2),
                    weekend_days=round(share.weekend, 2),
                    is_overlapping=active_schedules > 1,
                )
            )
        reports.append(ScheduleCompensationReport(metadata=schedule.metadata(), employees=employees))

    report = MultiScheduleReport(
        reports=reports,
        period={
            "start": since.isoformat() if since else None,
            "end": until.isoformat() if until else None,
        },
    )
    logger.info(
        "Multi-schedule report built",
        schedule_count=len(schedules),
        user_count=len(user_shares),
        grand_total=round(report.grand_total, 2),
    )
    return report
