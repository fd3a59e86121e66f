"""
Compensation Service
Turns OOH day counts into money for single periods, users, owner batches
and whole schedules.

Rates are always injected by the caller; nothing here reads settings.
A batch never aborts on a single bad entry: the entry is logged and skipped.
"""

from collections.abc import Hashable, Iterable, Mapping
from typing import Any

from oohpay.infrastructure.observability.logging import get_logger, log_skipped_entry
from oohpay.models.domain.compensation_domain import (
    CompensationReport,
    EntryCompensation,
    OnCallCompensation,
    OwnedPeriod,
    OwnerCompensation,
    RateConfig,
    ScheduleReport,
    UserScheduleSummary,
)
from oohpay.models.domain.oncall_domain import (
    DEFAULT_TIMEZONE,
    OnCallPeriod,
    OnCallUser,
    resolve_timezone,
)
from oohpay.models.domain.schedule_domain import Schedule
from oohpay.services.schedule_service import sort_entries

logger = get_logger(__name__)


class CompensationError(Exception):
    """Custom exception for compensation calculations."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        error_code: str | None = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.owner_id = owner_id
        self.error_code = error_code
        self.recoverable = recoverable


def compensation_for(period: OnCallPeriod, rates: RateConfig) -> float:
    """Unrounded pay for one period."""
    return period.weekday_count * rates.weekday_rate + period.weekend_count * rates.weekend_rate


class OnCallPaymentsCalculator:
    """Computes per-user totals at a fixed rate configuration."""

    def __init__(self, rates: RateConfig):
        self.rates = rates

    def calculate_on_call_payment(self, user: OnCallUser) -> float:
        return (
            user.total_ooh_weekdays * self.rates.weekday_rate
            + user.total_ooh_weekends * self.rates.weekend_rate
        )

    def calculate_on_call_payments(self, users: Iterable[OnCallUser]) -> list[OnCallCompensation]:
        return [
            OnCallCompensation(user=user, total_compensation=self.calculate_on_call_payment(user))
            for user in users
        ]


def _owned_period(entry: OwnedPeriod | Mapping[str, Any]) -> OwnedPeriod:
    if isinstance(entry, OwnedPeriod):
        return entry
    if "owner" not in entry:
        raise CompensationError("Entry has no owner", error_code="missing_owner")
    timezone = entry.get("timezone")
    period = OnCallPeriod(
        entry["start"],
        entry["end"],
        DEFAULT_TIMEZONE if timezone is None else timezone,
    )
    return OwnedPeriod(period=period, owner=entry["owner"])


def _owner_totals(report: CompensationReport, owner: Hashable) -> OwnerCompensation:
    try:
        totals = report.owners.get(owner)
    except TypeError as e:
        raise CompensationError(
            f"Owner {owner!r} cannot be used as a grouping key",
            error_code="unhashable_owner",
        ) from e
    if totals is None:
        totals = OwnerCompensation(owner=owner)
        report.owners[owner] = totals
    return totals


def aggregate(
    entries: Iterable[OwnedPeriod | Mapping[str, Any]],
    rates: RateConfig,
) -> CompensationReport:
    """
    Group entries by owner and sum day counts, pay and elapsed hours.

    Args:
        entries: ``OwnedPeriod`` items or raw ``{start, end, timezone, owner}`` mappings
        rates: Rate configuration to price qualifying days

    Returns:
        CompensationReport with owners in first-seen order. Empty input
        yields an empty report.
    """
    report = CompensationReport()

    for index, entry in enumerate(entries):
        try:
            owned = _owned_period(entry)
            totals = _owner_totals(report, owned.owner)
        except (CompensationError, KeyError, TypeError, ValueError) as e:
            owner = (
                entry.get("owner") if isinstance(entry, Mapping) else getattr(entry, "owner", None)
            )
            log_skipped_entry(owner, str(e), index=index)
            report.skipped_entries += 1
            continue

        totals.weekday_count += owned.period.weekday_count
        totals.weekend_count += owned.period.weekend_count
        totals.total_compensation += compensation_for(owned.period, rates)
        totals.total_hours += owned.period.duration_hours
        totals.entry_count += 1

    logger.info(
        "Compensation aggregated",
        owner_count=len(report.owners),
        skipped_entries=report.skipped_entries,
        grand_total=report.grand_total,
    )
    return report


def build_schedule_report(schedule: Schedule, rates: RateConfig) -> ScheduleReport:
    """
    Per-user compensation for one schedule (the schedule detail view).

    Entries are processed chronologically, so users appear in order of their
    first shift. An unresolvable schedule timezone is a configuration error
    and raises InvalidTimezoneError.
    """
    resolve_timezone(schedule.time_zone)

    report = ScheduleReport(schedule=schedule.metadata(), rates=rates)
    summaries: dict[str, UserScheduleSummary] = {}

    for entry in sort_entries(schedule.entries):
        try:
            period = OnCallPeriod(entry.start, entry.end, schedule.time_zone)
        except (TypeError, ValueError) as e:
            log_skipped_entry(entry.user.id, str(e), schedule_id=schedule.id)
            report.skipped_entries += 1
            continue

        summary = summaries.get(entry.user.id)
        if summary is None:
            summary = UserScheduleSummary(user_id=entry.user.id, user_name=entry.user.display_name)
            summaries[entry.user.id] = summary
            report.users.append(summary)

        summary.entries.append(
            EntryCompensation(
                start=period.since,
                end=period.until,
                duration_hours=period.duration_hours,
                weekday_days=period.weekday_count,
                weekend_days=period.weekend_count,
                compensation=compensation_for(period, rates),
            )
        )

    logger.info(
        "Schedule compensation calculated",
        schedule_id=schedule.id,
        user_count=len(report.users),
        skipped_entries=report.skipped_entries,
        grand_total=report.grand_total,
    )
    return report
