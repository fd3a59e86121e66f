"""
Schedule transformation utilities.
Turns rendered schedule entries into OnCallPeriod / OnCallUser objects.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from oohpay.infrastructure.observability.logging import get_logger, log_skipped_entry
from oohpay.models.domain.oncall_domain import OnCallPeriod, OnCallUser, parse_instant
from oohpay.models.domain.schedule_domain import Schedule, ScheduleEntry, ScheduleUser

logger = get_logger(__name__)


def entries_from_payload(raw_entries: Iterable[Mapping[str, Any]]) -> list[ScheduleEntry]:
    """
    Build entries from raw PagerDuty-style dicts.

    Entries without a user id or with unparseable dates are dropped and logged,
    so the compensation engine only ever sees well-formed instants.
    """
    entries = []
    for raw in raw_entries:
        user_data = raw.get("user") or {}
        user_id = user_data.get("id")
        if not user_id:
            log_skipped_entry(None, "missing user", start=raw.get("start"))
            continue

        try:
            start = parse_instant(raw["start"])
            end = parse_instant(raw["end"])
        except (KeyError, TypeError, ValueError) as e:
            log_skipped_entry(user_id, f"unparseable dates: {e}")
            continue

        entries.append(
            ScheduleEntry(
                start=start,
                end=end,
                user=ScheduleUser(
                    id=user_id,
                    name=user_data.get("name"),
                    summary=user_data.get("summary"),
                    email=user_data.get("email"),
                ),
            )
        )
    return entries


def filter_entries_by_date_range(
    entries: Iterable[ScheduleEntry], since: datetime, until: datetime
) -> list[ScheduleEntry]:
    """Entries overlapping ``[since, until)``."""
    since = parse_instant(since)
    until = parse_instant(until)
    return [entry for entry in entries if entry.start < until and entry.end > since]


def sort_entries(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    """Entries in chronological order of start."""
    return sorted(entries, key=lambda entry: entry.start)


def consolidate_user_periods(
    entries: Iterable[ScheduleEntry], timezone: str
) -> dict[str, list[OnCallPeriod]]:
    """Group entries by user id as OnCallPeriods in ``timezone``."""
    user_periods: dict[str, list[OnCallPeriod]] = {}
    for entry in entries:
        period = OnCallPeriod(entry.start, entry.end, timezone)
        user_periods.setdefault(entry.user.id, []).append(period)
    return user_periods


def extract_on_call_users(schedule: Schedule) -> list[OnCallUser]:
    """One OnCallUser per distinct user on the schedule, in first-seen order."""
    users: dict[str, OnCallUser] = {}
    for entry in schedule.entries:
        period = OnCallPeriod(entry.start, entry.end, schedule.time_zone)
        user = users.get(entry.user.id)
        if user is None:
            user = OnCallUser(entry.user.id, entry.user.display_name, email=entry.user.email)
            users[entry.user.id] = user
        user.periods.append(period)

    logger.debug("Extracted on-call users", schedule_id=schedule.id, user_count=len(users))
    return list(users.values())


def merge_on_call_users(users: Iterable[OnCallUser]) -> list[OnCallUser]:
    """Merge users sharing an id (e.g. across schedules), concatenating their periods."""
    merged: dict[str, OnCallUser] = {}
    for user in users:
        existing = merged.get(user.id)
        if existing is None:
            merged[user.id] = OnCallUser(user.id, user.name, list(user.periods), user.email)
        else:
            existing.periods.extend(user.periods)
    return list(merged.values())
