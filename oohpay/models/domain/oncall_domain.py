# oohpay/models/domain/oncall_domain.py
"""
On-call Domain Models
Out-of-hours (OOH) qualification for on-call periods and per-user totals.

A calendar day inside an on-call period is an OOH day when the part of the
period falling on that day (localized to the schedule timezone) ends after
the 17:30 end-of-work cutoff and lasts at least six hours. Qualifying days
are paid at the weekday rate Monday-Thursday and at the weekend rate
Friday-Sunday.
"""

from datetime import UTC, date, datetime, time, timedelta
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_TIMEZONE = "UTC"

END_OF_WORK = time(17, 30)
MINIMUM_OOH_DURATION = timedelta(hours=6)
LAST_MOMENT_OF_DAY = time(23, 59, 59, 999000)

# ISO weekdays (Mon=1 .. Sun=7) paid at the weekend rate
WEEKEND_ISO_DAYS = frozenset({5, 6, 7})


class OnCallPeriodError(ValueError):
    """Base exception for invalid on-call period input."""


class InvalidTimezoneError(OnCallPeriodError):
    """Raised when a timezone identifier cannot be resolved."""

    def __init__(self, timezone: Any):
        super().__init__(f"Unknown or malformed IANA timezone: {timezone!r}")
        self.timezone = timezone


class InvalidIntervalError(OnCallPeriodError):
    """Raised when an on-call period does not end after it starts."""

    def __init__(self, since: datetime, until: datetime):
        super().__init__(
            f"On-call period must end after it starts (since={since.isoformat()}, "
            f"until={until.isoformat()})"
        )
        self.since = since
        self.until = until


def resolve_timezone(timezone: str | None) -> ZoneInfo:
    """Resolve an IANA identifier, failing fast instead of falling back to UTC."""
    if timezone is None:
        timezone = DEFAULT_TIMEZONE
    if not isinstance(timezone, str) or not timezone.strip():
        raise InvalidTimezoneError(timezone)
    try:
        return ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimezoneError(timezone) from e


def parse_instant(value: datetime | str) -> datetime:
    """
    Normalize an ISO-8601 string or datetime to an aware UTC datetime.

    Naive values are taken to be UTC.
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise TypeError(f"Expected datetime or ISO-8601 string, got {type(value).__name__}")
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _local_instant(day: date, moment: time, tz: ZoneInfo) -> datetime:
    # Wall-clock time on ``day`` in ``tz``, returned in UTC so that comparisons
    # and subtraction see real elapsed time across DST transitions.
    return datetime.combine(day, moment, tzinfo=tz).astimezone(UTC)


class OnCallPeriod:
    """
    One on-call interval ``[since, until)`` in a schedule timezone.

    OOH days are computed once at construction; the object is immutable.
    """

    __slots__ = ("_since", "_until", "_timezone", "_ooh_days", "_weekday_count", "_weekend_count")

    def __init__(
        self,
        since: datetime | str,
        until: datetime | str,
        timezone: str | None = DEFAULT_TIMEZONE,
    ):
        tz = resolve_timezone(timezone)
        since_utc = parse_instant(since)
        until_utc = parse_instant(until)
        if until_utc <= since_utc:
            raise InvalidIntervalError(since_utc, until_utc)

        self._since = since_utc
        self._until = until_utc
        self._timezone = tz.key
        self._ooh_days = tuple(self._scan_ooh_days(since_utc, until_utc, tz))
        self._weekday_count = sum(
            1 for day in self._ooh_days if day.isoweekday() not in WEEKEND_ISO_DAYS
        )
        self._weekend_count = len(self._ooh_days) - self._weekday_count

    @staticmethod
    def _scan_ooh_days(since: datetime, until: datetime, tz: ZoneInfo) -> list[date]:
        ooh_days = []
        day = since.astimezone(tz).date()
        last_day = until.astimezone(tz).date()

        while day <= last_day:
            shift_start = max(_local_instant(day, time.min, tz), since)
            shift_end = min(_local_instant(day, LAST_MOMENT_OF_DAY, tz), until)

            past_cutoff = shift_end > _local_instant(day, END_OF_WORK, tz)
            long_enough = shift_end - shift_start >= MINIMUM_OOH_DURATION
            if past_cutoff and long_enough:
                ooh_days.append(day)

            day += timedelta(days=1)

        return ooh_days

    @property
    def since(self) -> datetime:
        return self._since

    @property
    def until(self) -> datetime:
        return self._until

    @property
    def timezone(self) -> str:
        return self._timezone

    @property
    def ooh_days(self) -> tuple[date, ...]:
        """Qualifying local calendar dates, in order."""
        return self._ooh_days

    @property
    def weekday_count(self) -> int:
        return self._weekday_count

    @property
    def weekend_count(self) -> int:
        return self._weekend_count

    @property
    def is_ooh(self) -> bool:
        return bool(self._ooh_days)

    @property
    def duration_hours(self) -> float:
        """Elapsed hours, regardless of qualification."""
        return (self._until - self._since).total_seconds() / 3600

    def to_dict(self) -> dict:
        return {
            "start": self._since.isoformat(),
            "end": self._until.isoformat(),
            "timezone": self._timezone,
            "is_ooh": self.is_ooh,
            "weekday_count": self._weekday_count,
            "weekend_count": self._weekend_count,
        }

    def __repr__(self) -> str:
        return (
            f"OnCallPeriod(since={self._since.isoformat()}, until={self._until.isoformat()}, "
            f"timezone={self._timezone!r}, weekdays={self._weekday_count}, "
            f"weekends={self._weekend_count})"
        )


class OnCallUser:
    """Domain model for a person and the on-call periods attributed to them."""

    def __init__(
        self,
        id: str,
        name: str,
        periods: list[OnCallPeriod] | None = None,
        email: str | None = None,
    ):
        self.id = id
        self.name = name
        self.periods = list(periods or [])
        self.email = email

    @property
    def total_ooh_weekdays(self) -> int:
        return sum(period.weekday_count for period in self.periods)

    @property
    def total_ooh_weekends(self) -> int:
        return sum(period.weekend_count for period in self.periods)

    @property
    def ooh_periods(self) -> list[OnCallPeriod]:
        """Periods containing at least one qualifying day."""
        return [period for period in self.periods if period.is_ooh]

    @property
    def total_duration_hours(self) -> float:
        return sum(period.duration_hours for period in self.periods)

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "total_ooh_weekdays": self.total_ooh_weekdays,
            "total_ooh_weekends": self.total_ooh_weekends,
            "total_duration_hours": self.total_duration_hours,
            "periods": [period.to_dict() for period in self.periods],
        }
