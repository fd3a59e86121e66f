# oohpay/models/api/compensation_request.py
"""
Compensation API request models.
Used by routes for input validation and conversion to domain models.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from oohpay.config import settings
from oohpay.models.domain.compensation_domain import RateConfig
from oohpay.models.domain.oncall_domain import parse_instant
from oohpay.models.domain.schedule_domain import Schedule, ScheduleEntry, ScheduleUser
from oohpay.services.rates_service import default_rates, is_valid_rate


class RatesRequest(BaseModel):
    """User-supplied rates, bounded by the settings limits."""

    weekday_rate: float = Field(..., description="Pay per qualifying Mon-Thu")
    weekend_rate: float = Field(..., description="Pay per qualifying Fri-Sun")

    @field_validator("weekday_rate", "weekend_rate")
    @classmethod
    def validate_rate(cls, value: float) -> float:
        if not is_valid_rate(value):
            raise ValueError(
                f"Rate must be between {settings.RATE_MIN:g} and {settings.RATE_MAX:g}"
            )
        return value

    def to_domain(self) -> RateConfig:
        return RateConfig(weekday_rate=self.weekday_rate, weekend_rate=self.weekend_rate)


def resolve_rates(rates: RatesRequest | None) -> RateConfig:
    return rates.to_domain() if rates else default_rates()


class ScheduleUserPayload(BaseModel):
    id: str = Field(..., min_length=1, description="PagerDuty user ID")
    name: str | None = Field(None, description="User name")
    summary: str | None = Field(None, description="User summary (display name)")
    email: str | None = Field(None, description="User email")


class ScheduleEntryPayload(BaseModel):
    """A rendered schedule entry; naive datetimes are read as UTC."""

    start: datetime = Field(..., description="Entry start")
    end: datetime = Field(..., description="Entry end")
    user: ScheduleUserPayload | None = Field(None, description="User on call")


class SchedulePayload(BaseModel):
    id: str = Field(..., min_length=1, description="Schedule ID")
    name: str = Field(default="", description="Schedule name")
    html_url: str = Field(default="", description="Schedule URL")
    time_zone: str = Field(default=settings.DEFAULT_TIMEZONE, description="IANA timezone")
    entries: list[ScheduleEntryPayload] = Field(default_factory=list)

    def to_domain(self) -> Schedule:
        # Entries without a user cannot be attributed and are dropped
        return Schedule(
            id=self.id,
            name=self.name,
            time_zone=self.time_zone,
            html_url=self.html_url,
            entries=[
                ScheduleEntry(
                    start=parse_instant(entry.start),
                    end=parse_instant(entry.end),
                    user=ScheduleUser(**entry.user.model_dump()),
                )
                for entry in self.entries
                if entry.user is not None
            ],
        )


class ScheduleCompensationRequest(BaseModel):
    schedule: SchedulePayload
    rates: RatesRequest | None = Field(None, description="Defaults apply when omitted")


class AggregateEntryPayload(BaseModel):
    start: datetime = Field(..., description="Interval start")
    end: datetime = Field(..., description="Interval end")
    timezone: str = Field(default=settings.DEFAULT_TIMEZONE, description="IANA timezone")
    owner: str = Field(..., min_length=1, description="Owner identifier")


class AggregateRequest(BaseModel):
    entries: list[AggregateEntryPayload] = Field(default_factory=list)
    rates: RatesRequest | None = None


class MultiScheduleRequest(BaseModel):
    schedules: list[SchedulePayload] = Field(default_factory=list)
    start_date: datetime | None = Field(None, description="Report start")
    end_date: datetime | None = Field(None, description="Report end")
    rates: RatesRequest | None = None


class AnalyticsRequest(BaseModel):
    schedule: SchedulePayload
    rates: RatesRequest | None = None
    user_id: str | None = Field(None, description="Restrict the frequency matrix to one user")
