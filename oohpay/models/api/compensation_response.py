# oohpay/models/api/compensation_response.py
"""
Compensation API response models.
Used by routes for output formatting.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RatesResponse(BaseModel):
    weekday_rate: float = Field(..., description="Pay per qualifying Mon-Thu")
    weekend_rate: float = Field(..., description="Pay per qualifying Fri-Sun")


class DefaultRatesResponse(BaseModel):
    rates: RatesResponse
    min_rate: float = Field(..., description="Lowest accepted rate")
    max_rate: float = Field(..., description="Highest accepted rate")
    currency: str = Field(..., description="ISO currency code")
    currency_symbol: str = Field(..., description="Display currency symbol")


class EntryCompensationResponse(BaseModel):
    start: datetime
    end: datetime
    duration_hours: float
    weekday_days: int
    weekend_days: int
    compensation: float


class UserCompensationResponse(BaseModel):
    user_id: str
    user_name: str
    entries: list[EntryCompensationResponse]
    total_hours: float
    total_weekdays: int
    total_weekends: int
    total_compensation: float


class ScheduleCompensationResponse(BaseModel):
    schedule: dict[str, str]
    rates: RatesResponse
    users: list[UserCompensationResponse]
    grand_total: float
    skipped_entries: int = Field(default=0, description="Entries dropped as invalid")


class OwnerCompensationResponse(BaseModel):
    owner: str
    weekday_count: int
    weekend_count: int
    total_compensation: float
    total_hours: float
    entry_count: int


class AggregateResponse(BaseModel):
    owners: list[OwnerCompensationResponse]
    grand_total: float
    skipped_entries: int = 0


class EmployeeCompensationResponse(BaseModel):
    name: str
    total_compensation: float
    weekday_days: float
    weekend_days: float
    is_overlapping: bool = False


class ScheduleReportResponse(BaseModel):
    metadata: dict[str, str]
    employees: list[EmployeeCompensationResponse]


class MultiScheduleResponse(BaseModel):
    reports: list[ScheduleReportResponse]
    period: dict[str, str | None]
    grand_total: float


class UserBurdenResponse(BaseModel):
    user_id: str
    user_name: str
    total_on_call_hours: float
    percentage: float


class UserInterruptionResponse(BaseModel):
    user_id: str
    user_name: str
    total_interruptions: int
    total_pay: float


class SlotUserResponse(BaseModel):
    name: str
    count: int


class FrequencyCellResponse(BaseModel):
    day_of_week: int = Field(..., description="0 = Sunday")
    hour: int
    count: int
    users: list[SlotUserResponse] | None = None


class ShiftIntervalResponse(BaseModel):
    start: str
    end: str
    duration_weeks: float


class RotationMetricsResponse(BaseModel):
    user_id: str
    user_name: str
    shift_history: list[ShiftIntervalResponse]
    gap_history: list[float]
    average_rest: float


class AnalyticsSummaryResponse(BaseModel):
    burden: list[UserBurdenResponse]
    interruptions: list[UserInterruptionResponse]
    frequency_matrix: list[FrequencyCellResponse]
    rotation: dict[str, RotationMetricsResponse]
