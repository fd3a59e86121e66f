"""
Domain models for on-call compensation.
"""

from .compensation_domain import (
    CompensationReport,
    OnCallCompensation,
    OwnedPeriod,
    OwnerCompensation,
    RateConfig,
)
from .oncall_domain import (
    InvalidIntervalError,
    InvalidTimezoneError,
    OnCallPeriod,
    OnCallPeriodError,
    OnCallUser,
)
from .schedule_domain import Schedule, ScheduleEntry, ScheduleUser

__all__ = [
    "CompensationReport",
    "InvalidIntervalError",
    "InvalidTimezoneError",
    "OnCallCompensation",
    "OnCallPeriod",
    "OnCallPeriodError",
    "OnCallUser",
    "OwnedPeriod",
    "OwnerCompensation",
    "RateConfig",
    "Schedule",
    "ScheduleEntry",
    "ScheduleUser",
]
