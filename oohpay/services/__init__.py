"""
Service layer for on-call compensation.
"""

from .compensation_service import (
    CompensationError,
    OnCallPaymentsCalculator,
    aggregate,
    build_schedule_report,
    compensation_for,
)
from .multi_schedule_service import build_multi_schedule_report
from .rates_service import default_rates, is_valid_rate

__all__ = [
    "CompensationError",
    "OnCallPaymentsCalculator",
    "aggregate",
    "build_multi_schedule_report",
    "build_schedule_report",
    "compensation_for",
    "default_rates",
    "is_valid_rate",
]
