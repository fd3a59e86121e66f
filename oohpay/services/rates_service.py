"""
Rate management helpers.

The compensation engine accepts any finite non-negative rate. The bounds
checked here belong to the settings collaborator (forms, HTTP input).
"""

import math

from oohpay.config import settings
from oohpay.models.domain.compensation_domain import RateConfig


def is_valid_rate(value) -> bool:
    """
    True if ``value`` is a number (or numeric string) within the configured bounds.

    Examples:
        is_valid_rate(50)         -> True
        is_valid_rate("75")       -> True
        is_valid_rate(-10)        -> False (below RATE_MIN)
        is_valid_rate("invalid")  -> False
    """
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return False
    if not isinstance(value, int | float) or not math.isfinite(value):
        return False
    return settings.RATE_MIN <= value <= settings.RATE_MAX


def default_rates() -> RateConfig:
    """Application default rates, used when a caller supplies none."""
    return RateConfig(
        weekday_rate=settings.DEFAULT_WEEKDAY_RATE,
        weekend_rate=settings.DEFAULT_WEEKEND_RATE,
    )
