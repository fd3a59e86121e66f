"""
Analytics API Routes
On-call burden, pay correlation, frequency and rotation views for one schedule.
"""

from dataclasses import asdict

from fastapi import APIRouter, HTTPException, status

from oohpay.infrastructure.observability.logging import get_logger
from oohpay.models.api.compensation_request import AnalyticsRequest, resolve_rates
from oohpay.models.api.compensation_response import AnalyticsSummaryResponse
from oohpay.models.domain.oncall_domain import OnCallPeriodError
from oohpay.services.analytics_service import (
    build_frequency_matrix,
    calculate_burden_distribution,
    calculate_interruption_correlation,
    get_rotation_metrics,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/summary", response_model=AnalyticsSummaryResponse)
async def analytics_summary(request: AnalyticsRequest):
    """All analytics views for the supplied schedule entries."""
    schedule = request.schedule.to_domain()

    try:
        rates = resolve_rates(request.rates)
        frequency = build_frequency_matrix(schedule.entries, schedule.time_zone, request.user_id)
        interruptions = calculate_interruption_correlation(
            schedule.entries, schedule.time_zone, rates
        )
    except OnCallPeriodError as e:
        logger.warning("Rejected analytics request", schedule_id=schedule.id, error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return AnalyticsSummaryResponse(
        burden=[asdict(item) for item in calculate_burden_distribution(schedule.entries)],
        interruptions=[asdict(item) for item in interruptions],
        frequency_matrix=[asdict(cell) for cell in frequency],
        rotation={
            user_id: asdict(metrics)
            for user_id, metrics in get_rotation_metrics(schedule.entries).items()
        },
    )
