"""
Compensation API Routes
HTTP endpoints exposing the OOH compensation engine. Callers supply schedule
data and rates in the request body; nothing is fetched or stored.
"""

from fastapi import APIRouter, HTTPException, Response, status

from oohpay.config import settings
from oohpay.infrastructure.observability.logging import get_logger
from oohpay.models.api.compensation_request import (
    AggregateRequest,
    MultiScheduleRequest,
    ScheduleCompensationRequest,
    resolve_rates,
)
from oohpay.models.api.compensation_response import (
    AggregateResponse,
    DefaultRatesResponse,
    EmployeeCompensationResponse,
    EntryCompensationResponse,
    MultiScheduleResponse,
    OwnerCompensationResponse,
    RatesResponse,
    ScheduleCompensationResponse,
    ScheduleReportResponse,
    UserCompensationResponse,
)
from oohpay.models.domain.compensation_domain import ScheduleReport
from oohpay.models.domain.oncall_domain import OnCallPeriodError
from oohpay.services.compensation_service import (
    CompensationError,
    aggregate,
    build_schedule_report,
)
from oohpay.services.csv_export_service import (
    generate_csv,
    generate_csv_filename,
    schedule_report_to_csv_data,
)
from oohpay.services.multi_schedule_service import build_multi_schedule_report
from oohpay.services.rates_service import default_rates

logger = get_logger(__name__)

router = APIRouter(tags=["compensation"])


def _schedule_response(report: ScheduleReport) -> ScheduleCompensationResponse:
    return ScheduleCompensationResponse(
        schedule=report.schedule,
        rates=RatesResponse(**report.rates.model_dump()),
        users=[
            UserCompensationResponse(
                user_id=user.user_id,
                user_name=user.user_name,
                entries=[
                    EntryCompensationResponse(
                        start=entry.start,
                        end=entry.end,
                        duration_hours=entry.duration_hours,
                        weekday_days=entry.weekday_days,
                        weekend_days=entry.weekend_days,
                        compensation=entry.compensation,
                    )
                    for entry in user.entries
                ],
                total_hours=user.total_hours,
                total_weekdays=user.total_weekdays,
                total_weekends=user.total_weekends,
                total_compensation=user.total_compensation,
            )
            for user in report.users
        ],
        grand_total=report.grand_total,
        skipped_entries=report.skipped_entries,
    )


def _build_report(request: ScheduleCompensationRequest) -> ScheduleReport:
    try:
        return build_schedule_report(request.schedule.to_domain(), resolve_rates(request.rates))
    except OnCallPeriodError as e:
        logger.warning(
            "Rejected schedule compensation request",
            schedule_id=request.schedule.id,
            error=str(e),
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/rates/defaults", response_model=DefaultRatesResponse)
async def get_default_rates():
    """Default rates and the accepted bounds for user-supplied rates."""
    return DefaultRatesResponse(
        rates=RatesResponse(**default_rates().model_dump()),
        min_rate=settings.RATE_MIN,
        max_rate=settings.RATE_MAX,
        currency=settings.CURRENCY,
        currency_symbol=settings.CURRENCY_SYMBOL,
    )


@router.post("/compensation/schedule", response_model=ScheduleCompensationResponse)
async def calculate_schedule_compensation(request: ScheduleCompensationRequest):
    """Per-user OOH compensation for one schedule."""
    try:
        report = _build_report(request)
        return _schedule_response(report)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            "Error calculating schedule compensation",
            schedule_id=request.schedule.id,
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate compensation",
        )


@router.post("/compensation/schedule/csv")
async def export_schedule_compensation(request: ScheduleCompensationRequest):
    """Schedule compensation as a CSV download."""
    report = _build_report(request)
    filename = generate_csv_filename(request.schedule.name or request.schedule.id)
    return Response(
        content=generate_csv(schedule_report_to_csv_data(report)),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/compensation/aggregate", response_model=AggregateResponse)
async def aggregate_compensation(request: AggregateRequest):
    """Totals per owner for a flat list of intervals."""
    try:
        report = aggregate(
            [entry.model_dump() for entry in request.entries],
            resolve_rates(request.rates),
        )

        return AggregateResponse(
            owners=[
                OwnerCompensationResponse(**owner.to_dict()) for owner in report.sorted_owners()
            ],
            grand_total=report.grand_total,
            skipped_entries=report.skipped_entries,
        )

    except CompensationError as e:
        logger.warning("Rejected aggregate request", error=str(e), error_code=e.error_code)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Error aggregating compensation", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to aggregate compensation",
        )


@router.post("/reports/multi-schedule", response_model=MultiScheduleResponse)
async def multi_schedule_report(request: MultiScheduleRequest):
    """Compensation per schedule with overlapping cover shared between schedules."""
    if not request.schedules:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid schedules")
    if len(request.schedules) > settings.MAX_SCHEDULES_PER_REPORT:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.MAX_SCHEDULES_PER_REPORT} schedules per report",
        )

    try:
        report = build_multi_schedule_report(
            [schedule.to_domain() for schedule in request.schedules],
            resolve_rates(request.rates),
            since=request.start_date,
            until=request.end_date,
        )

        return MultiScheduleResponse(
            reports=[
                ScheduleReportResponse(
                    metadata=schedule_report.metadata,
                    employees=[
                        EmployeeCompensationResponse(
                            name=employee.name,
                            total_compensation=employee.total_compensation,
                            weekday_days=employee.weekday_days,
                            weekend_days=employee.weekend_days,
                            is_overlapping=employee.is_overlapping,
                        )
                        for employee in schedule_report.employees
                    ],
                )
                for schedule_report in report.reports
            ],
            period=report.period,
            grand_total=round(report.grand_total, 2),
        )

    except OnCallPeriodError as e:
        logger.warning("Rejected multi-schedule report request", error=str(e))
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error("Multi-schedule report failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build multi-schedule report",
        )
