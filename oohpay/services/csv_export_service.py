"""
CSV export of schedule compensation.

Layout per schedule: a header block (name, URL, timezone), a blank line,
the column header and one row per user.
"""

import csv
import io
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from oohpay.config import settings
from oohpay.models.domain.compensation_domain import OnCallCompensation, ScheduleReport


@dataclass(slots=True)
class CsvExportRow:
    user_name: str
    total_compensation: float
    weekday_days: float
    weekend_days: float


@dataclass(slots=True)
class CsvExportData:
    schedule_name: str
    schedule_url: str
    timezone: str
    rows: list[CsvExportRow] = field(default_factory=list)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 2))


def generate_csv(data: CsvExportData) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([])
    writer.writerow(["Schedule name:", data.schedule_name])
    writer.writerow(["Schedule URL:", data.schedule_url])
    writer.writerow(["Using timezone:", data.timezone])
    writer.writerow([])
    writer.writerow(
        [
            "User",
            f"Total Compensation ({settings.CURRENCY_SYMBOL})",
            "Weekdays (Mon-Thu)",
            "Weekends (Fri-Sun)",
        ]
    )
    for row in data.rows:
        writer.writerow(
            [
                row.user_name,
                _format_number(row.total_compensation),
                _format_number(row.weekday_days),
                _format_number(row.weekend_days),
            ]
        )

    return buffer.getvalue()


def compensation_to_csv_data(
    compensations: Iterable[OnCallCompensation],
    schedule_name: str,
    schedule_url: str,
    timezone: str,
) -> CsvExportData:
    return CsvExportData(
        schedule_name=schedule_name,
        schedule_url=schedule_url,
        timezone=timezone,
        rows=[
            CsvExportRow(
                user_name=comp.user.name,
                total_compensation=comp.total_compensation,
                weekday_days=comp.user.total_ooh_weekdays,
                weekend_days=comp.user.total_ooh_weekends,
            )
            for comp in compensations
        ],
    )


def schedule_report_to_csv_data(report: ScheduleReport) -> CsvExportData:
    return CsvExportData(
        schedule_name=report.schedule["name"],
        schedule_url=report.schedule["html_url"],
        timezone=report.schedule["time_zone"],
        rows=[
            CsvExportRow(
                user_name=user.user_name,
                total_compensation=user.total_compensation,
                weekday_days=user.total_weekdays,
                weekend_days=user.total_weekends,
            )
            for user in report.users
        ],
    )


def combine_csv_data(items: Iterable[CsvExportData]) -> str:
    """Concatenate several schedule exports into one document."""
    return "\n".join(generate_csv(item) for item in items)


def generate_csv_filename(schedule_name: str, on: date | None = None) -> str:
    sanitized = re.sub(r"[^a-z0-9]", "-", schedule_name, flags=re.IGNORECASE).lower()
    on = on or datetime.now(UTC).date()
    return f"{sanitized}-oncall-{on.isoformat()}.csv"
