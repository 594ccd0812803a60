from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Sequence
from zoneinfo import ZoneInfo

from ..attendance.gateway import FallbackAttendanceGateway
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import parse_iso_date
from ..core.constants import DISPLAY_DATETIME_FORMAT, EXPORT_ALL_LABEL


@dataclass(frozen=True)
class ExportReport:
    """Read-model for the PDF/Excel exporters."""

    label: str
    generated_at: datetime
    records: Sequence[AttendanceRecord]
    tz: ZoneInfo

    @property
    def title(self) -> str:
        return f"Attendance Report - {self.label}"

    def filename(self, extension: str) -> str:
        safe_label = re.sub(r"[^a-zA-Z0-9-]", "-", self.label)
        return f"attendance_report_{safe_label}.{extension}"

    def format_datetime(self, dt: datetime) -> str:
        return dt.astimezone(self.tz).strftime(DISPLAY_DATETIME_FORMAT)

    def rows(self) -> list[dict]:
        return [
            {
                "Date & Time": self.format_datetime(r.date_time),
                "Name": r.name,
                "Company": r.company,
                "Supervisor": r.supervisor,
            }
            for r in self.records
        ]


class ReportService:
    def __init__(self, gateway: FallbackAttendanceGateway):
        self._gateway = gateway

    def build(self, label: str) -> ExportReport:
        """``label`` is a YYYY-MM-DD day, or "all" for every record."""
        if label == EXPORT_ALL_LABEL:
            return self.for_all()
        return self.for_date(parse_iso_date(label))

    def for_date(self, day: date) -> ExportReport:
        return self._report(day.isoformat(), self._gateway.list_by_date(day))

    def for_all(self) -> ExportReport:
        return self._report("All Records", self._gateway.list_all())

    def _report(self, label: str, records: Sequence[AttendanceRecord]) -> ExportReport:
        return ExportReport(
            label=label,
            generated_at=self._gateway.now(),
            records=list(records),
            tz=self._gateway.tz,
        )
