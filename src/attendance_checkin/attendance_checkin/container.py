from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Sequence

from .attendance.firestore_repository import FirestoreAttendanceRepository
from .attendance.gateway import FallbackAttendanceGateway
from .attendance.memory_repository import InMemoryAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import load_timezone, now_utc
from .core.constants import DEFAULT_REPORT_TIMEZONE
from .database.connection import FirebaseConfig, FirestoreConnection
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[FirestoreConnection]

    primary_repo: AttendanceRepository
    fallback_repo: InMemoryAttendanceRepository
    gateway: FallbackAttendanceGateway

    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    firebase_config: Optional[dict] = None,
    report_timezone: str = DEFAULT_REPORT_TIMEZONE,
    company_options: Optional[Sequence[str]] = None,
    supervisor_options: Optional[Sequence[str]] = None,
    primary_repo: Optional[AttendanceRepository] = None,
    clock: Callable[[], datetime] = now_utc,
) -> Container:
    """Wire the object graph.

    ``primary_repo`` replaces the Firestore adapter (tests, local runs).
    """
    tz = load_timezone(report_timezone)

    conn = None
    if primary_repo is None:
        conn = FirestoreConnection(FirebaseConfig.from_mapping(firebase_config or {}))
        primary_repo = FirestoreAttendanceRepository(conn, tz)

    # One fallback store per process; it lives as long as the container.
    fallback_repo = InMemoryAttendanceRepository(tz)
    gateway = FallbackAttendanceGateway(primary_repo, fallback_repo, tz=tz, clock=clock)

    attendance_service = AttendanceService(
        gateway,
        company_options=company_options,
        supervisor_options=supervisor_options,
    )
    report_service = ReportService(gateway)

    return Container(
        conn=conn,
        primary_repo=primary_repo,
        fallback_repo=fallback_repo,
        gateway=gateway,
        attendance_service=attendance_service,
        report_service=report_service,
    )
