from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from src.attendance_checkin.attendance_checkin.attendance.gateway import FallbackAttendanceGateway
from src.attendance_checkin.attendance_checkin.attendance.memory_repository import InMemoryAttendanceRepository
from src.attendance_checkin.attendance_checkin.attendance.model import AttendanceRecord
from src.attendance_checkin.attendance_checkin.attendance.service import AttendanceService
from src.attendance_checkin.attendance_checkin.common.datetime_utils import calendar_day
from src.attendance_checkin.attendance_checkin.core.exceptions import PrimaryStoreUnavailable

UTC = ZoneInfo("UTC")


class FixedClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class FakePrimary:
    """Stands in for the Firestore repository."""

    def __init__(self, tz: ZoneInfo = UTC):
        self.tz = tz
        self.records: list[AttendanceRecord] = []
        self.fail_reads = False
        self.fail_writes = False
        self.add_calls = 0
        self.read_calls = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.add_calls += 1
        if self.fail_writes:
            raise PrimaryStoreUnavailable("simulated write outage")
        self.records.append(record)
        return record

    def list_all(self):
        self.read_calls += 1
        if self.fail_reads:
            raise PrimaryStoreUnavailable("simulated read outage")
        return sorted(self.records, key=lambda r: r.date_time, reverse=True)

    def list_by_date(self, day: date):
        return [r for r in self.list_all() if calendar_day(r.date_time, self.tz) == day]

    def go_down(self) -> None:
        self.fail_reads = True
        self.fail_writes = True

    def come_back(self) -> None:
        self.fail_reads = False
        self.fail_writes = False


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def primary():
    return FakePrimary()


@pytest.fixture
def fallback():
    return InMemoryAttendanceRepository(UTC)


@pytest.fixture
def gateway(primary, fallback, clock):
    return FallbackAttendanceGateway(primary, fallback, tz=UTC, clock=clock)


@pytest.fixture
def service(gateway):
    return AttendanceService(gateway)


@pytest.fixture
def payload():
    def make(**overrides):
        body = {
            "name": "Alice",
            "company": "Ramo",
            "supervisor": "Rajesh",
            "signatureData": "data:image/png;base64,AAAA",
        }
        body.update(overrides)
        return body

    return make
