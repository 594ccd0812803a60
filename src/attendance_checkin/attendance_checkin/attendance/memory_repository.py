from __future__ import annotations

import threading
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import calendar_day, now_utc
from .model import AttendanceRecord


class InMemoryAttendanceRepository:
    """Process-lifetime fallback store keyed by record id.

    Mirrors every record the document store accepted, and takes over when the
    document store is unreachable. Nothing survives a restart.
    """

    def __init__(self, tz: ZoneInfo):
        self._tz = tz
        self._records: dict[int, AttendanceRecord] = {}
        self._last_id = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            self._last_id += 1
            return self._last_id

    def reserve_past(self, record_id: int) -> None:
        """Make sure the counter never hands out ``record_id`` or anything below it."""
        with self._lock:
            self._last_id = max(self._last_id, int(record_id))

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            if record.id is None:
                self._last_id += 1
                record = record.with_id(self._last_id)
            else:
                self._last_id = max(self._last_id, record.id)
            self._records[record.id] = record
            return record

    put = add

    def get(self, record_id: int) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._records.get(record_id)

    def list_all(self) -> list[AttendanceRecord]:
        with self._lock:
            records = list(self._records.values())
        # sorted() is stable, so equal timestamps keep insertion order
        return sorted(records, key=lambda r: r.date_time, reverse=True)

    def list_by_date(self, day: date) -> list[AttendanceRecord]:
        return [r for r in self.list_all() if calendar_day(r.date_time, self._tz) == day]

    def has_duplicate_on(self, name: str, day: date) -> bool:
        return any(r.matches_name(name) for r in self.list_by_date(day))

    def has_duplicate_today(self, name: str, today: Optional[date] = None) -> bool:
        if today is None:
            today = calendar_day(now_utc(), self._tz)
        return self.has_duplicate_on(name, today)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
