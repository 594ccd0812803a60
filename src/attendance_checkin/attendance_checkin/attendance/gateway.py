from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from typing import Callable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import calendar_day, now_utc
from ..core.exceptions import DuplicateSubmission, PrimaryStoreUnavailable
from .memory_repository import InMemoryAttendanceRepository
from .model import AttendanceRecord, NewAttendance
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class FallbackAttendanceGateway:
    """Single read/write path for attendance records.

    Reads and writes go to the primary repository first. Any
    PrimaryStoreUnavailable, and any empty read, is answered by the in-memory
    fallback, which also mirrors every record the primary store accepted.

    The only cross-record rule is enforced here: one record per name
    (case-insensitive) per calendar day of the reporting timezone.
    """

    def __init__(
        self,
        primary: AttendanceRepository,
        fallback: InMemoryAttendanceRepository,
        *,
        tz: ZoneInfo,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._primary = primary
        self._fallback = fallback
        self._tz = tz
        self._clock = clock
        self._create_lock = threading.Lock()

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return calendar_day(self._clock(), self._tz)

    def create(self, new: NewAttendance) -> AttendanceRecord:
        with self._create_lock:
            day = calendar_day(new.date_time, self._tz)
            primary_records = self._read_primary(self._primary.list_all, "list_all")
            self._reject_duplicate(new.name, day, primary_records)

            record = new.to_record(self._fallback.next_id())
            if primary_records is None:
                # Ids already taken in the primary store are unknown, so the write stays local.
                logger.warning("Primary store listing unavailable, writing %r to fallback storage only", new.name)
                return self._fallback.add(record)

            try:
                stored = self._primary.add(record)
            except PrimaryStoreUnavailable as exc:
                logger.warning("Primary store write failed, using fallback storage: %s", exc)
                # Primary state is unknown; only the fallback mirror is checked.
                self._reject_duplicate(new.name, day, None)
                return self._fallback.add(record)

            return self._fallback.add(stored)

    def list_all(self) -> Sequence[AttendanceRecord]:
        records = self._read_primary(self._primary.list_all, "list_all")
        if not records:
            return self._fallback.list_all()
        return records

    def list_by_date(self, day: date) -> Sequence[AttendanceRecord]:
        records = self._read_primary(lambda: self._primary.list_by_date(day), f"list_by_date({day.isoformat()})")
        if not records:
            return self._fallback.list_by_date(day)
        return records

    def _reject_duplicate(self, name: str, day: date, primary_records: Optional[Sequence[AttendanceRecord]]) -> None:
        duplicate = False
        for r in primary_records or ():
            self._fallback.reserve_past(r.id)
            if r.matches_name(name) and calendar_day(r.date_time, self._tz) == day:
                duplicate = True

        # Records written while the primary store was down live only in the fallback.
        if duplicate or self._fallback.has_duplicate_on(name, day):
            logger.info("Rejected duplicate check-in for %r on %s", name, day.isoformat())
            raise DuplicateSubmission(name, None if day == self.today() else day)

    @staticmethod
    def _read_primary(read: Callable[[], Sequence[AttendanceRecord]], what: str) -> Optional[Sequence[AttendanceRecord]]:
        try:
            records = read()
        except PrimaryStoreUnavailable as exc:
            logger.warning("Primary store %s failed, using fallback storage: %s", what, exc)
            return None
        if not records:
            logger.debug("Primary store %s returned no records, using fallback storage", what)
        return records
