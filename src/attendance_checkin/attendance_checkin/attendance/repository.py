from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Storage capability shared by the document store and the in-memory fallback."""

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        """Persist ``record`` and return it with ``id`` populated."""

        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        """All records, newest ``date_time`` first."""

        raise NotImplementedError

    def list_by_date(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
