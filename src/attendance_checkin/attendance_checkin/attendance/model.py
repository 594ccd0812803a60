from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_utc


@dataclass(frozen=True)
class NewAttendance:
    """Validated check-in submission, not yet persisted."""

    date_time: datetime
    name: str
    company: str
    supervisor: str
    signature_data: str

    def to_record(self, record_id: Optional[int] = None) -> "AttendanceRecord":
        return AttendanceRecord(
            id=record_id,
            date_time=self.date_time,
            name=self.name,
            company=self.company,
            supervisor=self.supervisor,
            signature_data=self.signature_data,
        )


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in. Immutable once persisted.

    ``id`` is None only between construction and storage.
    """

    id: Optional[int]
    date_time: datetime
    name: str
    company: str
    supervisor: str
    signature_data: str

    def with_id(self, record_id: int) -> "AttendanceRecord":
        return replace(self, id=record_id)

    def matches_name(self, name: str) -> bool:
        return self.name.casefold() == name.casefold()

    def to_json(self) -> dict:
        return {
            "id": self.id,
            "dateTime": format_utc(self.date_time),
            "name": self.name,
            "company": self.company,
            "supervisor": self.supervisor,
            "signatureData": self.signature_data,
        }
