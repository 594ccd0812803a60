from __future__ import annotations

import logging
import zlib
from datetime import date, datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from firebase_admin import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from ..common.datetime_utils import day_bounds_utc
from ..core.exceptions import PrimaryStoreUnavailable
from ..database.connection import FirestoreConnection
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class FirestoreAttendanceRepository:
    """Primary store: one Firestore document per attendance record.

    Every fault (credentials, network, quota, malformed data) surfaces as
    PrimaryStoreUnavailable so the gateway can degrade to the fallback store.
    """

    def __init__(self, conn: FirestoreConnection, tz: ZoneInfo):
        self._conn = conn
        self._tz = tz

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        if record.id is None:
            raise ValueError("record id must be assigned before writing to Firestore")
        try:
            _, doc_ref = self._conn.collection().add(self._to_document(record))
        except Exception as exc:
            raise PrimaryStoreUnavailable(f"Firestore add failed: {exc}") from exc
        logger.debug("Stored attendance %s as document %s", record.id, doc_ref.id)
        return record

    def list_all(self) -> list[AttendanceRecord]:
        try:
            query = self._conn.collection().order_by("dateTime", direction=firestore.Query.DESCENDING)
            return [self._from_snapshot(doc) for doc in query.stream()]
        except Exception as exc:
            raise PrimaryStoreUnavailable(f"Firestore list failed: {exc}") from exc

    def list_by_date(self, day: date) -> list[AttendanceRecord]:
        start, end = day_bounds_utc(day, self._tz)
        try:
            query = (
                self._conn.collection()
                .where(filter=FieldFilter("dateTime", ">=", start))
                .where(filter=FieldFilter("dateTime", "<=", end))
                .order_by("dateTime", direction=firestore.Query.DESCENDING)
            )
            return [self._from_snapshot(doc) for doc in query.stream()]
        except Exception as exc:
            raise PrimaryStoreUnavailable(f"Firestore list for {day.isoformat()} failed: {exc}") from exc

    @staticmethod
    def _to_document(record: AttendanceRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "dateTime": record.date_time.astimezone(timezone.utc),
            "name": record.name,
            "company": record.company,
            "supervisor": record.supervisor,
            "signatureData": record.signature_data,
        }

    @staticmethod
    def _from_snapshot(doc) -> AttendanceRecord:
        data = doc.to_dict() or {}
        record_id = data.get("id")
        if not isinstance(record_id, int):
            # Documents written outside this service carry no numeric id; negative
            # values keep them clear of the counter that numbers new check-ins.
            record_id = -(zlib.crc32(doc.id.encode("utf-8")) + 1)

        date_time: datetime = data["dateTime"]
        if date_time.tzinfo is None:
            date_time = date_time.replace(tzinfo=timezone.utc)

        return AttendanceRecord(
            id=record_id,
            date_time=date_time,
            name=data["name"],
            company=data["company"],
            supervisor=data["supervisor"],
            signature_data=data["signatureData"],
        )
