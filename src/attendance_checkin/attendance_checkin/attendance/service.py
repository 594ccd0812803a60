from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_COMPANY_OPTIONS, DEFAULT_SUPERVISOR_OPTIONS, OTHER_OPTION
from ..core.exceptions import ValidationError
from .gateway import FallbackAttendanceGateway
from .model import AttendanceRecord, NewAttendance


@dataclass(frozen=True)
class FormOptions:
    companies: tuple[str, ...]
    supervisors: tuple[str, ...]

    def to_json(self) -> dict:
        return {
            "companies": list(self.companies),
            "supervisors": list(self.supervisors),
            "other": OTHER_OPTION,
        }


class AttendanceService:
    """Use cases of the check-in form and the records view."""

    def __init__(
        self,
        gateway: FallbackAttendanceGateway,
        *,
        company_options: Optional[Sequence[str]] = None,
        supervisor_options: Optional[Sequence[str]] = None,
    ):
        self._gateway = gateway
        self._options = FormOptions(
            companies=tuple(company_options or DEFAULT_COMPANY_OPTIONS),
            supervisors=tuple(supervisor_options or DEFAULT_SUPERVISOR_OPTIONS),
        )

    def check_in(self, payload: Mapping[str, Any]) -> AttendanceRecord:
        new = self.parse_submission(payload)
        return self._gateway.create(new)

    def parse_submission(self, payload: Mapping[str, Any]) -> NewAttendance:
        """Validate a JSON body from the form. Touches no store."""
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")

        name = require_non_empty(payload.get("name"), "name")
        company = self._resolve_choice(payload, "company", "otherCompany")
        supervisor = self._resolve_choice(payload, "supervisor", "otherSupervisor")
        signature_data = require_non_empty(payload.get("signatureData"), "signatureData")

        raw_dt = payload.get("dateTime")
        if raw_dt is None or (isinstance(raw_dt, str) and not raw_dt.strip()):
            date_time = self._gateway.now()
        else:
            date_time = parse_iso_datetime(raw_dt, self._gateway.tz)

        return NewAttendance(
            date_time=date_time,
            name=name,
            company=company,
            supervisor=supervisor,
            signature_data=signature_data,
        )

    def list_records(self) -> Sequence[AttendanceRecord]:
        return self._gateway.list_all()

    def list_records_by_date(self, value: str) -> Sequence[AttendanceRecord]:
        return self._gateway.list_by_date(parse_iso_date(value))

    def form_options(self) -> FormOptions:
        return self._options

    @staticmethod
    def _resolve_choice(payload: Mapping[str, Any], field: str, other_field: str) -> str:
        value = require_non_empty(payload.get(field), field)
        # "other" means the free-text value typed next to the radio buttons
        if value.lower() == OTHER_OPTION:
            return require_non_empty(payload.get(other_field), other_field)
        return value
