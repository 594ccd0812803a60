from __future__ import annotations

from datetime import date
from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateSubmission(ValidationError):
    """Raised when a name has already checked in on the same calendar day.

    The message always contains "already recorded"; the check-in form matches on it.
    """

    def __init__(self, name: str, day: Optional[date] = None):
        self.name = name
        self.day = day
        when = f"for {day.isoformat()}" if day is not None else "for today"
        super().__init__(f"Attendance for {name} is already recorded {when}.")


class PrimaryStoreUnavailable(Exception):
    """Raised by the document store adapter on any read/write fault.

    Never reaches HTTP callers: the gateway degrades to the fallback store.
    """
