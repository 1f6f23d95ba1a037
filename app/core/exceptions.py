"""Structured error types shared by the scheduling services and the API."""
from enum import Enum
from typing import List, Optional

from fastapi import HTTPException
from pydantic import BaseModel


class ErrorKind(str, Enum):
    """Kinds of problems a booking operation can report."""

    MISSING_FIELD = "missing_field"
    INVALID_PHONE = "invalid_phone"
    PAST_DATE = "past_date"
    OUTSIDE_HOURS = "outside_hours"
    INVALID_TIME_RANGE = "invalid_time_range"
    BLOCKED_DAY = "blocked_day"
    UNKNOWN_COURT = "unknown_court"
    INACTIVE_COURT = "inactive_court"
    INVALID_TRANSITION = "invalid_transition"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    CONSTRAINT = "constraint"


class BookingIssue(BaseModel):
    """A single problem found while validating or applying an operation."""

    kind: ErrorKind
    message: str
    field: Optional[str] = None


class ValidationResult(BaseModel):
    """Outcome of a validation pass: every problem found, not just the first."""

    valid: bool
    errors: List[BookingIssue] = []

    @classmethod
    def from_errors(cls, errors: List[BookingIssue]) -> "ValidationResult":
        return cls(valid=not errors, errors=errors)

    @property
    def has_conflicts(self) -> bool:
        return any(e.kind == ErrorKind.CONFLICT for e in self.errors)


def status_code_for(errors: List[BookingIssue]) -> int:
    """Pick the HTTP status that best describes a list of issues."""
    kinds = {e.kind for e in errors}
    if ErrorKind.NOT_FOUND in kinds:
        return 404
    if kinds and kinds <= {ErrorKind.CONFLICT, ErrorKind.CONSTRAINT}:
        return 409
    return 400


def issues_to_http(errors: List[BookingIssue], message: str) -> HTTPException:
    """Build an HTTPException carrying the full list of issues."""
    return HTTPException(
        status_code=status_code_for(errors),
        detail={
            "message": message,
            "errors": [e.model_dump(mode="json") for e in errors],
        },
    )
