"""Errors raised by goal calculation."""

from enum import Enum


class TimelineIssue(str, Enum):
    """Why a timeline string was rejected."""

    MISSING_NUMBER = "missing_number"
    MISSING_UNIT = "missing_unit"
    OUT_OF_RANGE = "out_of_range"


class ValidationError(ValueError):
    """User input that can be corrected and resubmitted."""

    def __init__(self, message: str, *, field: str, reason: TimelineIssue) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.reason = reason


class IncompleteInputError(ValueError):
    """A biometric value is missing, zero or negative."""

    def __init__(self, field: str, message: str | None = None) -> None:
        message = message or f"{field} must be a positive number"
        super().__init__(message)
        self.message = message
        self.field = field
        self.reason = "incomplete"
