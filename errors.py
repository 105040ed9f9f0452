"""Error hierarchy for schedule records and the record store.

Validation errors are per-record: a caller that hits one treats that single
record as invalid and keeps processing the rest.
"""

from __future__ import annotations


class ScheduleError(ValueError):
    """Base exception for invalid schedule data."""


class InvalidFormat(ScheduleError):
    """Time string or date tag does not match the expected pattern."""


class OutOfRange(ScheduleError):
    """Hour or minute outside the wall-clock bounds."""


class InvalidTimeRange(ScheduleError):
    """Start time is not strictly before end time."""


class UnknownValue(ScheduleError):
    """Day, grade or curriculum is not one of the known values."""


class DivideByZeroGuard(ScheduleError):
    """Progress requested for a zero-length interval."""


class StoreError(Exception):
    """A request to the record store failed or returned an unusable payload."""


__all__ = [
    "ScheduleError",
    "InvalidFormat",
    "OutOfRange",
    "InvalidTimeRange",
    "UnknownValue",
    "DivideByZeroGuard",
    "StoreError",
]
