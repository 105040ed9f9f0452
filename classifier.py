"""Temporal classification of a schedule against a reference instant.

Only the minute of day is considered. Callers filter schedules down to the
current weekday before classifying them.
"""

from __future__ import annotations

from datetime import datetime, time
from typing import Optional, Union

from cancellations import is_canceled
from errors import DivideByZeroGuard
from models import Schedule, ScheduleStatus, Teacher
from time_of_day import TimeOfDay

Reference = Union[TimeOfDay, time, datetime]


def classify(schedule: Schedule, reference: Reference) -> ScheduleStatus:
    """Return PAST, ACTIVE or UPCOMING.

    Both the start and the end minute count as ACTIVE: a class that ends
    now is still in progress.
    """

    now = TimeOfDay.of(reference).minutes_since_midnight
    if now < schedule.start_time.minutes_since_midnight:
        return ScheduleStatus.UPCOMING
    if now > schedule.end_time.minutes_since_midnight:
        return ScheduleStatus.PAST
    return ScheduleStatus.ACTIVE


def progress_percent(schedule: Schedule, reference: Reference) -> int:
    """Return how much of the class has elapsed, as an integer 0..100."""

    start = schedule.start_time.minutes_since_midnight
    end = schedule.end_time.minutes_since_midnight
    total = end - start
    if total <= 0:
        raise DivideByZeroGuard(
            f"schedule {schedule.id} has an empty interval {schedule.start_time}-{schedule.end_time}"
        )
    now = TimeOfDay.of(reference).minutes_since_midnight
    if now <= start:
        return 0
    if now >= end:
        return 100
    elapsed = now - start
    # half-up rounding on integers
    return (200 * elapsed + total) // (2 * total)


def is_canceled_on(schedule: Schedule, date_tag: str) -> bool:
    return is_canceled(schedule, date_tag)


def effective_subject(schedule: Schedule, teacher: Optional[Teacher] = None) -> str:
    """Return the slot's own subject, falling back to the teacher's."""

    if schedule.subject and schedule.subject.strip():
        return schedule.subject
    teacher = teacher or schedule.teacher
    return teacher.subject if teacher else ""


__all__ = [
    "classify",
    "progress_percent",
    "is_canceled_on",
    "effective_subject",
    "Reference",
]
