from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from errors import InvalidTimeRange, UnknownValue
from time_of_day import TimeOfDay

DAYS_OF_WEEK = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
GRADES = ("Grade 9", "Grade 10")
CURRICULUMS = ("Edexcel", "Cambridge")


class ScheduleStatus(str, Enum):
    """Temporal state of a schedule relative to a reference instant."""

    PAST = "past"
    ACTIVE = "active"
    UPCOMING = "upcoming"


@dataclass(frozen=True)
class Teacher:
    """One teacher row; a teacher with several subjects has several rows."""

    id: int
    name: str
    subject: str


@dataclass(frozen=True)
class GroupedTeacher:
    """Teacher identity collapsed across rows sharing the same name."""

    name: str
    representative_id: int
    subjects: Tuple[str, ...]


@dataclass(frozen=True)
class Schedule:
    """Recurring class slot on a weekday.

    ``id`` is None for a draft that has not been stored yet. Instances are
    never changed in place: edits and cancellations go through
    ``dataclasses.replace`` and the store persists the new record.
    """

    id: Optional[int]
    day: str
    start_time: TimeOfDay
    end_time: TimeOfDay
    grade: str
    curriculum: str
    teacher_id: Optional[int] = None
    subject: str = ""
    date_tag: str = ""
    repeats: bool = True
    canceled_dates: Tuple[str, ...] = ()
    room: Optional[str] = None
    teacher: Optional[Teacher] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.day not in DAYS_OF_WEEK:
            raise UnknownValue(f"unknown day {self.day!r}")
        if self.grade not in GRADES:
            raise UnknownValue(f"unknown grade {self.grade!r}")
        if self.curriculum not in CURRICULUMS:
            raise UnknownValue(f"unknown curriculum {self.curriculum!r}")
        if self.start_time >= self.end_time:
            raise InvalidTimeRange(
                f"start {self.start_time} must be before end {self.end_time}"
            )
        # dict keeps first-seen order while dropping repeats
        object.__setattr__(
            self, "canceled_dates", tuple(dict.fromkeys(self.canceled_dates))
        )


__all__ = [
    "Schedule",
    "Teacher",
    "GroupedTeacher",
    "ScheduleStatus",
    "DAYS_OF_WEEK",
    "GRADES",
    "CURRICULUMS",
]
