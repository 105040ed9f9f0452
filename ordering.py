from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List

from classifier import Reference, classify
from models import Schedule, ScheduleStatus


@dataclass
class StatusBuckets:
    """Schedules split into the three display sections."""

    active: List[Schedule] = field(default_factory=list)
    upcoming: List[Schedule] = field(default_factory=list)
    past: List[Schedule] = field(default_factory=list)


def order(schedules: Iterable[Schedule], reference: Reference) -> List[Schedule]:
    """Sort active schedules first, then by start time.

    ``sorted`` is stable, so slots starting at the same minute keep their
    input order across refreshes.
    """

    return sorted(
        schedules,
        key=lambda item: (
            classify(item, reference) is not ScheduleStatus.ACTIVE,
            item.start_time.minutes_since_midnight,
        ),
    )


def order_past(schedules: Iterable[Schedule], reference: Reference) -> List[Schedule]:
    """Return finished schedules, most recently started first."""

    past = [item for item in schedules if classify(item, reference) is ScheduleStatus.PAST]
    return sorted(past, key=lambda item: -item.start_time.minutes_since_midnight)


def for_day(schedules: Iterable[Schedule], day: str) -> List[Schedule]:
    """Keep only the slots that recur on ``day``."""

    return [item for item in schedules if item.day == day]


def bucket_by_status(schedules: Iterable[Schedule], reference: Reference) -> StatusBuckets:
    items = list(schedules)
    buckets = StatusBuckets(past=order_past(items, reference))
    for item in order(items, reference):
        status = classify(item, reference)
        if status is ScheduleStatus.ACTIVE:
            buckets.active.append(item)
        elif status is ScheduleStatus.UPCOMING:
            buckets.upcoming.append(item)
    return buckets


__all__ = ["StatusBuckets", "order", "order_past", "for_day", "bucket_by_status"]
