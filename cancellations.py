"""Per-date cancellation of recurring slots.

A slot canceled for a date keeps its recurring definition; the date tag is
only recorded in ``canceled_dates``. Tags are never pruned, so tags of past
dates simply stop matching anything.
"""

from __future__ import annotations

from dataclasses import replace

from models import Schedule
from time_utils import validate_date_tag


def is_canceled(schedule: Schedule, date_tag: str) -> bool:
    """Return True when the slot is canceled for the ``M/d`` date tag."""

    return date_tag.strip() in schedule.canceled_dates


def with_cancellation(schedule: Schedule, date_tag: str) -> Schedule:
    """Return a copy of ``schedule`` canceled for ``date_tag``.

    Canceling an already canceled date returns an equal schedule, so repeated
    cancel requests for the same day never grow the list.
    """

    tag = validate_date_tag(date_tag)
    if is_canceled(schedule, tag):
        return schedule
    return replace(schedule, canceled_dates=schedule.canceled_dates + (tag,))


__all__ = ["is_canceled", "with_cancellation"]
