"""
Today's class board: which classes are in progress, coming up or finished.

Example:
    python dashboard.py --teacher "Jane Doe"
    python dashboard.py --cancel 42
    python dashboard.py --watch
"""
from __future__ import annotations

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Iterable, List, Optional, Sequence

from cancellations import with_cancellation
from classifier import classify, effective_subject, is_canceled_on, progress_percent
from config import get_settings
from errors import StoreError
from models import Schedule, ScheduleStatus
from ordering import bucket_by_status, for_day
from schedule_store import RejectedRecord, ScheduleStore
from time_of_day import TimeOfDay
from time_utils import date_tag, get_local_tz, now_local, weekday_name

LOGGER = logging.getLogger(__name__)

STATUS_BADGES = {
    ScheduleStatus.ACTIVE: "In progress",
    ScheduleStatus.UPCOMING: "Up next",
}


@dataclass
class DashboardCard:
    """One occurrence of a slot on the board."""

    schedule: Schedule
    status: ScheduleStatus
    progress: int
    canceled: bool
    teacher_name: str
    subject: str

    @property
    def time_range(self) -> str:
        return (
            f"{self.schedule.start_time.format12h()} - {self.schedule.end_time.format12h()}"
        )


@dataclass
class Board:
    """Cards for one weekday at one reference instant."""

    day: str
    date_tag: str
    reference: datetime
    active: List[DashboardCard] = field(default_factory=list)
    upcoming: List[DashboardCard] = field(default_factory=list)
    past: List[DashboardCard] = field(default_factory=list)
    invalid: List[RejectedRecord] = field(default_factory=list)


def build_card(schedule: Schedule, reference: datetime) -> DashboardCard:
    status = classify(schedule, reference)
    return DashboardCard(
        schedule=schedule,
        status=status,
        progress=progress_percent(schedule, reference) if status is ScheduleStatus.ACTIVE else 0,
        canceled=is_canceled_on(schedule, date_tag(reference)),
        teacher_name=schedule.teacher.name if schedule.teacher else "",
        subject=effective_subject(schedule),
    )


def build_board(
    schedules: Iterable[Schedule],
    reference: datetime,
    teacher_name: Optional[str] = None,
    rejected: Sequence[RejectedRecord] = (),
) -> Board:
    """Build the board for the weekday of ``reference``.

    ``teacher_name`` narrows the board to one teacher across all of their
    subject rows.
    """

    day = weekday_name(reference)
    todays = for_day(schedules, day)
    if teacher_name:
        todays = [
            item for item in todays if item.teacher and item.teacher.name == teacher_name
        ]
    buckets = bucket_by_status(todays, reference)
    return Board(
        day=day,
        date_tag=date_tag(reference),
        reference=reference,
        active=[build_card(item, reference) for item in buckets.active],
        upcoming=[build_card(item, reference) for item in buckets.upcoming],
        past=[build_card(item, reference) for item in buckets.past],
        invalid=list(rejected),
    )


def format_board(board: Board) -> str:
    now = board.reference
    lines = [
        f"Today's schedule: {board.day}, {now:%B} {now.day}, {now.year} "
        f"({TimeOfDay.of(now).format12h()})"
    ]
    for title, cards in (
        ("Ongoing classes", board.active),
        ("Upcoming classes", board.upcoming),
        ("Past classes", board.past),
    ):
        lines.append(f"\n{title}")
        if not cards:
            lines.append(f"  No {title.lower()}")
        lines.extend(_format_card(card) for card in cards)
    if board.invalid:
        lines.append("\nInvalid records")
        for record in board.invalid:
            lines.append(f"  • Invalid schedule #{record.row_id}: {record.reason}")
    return "\n".join(lines)


def _format_card(card: DashboardCard) -> str:
    schedule = card.schedule
    if card.canceled:
        badge = " [Canceled]"
    elif card.status is ScheduleStatus.ACTIVE:
        badge = f" [{STATUS_BADGES[card.status]} {card.progress}%]"
    elif card.status in STATUS_BADGES:
        badge = f" [{STATUS_BADGES[card.status]}]"
    else:
        badge = ""
    who = card.teacher_name or "Unassigned"
    if card.subject:
        who = f"{who} ({card.subject})"
    room = f", room {schedule.room}" if schedule.room else ""
    return (
        f"  • {card.time_range}  {who}  "
        f"{schedule.grade} • {schedule.curriculum}{room}{badge}"
    )


def cancel_today(store: ScheduleStore, schedule: Schedule, reference: datetime) -> Schedule:
    """Cancel the occurrence of ``schedule`` on the date of ``reference``."""

    canceled = with_cancellation(schedule, date_tag(reference))
    if canceled is schedule:
        LOGGER.info("Schedule %s is already canceled for %s", schedule.id, date_tag(reference))
        return schedule
    saved = store.save_canceled_dates(canceled)
    LOGGER.info("Canceled schedule %s for %s", schedule.id, date_tag(reference))
    return saved


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the CLI argument parser."""

    parser = argparse.ArgumentParser(description="Show today's class board")
    parser.add_argument("-t", "--teacher", help="Only show classes of this teacher")
    parser.add_argument(
        "-c", "--cancel", type=int, metavar="ID", help="Cancel today's occurrence of a slot"
    )
    parser.add_argument(
        "-w", "--watch", action="store_true", help="Refresh the board on a fixed interval"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug information"
    )
    return parser


def _load_board(store: ScheduleStore, reference: datetime, teacher: Optional[str]) -> Board:
    schedules, rejected = store.fetch_schedules(day=weekday_name(reference))
    return build_board(schedules, reference, teacher_name=teacher, rejected=rejected)


def _cancel(store: ScheduleStore, schedule_id: int, reference: datetime) -> int:
    schedules, _ = store.fetch_schedules()
    match = next((item for item in schedules if item.id == schedule_id), None)
    if match is None:
        LOGGER.error("Schedule %s not found", schedule_id)
        return 1
    cancel_today(store, match, reference)
    return 0


def _watch(store: ScheduleStore, tz: tzinfo, teacher: Optional[str], interval: int) -> None:
    board: Optional[Board] = None
    while True:
        reference = now_local(tz)
        try:
            board = _load_board(store, reference, teacher)
        except StoreError as exc:
            LOGGER.error("Refresh failed, showing previous data: %s", exc)
            if board is not None:
                schedules = [card.schedule for card in board.active + board.upcoming + board.past]
                board = build_board(schedules, reference, teacher, board.invalid)
        if board is not None:
            print(format_board(board), flush=True)
        time.sleep(interval)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""

    args = build_arg_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    tz = get_local_tz(settings.timezone)

    with ScheduleStore(str(settings.supabase_url), settings.supabase_key) as store:
        try:
            if args.cancel is not None:
                sys.exit(_cancel(store, args.cancel, now_local(tz)))
            if args.watch:
                _watch(store, tz, args.teacher, settings.refresh_interval)
                return
            print(format_board(_load_board(store, now_local(tz), args.teacher)))
        except StoreError as exc:
            LOGGER.error("Could not reach the schedule store: %s", exc)
            sys.exit(1)
        except KeyboardInterrupt:
            LOGGER.info("Stopped")


if __name__ == "__main__":
    main()
