from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from urllib.parse import urljoin

import requests
from requests import RequestException, Timeout

from errors import ScheduleError, StoreError
from models import Schedule, Teacher
from time_of_day import TimeOfDay

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
SCHEDULES_TABLE = "class_schedules"
TEACHERS_TABLE = "teachers"
SCHEDULE_SELECT = "*,teachers(id,name,subject)"
EDITABLE_FIELDS = (
    "day",
    "start_time",
    "end_time",
    "grade",
    "curriculum",
    "repeats",
    "date_tag",
    "subject",
    "room",
)

_SECONDS_SUFFIX = re.compile(r"^(\d{1,2}:\d{2}):\d{2}(\.\d+)?$")


@dataclass(frozen=True)
class RejectedRecord:
    """A row that could not be turned into a model."""

    row_id: Any
    reason: str


@dataclass
class ScheduleStore:
    """HTTP client for the hosted PostgREST tables behind the dashboard."""

    base_url: str
    api_key: str

    def __post_init__(self) -> None:
        self.session = requests.Session()
        self.session.headers.update(
            {
                "apikey": self.api_key,
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json",
            }
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""

        self.session.close()

    def __enter__(self) -> "ScheduleStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_teachers(self) -> Tuple[List[Teacher], List[RejectedRecord]]:
        rows = self._request(
            "GET",
            TEACHERS_TABLE,
            params={"select": "id,name,subject", "order": "name.asc,id.asc"},
        )
        return parse_teachers(rows)

    def fetch_schedules(
        self, day: Optional[str] = None
    ) -> Tuple[List[Schedule], List[RejectedRecord]]:
        """Fetch schedules with their teacher joined, optionally for one weekday."""

        params = {"select": SCHEDULE_SELECT, "order": "start_time.asc"}
        if day:
            params["day"] = f"eq.{day}"
        rows = self._request("GET", SCHEDULES_TABLE, params=params)
        return parse_schedules(rows)

    def save_canceled_dates(self, schedule: Schedule) -> Schedule:
        """Persist the canceled dates of an already stored schedule."""

        return self._patch(schedule, {"canceled_dates": list(schedule.canceled_dates)})

    def update_schedule(self, schedule: Schedule) -> Schedule:
        row = schedule_to_row(schedule)
        return self._patch(schedule, {key: row[key] for key in EDITABLE_FIELDS})

    def create_schedule(self, draft: Schedule) -> Schedule:
        row = schedule_to_row(draft)
        row.pop("id", None)
        created = self._request(
            "POST",
            SCHEDULES_TABLE,
            params={"select": SCHEDULE_SELECT},
            json=row,
            prefer_representation=True,
        )
        return self._single_schedule(created)

    def delete_schedule(self, schedule_id: int) -> None:
        self._request("DELETE", SCHEDULES_TABLE, params={"id": f"eq.{schedule_id}"})
        LOGGER.info("Deleted schedule %s", schedule_id)

    def add_teacher(self, name: str, subject: str) -> Teacher:
        if not name.strip() or not subject.strip():
            raise ValueError("teacher name and subject are required")
        created = self._request(
            "POST",
            TEACHERS_TABLE,
            params={"select": "id,name,subject"},
            json={"name": name.strip(), "subject": subject.strip()},
            prefer_representation=True,
        )
        teachers, rejected = parse_teachers(created)
        if not teachers:
            raise StoreError(f"store returned no usable teacher row: {rejected}")
        return teachers[0]

    def _patch(self, schedule: Schedule, payload: Dict[str, Any]) -> Schedule:
        if schedule.id is None:
            raise StoreError("cannot update a schedule that was never stored")
        updated = self._request(
            "PATCH",
            SCHEDULES_TABLE,
            params={"id": f"eq.{schedule.id}", "select": SCHEDULE_SELECT},
            json=payload,
            prefer_representation=True,
        )
        return self._single_schedule(updated)

    @staticmethod
    def _single_schedule(rows: List[dict]) -> Schedule:
        schedules, rejected = parse_schedules(rows)
        if not schedules:
            raise StoreError(f"store returned no usable schedule row: {rejected}")
        return schedules[0]

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
        prefer_representation: bool = False,
    ) -> List[dict]:
        url = urljoin(self.base_url.rstrip("/") + "/", f"rest/v1/{table}")
        headers = {"Prefer": "return=representation"} if prefer_representation else None
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=DEFAULT_TIMEOUT,
            )
            response.raise_for_status()
        except (Timeout, RequestException) as exc:
            LOGGER.error("%s %s failed: %s", method, table, exc)
            raise StoreError(f"{method} {table} failed: {exc}") from exc
        if not response.content:
            return []
        try:
            payload = response.json()
        except ValueError as exc:
            raise StoreError(f"{method} {table} returned invalid JSON") from exc
        return _ensure_list(payload)


def _ensure_list(payload: object) -> List[dict]:
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        return [payload]
    return []


def parse_teachers(rows: Iterable[dict]) -> Tuple[List[Teacher], List[RejectedRecord]]:
    teachers: List[Teacher] = []
    rejected: List[RejectedRecord] = []
    for row in rows:
        try:
            teachers.append(_teacher_from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Skipping teacher row %s: %s", row.get("id"), exc)
            rejected.append(RejectedRecord(row.get("id"), str(exc)))
    return teachers, rejected


def parse_schedules(rows: Iterable[dict]) -> Tuple[List[Schedule], List[RejectedRecord]]:
    """Turn raw rows into schedules; a bad row never affects the others."""

    schedules: List[Schedule] = []
    rejected: List[RejectedRecord] = []
    for row in rows:
        try:
            schedules.append(_schedule_from_row(row))
        except (KeyError, TypeError, ValueError) as exc:
            reason = str(exc) if isinstance(exc, ScheduleError) else f"{type(exc).__name__}: {exc}"
            LOGGER.warning("Skipping schedule row %s: %s", row.get("id"), reason)
            rejected.append(RejectedRecord(row.get("id"), reason))
    return schedules, rejected


def schedule_to_row(schedule: Schedule) -> Dict[str, Any]:
    return {
        "id": schedule.id,
        "teacher_id": schedule.teacher_id,
        "day": schedule.day,
        "start_time": schedule.start_time.format24h(),
        "end_time": schedule.end_time.format24h(),
        "grade": schedule.grade,
        "curriculum": schedule.curriculum,
        "subject": schedule.subject,
        "date_tag": schedule.date_tag,
        "repeats": schedule.repeats,
        "canceled_dates": list(schedule.canceled_dates),
        "room": schedule.room,
    }


def _teacher_from_row(row: dict) -> Teacher:
    name = _optional_str(row.get("name"))
    if name is None:
        raise ValueError("teacher name is empty")
    return Teacher(id=int(row["id"]), name=name, subject=_optional_str(row.get("subject")) or "")


def _schedule_from_row(row: dict) -> Schedule:
    teacher = _joined_teacher(row)
    teacher_id = row.get("teacher_id")
    return Schedule(
        id=int(row["id"]),
        teacher_id=int(teacher_id) if teacher_id is not None else None,
        day=str(row["day"]),
        start_time=_parse_time(row.get("start_time")),
        end_time=_parse_time(row.get("end_time")),
        grade=str(row.get("grade") or ""),
        curriculum=str(row.get("curriculum") or ""),
        subject=_optional_str(row.get("subject")) or "",
        date_tag=_optional_str(row.get("date_tag")) or "",
        repeats=row.get("repeats") is not False,
        canceled_dates=tuple(str(tag) for tag in row.get("canceled_dates") or ()),
        room=_optional_str(row.get("room")),
        teacher=teacher,
    )


def _joined_teacher(row: dict) -> Optional[Teacher]:
    """Return the joined teacher; a broken teacher row leaves the slot unassigned."""

    joined = row.get("teachers")
    if not isinstance(joined, dict):
        return None
    try:
        return _teacher_from_row(joined)
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.warning("Ignoring teacher of schedule row %s: %s", row.get("id"), exc)
        return None


def _parse_time(value: object) -> TimeOfDay:
    """Parse a stored time; Postgres ``time`` columns come back as ``HH:MM:SS``."""

    if isinstance(value, str):
        match = _SECONDS_SUFFIX.match(value.strip())
        if match:
            value = match.group(1)
    return TimeOfDay.parse(value)  # type: ignore[arg-type]


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


__all__ = [
    "ScheduleStore",
    "RejectedRecord",
    "parse_teachers",
    "parse_schedules",
    "schedule_to_row",
    "DEFAULT_TIMEOUT",
]
