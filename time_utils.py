from __future__ import annotations

import logging
import re
from datetime import date, datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from errors import InvalidFormat
from models import DAYS_OF_WEEK

LOGGER = logging.getLogger(__name__)

DATE_TAG_PATTERN = re.compile(r"\d{1,2}/\d{1,2}", re.ASCII)


def get_local_tz(name: Optional[str] = None) -> tzinfo:
    """Return the dashboard's wall-clock timezone with a safe fallback to UTC.

    ``name`` defaults to the configured ``DASHBOARD_TIMEZONE``.
    """

    if name is None:
        from config import get_settings

        name = get_settings().timezone
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        LOGGER.warning("Falling back to UTC, timezone %s is unavailable: %s", name, exc)
    return timezone.utc


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Return current datetime in the dashboard timezone."""

    return datetime.now(tz=tz or get_local_tz())


def date_tag(value: date) -> str:
    """Return the ``M/d`` tag of a calendar date, e.g. ``6/12``."""

    return f"{value.month}/{value.day}"


def validate_date_tag(tag: str) -> str:
    if not isinstance(tag, str) or not DATE_TAG_PATTERN.fullmatch(tag.strip()):
        raise InvalidFormat(f"expected M/d date tag, got {tag!r}")
    return tag.strip()


def weekday_name(value: date) -> str:
    """Return the English weekday name regardless of the process locale."""

    return DAYS_OF_WEEK[value.weekday()]


__all__ = [
    "get_local_tz",
    "now_local",
    "date_tag",
    "validate_date_tag",
    "weekday_name",
    "DATE_TAG_PATTERN",
]
