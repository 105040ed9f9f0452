from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, time
from typing import Union

from errors import InvalidFormat, OutOfRange

TIME_PATTERN = re.compile(r"\d{1,2}:\d{2}", re.ASCII)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """Wall-clock time with minute precision."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise OutOfRange(f"hour must be within 0..23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise OutOfRange(f"minute must be within 0..59, got {self.minute}")

    @classmethod
    def parse(cls, text: str) -> "TimeOfDay":
        """Parse ``H:MM`` or ``HH:MM``.

        Raises ``InvalidFormat`` when the text does not look like a time and
        ``OutOfRange`` when it does but the values are impossible.
        """

        if not isinstance(text, str):
            raise InvalidFormat(f"time must be a string, got {type(text).__name__}")
        cleaned = text.strip()
        if not TIME_PATTERN.fullmatch(cleaned):
            raise InvalidFormat(f"expected H:MM or HH:MM, got {text!r}")
        hours, minutes = cleaned.split(":")
        return cls(int(hours), int(minutes))

    @classmethod
    def of(cls, value: Union["TimeOfDay", time, datetime]) -> "TimeOfDay":
        """Coerce a reference instant to a time of day, dropping seconds."""

        if isinstance(value, TimeOfDay):
            return value
        if isinstance(value, (datetime, time)):
            return cls(value.hour, value.minute)
        raise TypeError(f"cannot build TimeOfDay from {type(value).__name__}")

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def format12h(self) -> str:
        """Render as ``h:mm AM/PM``, e.g. ``9:05 AM`` or ``12:00 PM``."""

        suffix = "AM" if self.hour < 12 else "PM"
        hour = self.hour % 12 or 12
        return f"{hour}:{self.minute:02d} {suffix}"

    def format24h(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def __str__(self) -> str:
        return self.format24h()


def compare(a: TimeOfDay, b: TimeOfDay) -> int:
    """Return -1, 0 or 1 ordering ``a`` against ``b``."""

    left, right = a.minutes_since_midnight, b.minutes_since_midnight
    return (left > right) - (left < right)


__all__ = ["TimeOfDay", "compare", "TIME_PATTERN"]
