"""Wall-clock helpers shared by the faction and protection rules.

Instants are epoch milliseconds or ``datetime`` objects. Every hour and day
comparison goes through :func:`to_local_datetime` so that one interpretation
of "local" is used throughout: the process time zone when ``tz`` is ``None``,
otherwise the injected ``tzinfo``.
"""

from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional, Union

Instant = Union[int, float, datetime]

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def to_local_datetime(instant: Instant, tz: Optional[tzinfo] = None) -> datetime:
    if isinstance(instant, datetime):
        if tz is None and instant.tzinfo is None:
            return instant
        # astimezone(None) lands in the process zone
        return instant.astimezone(tz)
    return datetime.fromtimestamp(float(instant) / 1000.0, tz)


def local_hour(instant: Instant, tz: Optional[tzinfo] = None) -> int:
    return to_local_datetime(instant, tz).hour


def local_day(instant: Instant, tz: Optional[tzinfo] = None) -> date:
    return to_local_datetime(instant, tz).date()


def to_epoch_ms(value: datetime) -> int:
    return int(round(value.timestamp() * 1000))


def as_epoch_ms(instant: Instant) -> int:
    if isinstance(instant, datetime):
        return to_epoch_ms(instant)
    return int(instant)


def format_day(day: date) -> str:
    """Render ``day`` as ``"Wed Jan 03 2024"`` independent of the locale."""

    return f"{_WEEKDAYS[day.weekday()]} {_MONTHS[day.month - 1]} {day.day:02d} {day.year:04d}"


def day_string(instant: Instant, tz: Optional[tzinfo] = None) -> str:
    return format_day(local_day(instant, tz))
