"""passage.calendar_math

Calendar predicates and date arithmetic on Instants (aware datetimes).

Weekday search works in the instant's own local calendar (no UTC
normalization); days_between normalizes both ends first.
"""

from __future__ import annotations

import calendar
import logging
import re
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from fractions import Fraction

from .errors import (
    InvalidDurationError,
    InvalidWeekdayError,
    InvalidYearError,
    TimeOutOfRangeError,
)
from .instant import format_date_time, to_utc

logger = logging.getLogger(__name__)


class Weekday(IntEnum):
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, raw: str) -> "Weekday":
        """Case-insensitive, whitespace-trimmed English day name."""
        key = (raw or "").strip().upper()
        try:
            return cls[key]
        except KeyError:
            raise InvalidWeekdayError(raw) from None

    @classmethod
    def of(cls, dt: datetime) -> "Weekday":
        # datetime.weekday() は月曜=0 なので日曜始まりへ寄せる
        return cls((dt.weekday() + 1) % 7)


def is_leap_year(year: int) -> bool:
    if year <= 0:
        raise InvalidYearError(year)
    return calendar.isleap(year)


def day_of_week(dt: datetime) -> Weekday:
    return Weekday.of(dt)


def is_weekend(dt: datetime) -> bool:
    return Weekday.of(dt) in (Weekday.SATURDAY, Weekday.SUNDAY)


def is_weekday(dt: datetime) -> bool:
    return Weekday.MONDAY <= Weekday.of(dt) <= Weekday.FRIDAY


# ------------------------------
# Durations ("1h30m", "-1.5h", "300ms")
# ------------------------------

_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

# int64 ナノ秒の上限（負側は 1 多く取れる）
_MAX_DURATION_NANOS = (1 << 63) - 1

# 長い単位名を先に並べる（"ms" を "m" より先に試す）
_DURATION_PART = re.compile(
    r"(\d*)(?:\.(\d*))?("
    + "|".join(sorted(map(re.escape, _NANOS_PER_UNIT), key=len, reverse=True))
    + r")"
)


def parse_duration(raw: str) -> timedelta:
    """Parse a compound duration string such as ``1h30m`` or ``-45s``.

    Accepts an optional sign followed by one or more ``<number><unit>``
    pairs (units: h, m, s, ms, us/µs, ns), or a bare ``0``. Resolution is
    one microsecond; finer parts are truncated.
    """
    s = (raw or "").strip()
    sign = 1
    body = s
    if body[:1] in ("+", "-"):
        sign = -1 if body[0] == "-" else 1
        body = body[1:]
    if body == "0":
        return timedelta(0)
    if not body:
        raise InvalidDurationError(raw)

    total = Fraction(0)
    pos = 0
    while pos < len(body):
        m = _DURATION_PART.match(body, pos)
        if m is None:
            raise InvalidDurationError(raw)
        whole, frac, unit = m.group(1), m.group(2) or "", m.group(3)
        if not whole and not frac:
            raise InvalidDurationError(raw)
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _NANOS_PER_UNIT[unit]
        pos = m.end()

    limit = _MAX_DURATION_NANOS + (1 if sign < 0 else 0)
    if total > limit:
        raise InvalidDurationError(raw)

    return timedelta(microseconds=sign * int(total // 1000))


def add_duration(dt: datetime, d: timedelta) -> datetime:
    """Absolute-time addition; the result is expressed in ``dt``'s zone."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        return (dt.astimezone(timezone.utc) + d).astimezone(dt.tzinfo)
    except OverflowError:
        raise TimeOutOfRangeError() from None


def subtract_duration(dt: datetime, d: timedelta) -> datetime:
    return add_duration(dt, -d)


def next_occurrence(dt: datetime, weekday: Weekday) -> datetime:
    """First date strictly after ``dt`` that falls on ``weekday``.

    Steps whole calendar days in local time, so the time-of-day is kept.
    """
    result = dt
    try:
        if Weekday.of(result) == weekday:
            result += timedelta(days=1)
        while Weekday.of(result) != weekday:
            result += timedelta(days=1)
    except OverflowError:
        raise TimeOutOfRangeError() from None
    logger.info(
        "next_occurrence: input=%s weekday=%s result=%s",
        format_date_time(dt),
        weekday.label,
        format_date_time(result),
    )
    return result


def previous_occurrence(dt: datetime, weekday: Weekday) -> datetime:
    """Last date strictly before ``dt`` that falls on ``weekday``."""
    result = dt
    try:
        if Weekday.of(result) == weekday:
            result -= timedelta(days=1)
        while Weekday.of(result) != weekday:
            result -= timedelta(days=1)
    except OverflowError:
        raise TimeOutOfRangeError() from None
    logger.info(
        "previous_occurrence: input=%s weekday=%s result=%s",
        format_date_time(dt),
        weekday.label,
        format_date_time(result),
    )
    return result


def days_between(a: datetime, b: datetime) -> int:
    """Whole days from ``a`` to ``b``: hours / 24, truncated toward zero.

    This is elapsed-hours based, not a count of calendar boundaries: two
    instants 23h59m apart are 0 days apart.
    """
    hours = (to_utc(b) - to_utc(a)).total_seconds() / 3600
    return int(hours / 24)
