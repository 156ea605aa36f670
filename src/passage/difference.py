"""passage.difference

Ordering of instants and duration rendering.

All comparisons happen on UTC-normalized values so that instants given in
different offsets compare correctly.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from enum import Enum
from typing import Tuple

from .errors import FutureTimeError, PastTimeError
from .instant import to_utc

_ONE_MICROSECOND = timedelta(microseconds=1)
_NANOS_PER_SECOND = 1_000_000_000


class Relation(Enum):
    EQUAL = "equal"
    EARLIER = "earlier"  # first before second
    LATER = "later"  # first after second


def _with_fraction(value: int, scale: int) -> str:
    whole, frac = divmod(value, scale)
    digits = len(str(scale)) - 1
    frac_str = f"{frac:0{digits}d}".rstrip("0")
    return f"{whole}.{frac_str}" if frac_str else str(whole)


def format_duration(td: timedelta) -> str:
    """Render like Go's ``time.Duration.String()``.

    >>> format_duration(timedelta(hours=24, minutes=30))
    '24h30m0s'
    >>> format_duration(timedelta(milliseconds=1500))
    '1.5s'
    >>> format_duration(timedelta(0))
    '0s'
    """
    ns = (td // _ONE_MICROSECOND) * 1000
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    u = abs(ns)

    if u < _NANOS_PER_SECOND:
        # 1秒未満は最も大きい単位ひとつで表す
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_with_fraction(u, 1_000)}µs"
        return f"{sign}{_with_fraction(u, 1_000_000)}ms"

    seconds, frac_ns = divmod(u, _NANOS_PER_SECOND)
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    sec_str = _with_fraction(secs * _NANOS_PER_SECOND + frac_ns, _NANOS_PER_SECOND)
    if hours:
        return f"{sign}{hours}h{minutes}m{sec_str}s"
    if minutes:
        return f"{sign}{minutes}m{sec_str}s"
    return f"{sign}{sec_str}s"


def since(now: datetime, t: datetime) -> timedelta:
    """Elapsed time from ``t`` to ``now``.

    Raises FutureTimeError when ``t`` is after ``now``; equal instants give
    ``timedelta(0)``.
    """
    now, t = to_utc(now), to_utc(t)
    if t > now:
        raise FutureTimeError()
    return now - t


def until(now: datetime, t: datetime) -> timedelta:
    """Remaining time from ``now`` to ``t``. Raises PastTimeError if ``t`` < ``now``."""
    now, t = to_utc(now), to_utc(t)
    if t < now:
        raise PastTimeError()
    return t - now


def difference(a: datetime, b: datetime) -> Tuple[Relation, timedelta]:
    a, b = to_utc(a), to_utc(b)
    if a == b:
        return Relation.EQUAL, timedelta(0)
    if a < b:
        return Relation.EARLIER, b - a
    return Relation.LATER, a - b
