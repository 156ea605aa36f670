"""passage.clock

"now" and timezone-name resolution, behind a small interface so that the
host can inject a deterministic clock in tests.

- LiveClock: wall clock, always returned in UTC.
- FixedClock: pinned instant (PASSAGE_FIXED_NOW or tests).

Clocks are read-only after construction and safe to share between calls.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ZoneLoadError

FIXED_NOW_FORMAT = "%Y-%m-%d %H:%M:%S"


class Clock(Protocol):
    def now(self) -> datetime: ...

    def load_zone(self, name: str) -> tzinfo: ...


def load_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name (empty means UTC).

    Raises ZoneLoadError when the name is unknown or malformed.
    """
    name = (name or "").strip()
    if not name:
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        # "America" のようなディレクトリ名は OSError になることがある
        raise ZoneLoadError(name, e) from e


class LiveClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def load_zone(self, name: str) -> tzinfo:
        return load_zone(name)

    def __repr__(self) -> str:
        return "LiveClock()"


class FixedClock:
    """A clock that always reports the same instant.

    A naive ``at`` is taken to be UTC. Zone resolution is the live one.
    """

    def __init__(self, at: datetime) -> None:
        if at.tzinfo is None:
            at = at.replace(tzinfo=timezone.utc)
        self._at = at.astimezone(timezone.utc)

    def now(self) -> datetime:
        return self._at

    def load_zone(self, name: str) -> tzinfo:
        return load_zone(name)

    def __repr__(self) -> str:
        return f"FixedClock({self._at.isoformat()})"


def clock_from_env(env: Optional[dict] = None) -> Clock:
    """Build the host clock.

    PASSAGE_FIXED_NOW=YYYY-MM-DD HH:MM:SS (UTC) pins the clock; otherwise live.
    """
    env = os.environ if env is None else env
    fixed = (env.get("PASSAGE_FIXED_NOW") or "").strip()
    if not fixed:
        return LiveClock()
    try:
        at = datetime.strptime(fixed, FIXED_NOW_FORMAT)
    except ValueError as e:
        raise ValueError(
            f"PASSAGE_FIXED_NOW must be {FIXED_NOW_FORMAT!r}, got {fixed!r}"
        ) from e
    return FixedClock(at)
