"""passage.instant

Instant parsing and UTC normalization.

An Instant is a timezone-aware ``datetime``: the absolute time plus the
offset/zone it was expressed in. The offset is kept for display and for
local-time-context operations such as weekday search.

Parsing rules:
- an explicit format is tried exclusively (no fallback)
- otherwise "YYYY-MM-DD HH:MM:SS" is tried before "YYYY-MM-DD", so a
  trailing time-of-day is never silently dropped
- a zone name makes the parsed digits local time *in that zone*; a wall
  time skipped by a DST change moves forward by the gap (02:30 -> 03:30)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Sequence

from .clock import Clock, LiveClock
from .errors import EmptyInputError, InvalidFormatError, NilOptionsError, TimeOutOfRangeError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
DATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_TIME_ZONE_FORMAT = "%Y-%m-%d %H:%M:%S %z"

# 優先順位順。先頭が成功したら後続は試さない
DEFAULT_FORMATS: Sequence[str] = (DATE_TIME_FORMAT, DATE_FORMAT)

# strptime は 1 桁の月日や時刻も通すので、既定フォーマットは桁数を先に確認する
_FIXED_WIDTH = {
    DATE_TIME_FORMAT: re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"),
    DATE_FORMAT: re.compile(r"\d{4}-\d{2}-\d{2}"),
}


@dataclass(frozen=True)
class ParseRequest:
    input: str
    time_zone: str = ""
    time_format: str = ""


def _strptime_first(value: str, formats: Sequence[str]) -> Optional[datetime]:
    for fmt in formats:
        shape = _FIXED_WIDTH.get(fmt)
        if shape is not None and not shape.fullmatch(value):
            logger.debug("parse_time: %r does not have the shape of %r", value, fmt)
            continue
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            logger.debug("parse_time: %r does not match %r", value, fmt)
            continue
        logger.debug("parse_time: %r matched %r", value, fmt)
        return parsed
    return None


def parse_time(request: Optional[ParseRequest], clock: Optional[Clock] = None) -> datetime:
    """Parse ``request`` into an aware datetime.

    Raises NilOptionsError, EmptyInputError, InvalidFormatError or
    ZoneLoadError (from the clock's zone resolver).
    """
    if request is None:
        raise NilOptionsError()
    if not request.input:
        raise EmptyInputError()

    formats = (request.time_format,) if request.time_format else DEFAULT_FORMATS
    parsed = _strptime_first(request.input, formats)
    if parsed is None:
        raise InvalidFormatError(request.input)

    if not request.time_zone:
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    zone = (clock or LiveClock()).load_zone(request.time_zone)
    if parsed.tzinfo is not None:
        # %z 付きの明示フォーマットは絶対時刻が確定済みなので変換する
        return parsed.astimezone(zone)
    # 夏時間の切り替えで存在しない時刻は UTC を経由して実在の時刻へ進める
    try:
        return parsed.replace(tzinfo=zone).astimezone(timezone.utc).astimezone(zone)
    except OverflowError:
        raise TimeOutOfRangeError() from None


def to_utc(dt: datetime) -> datetime:
    """Same absolute instant with a zero offset. Idempotent."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    logger.info(
        "to_utc: input=%s zone=%s offset_seconds=%d",
        format_date_time(dt),
        dt.tzname(),
        int(dt.utcoffset().total_seconds()),
    )
    return dt.astimezone(timezone.utc)


def format_date(dt: datetime) -> str:
    return dt.strftime(DATE_FORMAT)


def format_date_time(dt: datetime) -> str:
    """``YYYY-MM-DD HH:MM:SS ±HHMM``"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.strftime(DATE_TIME_ZONE_FORMAT)
