# tools/tool_args.py
"""Argument helpers shared by the time tools.

Tool arguments arrive as an untyped dict (JSON from the model). These
helpers pull named values out of it, apply the documented defaults, and
feed date/time strings through the instant parser.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from ..errors import EmptyInputError, MissingFieldError
from ..instant import ParseRequest, parse_time
from .context import default_time_zone, get_clock

# dateTimeFormat: 明示フォーマット（strptime 書式）。指定時はフォールバックしない
FORMAT_PARAM: Dict[str, Any] = {
    "type": "string",
    "description": (
        "Optional strptime pattern (e.g. '%d-%m-%Y'). When given, only this "
        "format is tried."
    ),
}


def get_str(args: Dict[str, Any], key: str, default: str = "") -> str:
    v = args.get(key)
    if v is None:
        return default
    return v if isinstance(v, str) else str(v)


def require_str(args: Dict[str, Any], key: str, message: Optional[str] = None) -> str:
    v = get_str(args, key)
    if not v:
        raise MissingFieldError(key, message)
    return v


def get_int(args: Dict[str, Any], key: str, default: int = 0) -> int:
    """Integer argument; JSON numbers and numeric strings are accepted.

    Anything else (missing, bool, garbage) yields ``default``.
    """
    v = args.get(key)
    if isinstance(v, bool) or v is None:
        return default
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v)
    if isinstance(v, str):
        try:
            return int(v.strip())
        except ValueError:
            return default
    return default


_TRUE_STRINGS = ("1", "true", "yes", "on")
_FALSE_STRINGS = ("0", "false", "no", "off")


def get_bool(args: Dict[str, Any], key: str, default: bool = False) -> bool:
    """Boolean argument; "false" / "0" / "no" strings count as False."""
    v = args.get(key)
    if v is None:
        return default
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        s = v.strip().lower()
        if s in _TRUE_STRINGS:
            return True
        if s in _FALSE_STRINGS:
            return False
    return default


def get_time_zone(args: Dict[str, Any], key: str = "timeZone") -> str:
    return get_str(args, key) or default_time_zone()


def parse_arg_time(
    args: Dict[str, Any],
    key: str = "dateTime",
    tz_key: Optional[str] = "timeZone",
) -> datetime:
    """Parse ``args[key]`` in the zone named by ``args[tz_key]``.

    An absent or empty value raises EmptyInputError, matching the parser.
    """
    value = get_str(args, key)
    if not value:
        raise EmptyInputError()
    time_zone = get_time_zone(args, tz_key) if tz_key else ""
    request = ParseRequest(
        input=value,
        time_zone=time_zone,
        time_format=get_str(args, "dateTimeFormat"),
    )
    return parse_time(request, get_clock())
