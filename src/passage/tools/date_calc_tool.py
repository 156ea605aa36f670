# tools/date_calc_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from datetime import date, datetime
from typing import Any, Dict, Optional

import holidays
from dateutil.relativedelta import relativedelta

from ..calendar_math import Weekday, is_weekend
from ..errors import TimeOutOfRangeError, UnsupportedCountryError
from ..instant import format_date_time
from .context import get_callbacks, get_clock
from .tool_args import FORMAT_PARAM, get_bool, get_int, get_str, get_time_zone, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "dateCalc",
        "description": _(
            "tool.description",
            default=(
                "Shift a date by calendar units (years, months, weeks, days) and report "
                "the resulting date, its weekday and whether it is a public holiday "
                "(holidays library) or weekend in the given country. Month ends are "
                "clamped (2024-01-31 + 1 month = 2024-02-29)."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "dateTime": {
                    "type": "string",
                    "description": _(
                        "param.dateTime.description",
                        default="Base date (YYYY-MM-DD or YYYY-MM-DD HH:MM:SS). Defaults to now.",
                    ),
                },
                "years": {"type": "integer"},
                "months": {"type": "integer"},
                "weeks": {"type": "integer"},
                "days": {"type": "integer"},
                "timeZone": {"type": "string"},
                "country": {
                    "type": "string",
                    "description": _(
                        "param.country.description",
                        default="ISO 3166-1 alpha-2 country code for holidays (e.g. 'US', 'JP', 'GB').",
                    ),
                    "default": "US",
                },
                "checkHoliday": {"type": "boolean", "default": True},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": [],
        },
        "x_passage": {"read_only": True},
    },
}


def get_holiday_info(day: date, country_code: str) -> Optional[str]:
    """holidays ライブラリで祝日名を引き、週末なら曜日名を添える。"""
    try:
        hols = holidays.country_holidays(country_code.upper())
    except NotImplementedError:
        raise UnsupportedCountryError(country_code) from None

    holiday_name = hols.get(day)
    weekend_name = Weekday.of(day).label if is_weekend(day) else None

    if holiday_name and weekend_name:
        return f"Holiday ({holiday_name}) and {weekend_name}"
    if holiday_name:
        return f"Holiday ({holiday_name})"
    return weekend_name


def run_tool(args: Dict[str, Any]) -> str:
    cb = get_callbacks()
    country = get_str(args, "country") or "US"
    check_holiday = get_bool(args, "checkHoliday", True)

    if get_str(args, "dateTime"):
        base: datetime = parse_arg_time(args)
    else:
        clock = get_clock()
        base = clock.now().astimezone(clock.load_zone(get_time_zone(args)))

    units = {k: get_int(args, k) for k in ("years", "months", "weeks", "days")}
    try:
        result = base + relativedelta(**units)
    except (OverflowError, ValueError):
        # 年が 1..9999 を外れる
        raise TimeOutOfRangeError() from None

    holiday_info = get_holiday_info(result.date(), country) if check_holiday else None

    res = [
        f"Base Date:    {format_date_time(base)}",
        "Operation:    " + ", ".join(f"{k}={v}" for k, v in units.items()),
        f"Country:      {country.upper()}",
        f"Result Date:  {format_date_time(result)}",
        f"Weekday:      {Weekday.of(result).label}",
        f"Holiday Info: {holiday_info or 'Weekday'}",
    ]
    output = "[dateCalc]\n" + "\n".join(res)

    if cb.truncate_output:
        return cb.truncate_output("dateCalc", output, 2000)
    return output
