# tools/day_of_week_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import day_of_week
from ..instant import format_date
from .tool_args import FORMAT_PARAM, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "dayOfWeek",
        "description": _(
            "tool.description",
            default="Get the day of the week for a given date. The date must be in the format YYYY-MM-DD.",
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "dateTime": {"type": "string"},
                "timeZone": {"type": "string"},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": ["dateTime"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    t = parse_arg_time(args)
    return f"The day of the week for {format_date(t)} is {day_of_week(t).label}."
