# tools/previous_occurrence_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import Weekday, previous_occurrence
from ..instant import format_date_time
from .tool_args import FORMAT_PARAM, parse_arg_time, require_str

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "previousOccurrence",
        "description": _(
            "tool.description",
            default=(
                "Get the previous occurrence of a specified day of the week before a "
                "given date. The date must be in the format YYYY-MM-DD. The day of the "
                "week must be provided as a string (e.g. 'Monday', 'Tuesday', etc.)."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "dateTime": {"type": "string"},
                "dayOfWeek": {"type": "string"},
                "timeZone": {"type": "string"},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": ["dateTime", "dayOfWeek"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    t = parse_arg_time(args)
    day = require_str(args, "dayOfWeek", "Day of week must be provided")
    result = previous_occurrence(t, Weekday.parse(day))
    return (
        f"The previous occurrence of {day} before {format_date_time(t)} "
        f"is {format_date_time(result)}."
    )
