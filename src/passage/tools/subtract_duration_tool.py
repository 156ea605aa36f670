# tools/subtract_duration_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import parse_duration, subtract_duration
from ..instant import format_date_time
from .tool_args import FORMAT_PARAM, parse_arg_time, require_str

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "subtractDuration",
        "description": _(
            "tool.description",
            default=(
                "Subtract a duration from a given date and time. The date/time must be "
                "in the format YYYY-MM-DD HH:MM:SS or YYYY-MM-DD. The duration must be "
                "in the format '1h30m' for 1 hour and 30 minutes."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "dateTime": {"type": "string"},
                "duration": {"type": "string"},
                "timeZone": {"type": "string"},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": ["dateTime", "duration"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    t = parse_arg_time(args)
    duration = parse_duration(require_str(args, "duration", "Duration must be provided"))
    new_time = subtract_duration(t, duration)
    return f"New time after subtracting duration: {format_date_time(new_time)}"
