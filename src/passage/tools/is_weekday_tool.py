# tools/is_weekday_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import is_weekday
from ..instant import format_date
from .tool_args import FORMAT_PARAM, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "isWeekday",
        "description": _(
            "tool.description",
            default=(
                "Check if a given date is a weekday (Monday to Friday). "
                "The date must be in the format YYYY-MM-DD."
            ),
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
    verdict = "is a weekday." if is_weekday(t) else "is not a weekday."
    return f"{format_date(t)} {verdict}"
