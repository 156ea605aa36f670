# tools/time_until_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..difference import format_duration, until
from .context import get_clock
from .tool_args import FORMAT_PARAM, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "timeUntil",
        "description": _(
            "tool.description",
            default=(
                "Calculate the time until a given date and time. The date/time must be "
                "in the format YYYY-MM-DD HH:MM:SS or YYYY-MM-DD. An IANA formatted "
                "timezone can be specified (e.g. America/New_York), otherwise UTC is used."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "dateTime": {
                    "type": "string",
                    "description": _("param.dateTime.description", default="Future date/time."),
                },
                "timeZone": {
                    "type": "string",
                    "description": _(
                        "param.timeZone.description",
                        default="IANA timezone the dateTime is expressed in. Defaults to UTC.",
                    ),
                },
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": ["dateTime"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    t = parse_arg_time(args)
    return format_duration(until(get_clock().now(), t))
