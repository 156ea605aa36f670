# tools/days_between_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import days_between
from ..instant import format_date, to_utc
from .tool_args import FORMAT_PARAM, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "daysBetween",
        "description": _(
            "tool.description",
            default=(
                "Calculate the number of days between two dates. The dates must be in "
                "the format YYYY-MM-DD. Partial days are not counted."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "firstDateTime": {"type": "string"},
                "secondDateTime": {"type": "string"},
                "firstDate": {"type": "string", "description": "Alias of firstDateTime."},
                "secondDate": {"type": "string", "description": "Alias of secondDateTime."},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": [],
        },
        "x_passage": {"read_only": True},
    },
}

# 旧クライアントは firstDate / secondDate で送ってくる
_ALIASES = {"firstDateTime": "firstDate", "secondDateTime": "secondDate"}


def run_tool(args: Dict[str, Any]) -> str:
    args = dict(args)
    for key, alias in _ALIASES.items():
        if not args.get(key) and args.get(alias):
            args[key] = args[alias]

    first = to_utc(parse_arg_time(args, "firstDateTime", tz_key=None))
    second = to_utc(parse_arg_time(args, "secondDateTime", tz_key=None))
    n = days_between(first, second)
    return f"There are {n} days between {format_date(first)} and {format_date(second)}."
