# tools/time_difference_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..difference import Relation, difference, format_duration
from ..errors import MissingFieldError, TimeToolError, WrappedInputError
from .tool_args import FORMAT_PARAM, get_str, parse_arg_time

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "timeDifference",
        "description": _(
            "tool.description",
            default=(
                "Calculate the difference between two date and time values. The "
                "date/time must be in the format YYYY-MM-DD HH:MM:SS or YYYY-MM-DD. "
                "An IANA formatted timezone can be specified for each value "
                "(e.g. America/New_York), otherwise UTC is used."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "firstDateTime": {"type": "string"},
                "secondDateTime": {"type": "string"},
                "firstTimeZone": {"type": "string"},
                "secondTimeZone": {"type": "string"},
                "dateTimeFormat": FORMAT_PARAM,
            },
            "required": ["firstDateTime", "secondDateTime"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    if not get_str(args, "firstDateTime") or not get_str(args, "secondDateTime"):
        raise MissingFieldError(
            "firstDateTime", "Both firstDateTime and secondDateTime must be provided"
        )

    try:
        first = parse_arg_time(args, "firstDateTime", "firstTimeZone")
    except TimeToolError as e:
        raise WrappedInputError("error with first input time", e) from e
    try:
        second = parse_arg_time(args, "secondDateTime", "secondTimeZone")
    except TimeToolError as e:
        raise WrappedInputError("error with second input time", e) from e

    relation, gap = difference(first, second)
    if relation is Relation.EQUAL:
        return "The two times are equal."
    if relation is Relation.EARLIER:
        return "The first time is earlier than the second time by " + format_duration(gap)
    return "The first time is later than the second time by " + format_duration(gap)
