# tools/is_leap_year_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

from typing import Any, Dict

from ..calendar_math import is_leap_year
from .tool_args import get_int

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "isLeapYear",
        "description": _(
            "tool.description",
            default=(
                "Check if a given year is a leap year. The year must be provided as "
                "a number in the format YYYY."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "year": {"type": "number"},
            },
            "required": ["year"],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    year = get_int(args, "year")
    if is_leap_year(year):
        return f"{year} is a leap year."
    return f"{year} is not a leap year."
