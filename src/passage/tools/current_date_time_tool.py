# tools/current_date_time_tool.py
from .i18n_helper import make_tool_translator
_ = make_tool_translator(__file__)

import logging
from typing import Any, Dict

from ..instant import format_date_time
from .context import get_clock
from .tool_args import get_time_zone

logger = logging.getLogger(__name__)

TOOL_SPEC: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "currentDateTime",
        "description": _(
            "tool.description",
            default="Get the current date and time in a specified timezone.",
        ),
        "system_prompt": _(
            "tool.system_prompt",
            default=(
                "Use this tool as the reference point before resolving relative "
                "expressions such as 'tomorrow' or 'next Friday'. The result is "
                "YYYY-MM-DD HH:MM:SS followed by the UTC offset (e.g. +0900)."
            ),
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "timeZone": {
                    "type": "string",
                    "description": _(
                        "param.timeZone.description",
                        default="IANA timezone name (e.g. America/New_York). Defaults to UTC.",
                    ),
                },
            },
            "required": [],
        },
        "x_passage": {"read_only": True},
    },
}


def run_tool(args: Dict[str, Any]) -> str:
    clock = get_clock()
    tz = get_time_zone(args)

    now = clock.now()
    t = now.astimezone(clock.load_zone(tz))

    logger.info(
        "currentDateTime: clock_tz=%s requested_tz=%s requested_offset_seconds=%d",
        now.tzname(),
        tz,
        int(t.utcoffset().total_seconds()),
    )
    return format_date_time(t)
