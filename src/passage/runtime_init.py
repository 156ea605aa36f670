# -*- coding: utf-8 -*-
"""runtime_init.py

Runtime initialization helpers shared by the CLI and the MCP server.

- load_settings(): read PASSAGE_* environment variables once.
- configure_logging(): stderr only (stdout is the MCP transport).
- init_tools_callbacks(): inject clock / truncation into passage.tools.

This module does not print; callers decide how to report problems.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from typing import Mapping, Optional

from . import tools
from .clock import Clock, clock_from_env
from .tools.context import ToolCallbacks

MAX_TOOL_OUTPUT_CHARS = 20_000


@dataclass(frozen=True)
class RuntimeSettings:
    log_level: str = "WARNING"
    max_tool_output_chars: int = MAX_TOOL_OUTPUT_CHARS
    default_time_zone: Optional[str] = None


def load_settings(env: Optional[Mapping[str, str]] = None) -> RuntimeSettings:
    env = os.environ if env is None else env

    raw_limit = (env.get("PASSAGE_MAX_TOOL_OUTPUT_CHARS") or "").strip()
    try:
        limit = int(raw_limit) if raw_limit else MAX_TOOL_OUTPUT_CHARS
    except ValueError:
        limit = MAX_TOOL_OUTPUT_CHARS

    return RuntimeSettings(
        log_level=(env.get("PASSAGE_LOG_LEVEL") or "WARNING").strip().upper(),
        max_tool_output_chars=max(1, limit),
        default_time_zone=(env.get("PASSAGE_DEFAULT_TIMEZONE") or "").strip() or None,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def truncate_output(label: str, text: str, limit: int = MAX_TOOL_OUTPUT_CHARS) -> str:
    if text is None:
        return ""
    if len(text) <= limit:
        return text
    omitted = len(text) - limit
    return text[:limit] + f"\n[{label} truncated: {omitted} chars omitted]"


def init_tools_callbacks(
    settings: RuntimeSettings,
    *,
    clock: Optional[Clock] = None,
    emit_tool_trace: bool = True,
) -> ToolCallbacks:
    """tools 側へ、ホスト側の依存（時計・出力トリミング）を注入する。"""
    cap = settings.max_tool_output_chars
    cb = ToolCallbacks(
        clock=clock or clock_from_env(),
        truncate_output=lambda label, text, limit=cap: truncate_output(
            label, text, limit=min(limit, cap)
        ),
        emit_tool_trace=emit_tool_trace,
        default_time_zone=settings.default_time_zone,
    )
    tools.init_callbacks(cb)
    return cb
