# tools/context.py
"""tools.context

ツール実装からホスト（CLI / MCP サーバ）への依存を薄くするための
「コールバック注入式」コンテキスト。

- tools/ 配下のモジュールは cli / server を import しない。
- 代わりにホスト側が起動時に init_callbacks(...) を呼び、
  時計（Clock）や出力トリミング関数を注入する。
- テストでは FixedClock を持つ ToolCallbacks を注入して時刻を固定する。

このモジュールは tools/ 配下の各ツールが参照する共通窓口。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..clock import Clock, LiveClock


@dataclass
class ToolCallbacks:
    # "now" とタイムゾーン解決
    clock: Clock = field(default_factory=LiveClock)

    # 出力トリミング
    truncate_output: Optional[Callable[[str, str, int], str]] = None

    # [TOOL] トレースを標準出力へ出すか（MCP stdio では False）
    emit_tool_trace: bool = True

    # timeZone 引数省略時の既定値（None なら PASSAGE_DEFAULT_TIMEZONE / UTC）
    default_time_zone: Optional[str] = None


_CALLBACKS: ToolCallbacks = ToolCallbacks()


def init_callbacks(cb: ToolCallbacks) -> None:
    global _CALLBACKS
    _CALLBACKS = cb


def get_callbacks() -> ToolCallbacks:
    return _CALLBACKS


def get_clock() -> Clock:
    return _CALLBACKS.clock


def default_time_zone() -> str:
    if _CALLBACKS.default_time_zone is not None:
        return _CALLBACKS.default_time_zone
    return os.environ.get("PASSAGE_DEFAULT_TIMEZONE") or "UTC"
