"""passage command line.

  passage list                                   # registered tools
  passage call timeSince dateTime="2023-09-30 12:00:00" timeZone=UTC
  passage call isLeapYear --json '{"year": 2024}'
  passage serve                                  # MCP over stdio
  passage serve --port 8080                      # MCP over HTTP at /mcp
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from . import tools
from .clock import FIXED_NOW_FORMAT, Clock, FixedClock
from .runtime_init import configure_logging, init_tools_callbacks, load_settings


def _parse_kv_args(pairs: List[str]) -> Dict[str, Any]:
    """key=value の並びを dict にする。値は JSON として読めればその型を使う。"""
    out: Dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"expected key=value, got {pair!r}")
        try:
            out[key] = json.loads(value)
        except ValueError:
            out[key] = value
    return out


def _fixed_clock(value: str) -> Clock:
    try:
        return FixedClock(datetime.strptime(value, FIXED_NOW_FORMAT))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"--now must be in the format YYYY-MM-DD HH:MM:SS, got {value!r}"
        ) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passage",
        description="Date/time tools for agents (CLI and MCP server).",
    )
    parser.add_argument(
        "--log-level",
        help="ログレベル（既定: PASSAGE_LOG_LEVEL または WARNING）",
    )
    parser.add_argument(
        "--now",
        type=_fixed_clock,
        help="現在時刻を固定する（UTC, YYYY-MM-DD HH:MM:SS）。PASSAGE_FIXED_NOW より優先。",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="登録済みツールの一覧を表示します。")
    p_list.add_argument("--json", action="store_true", help="ツール定義を JSON で出力します。")

    p_call = sub.add_parser("call", help="ツールを 1 回実行します。")
    p_call.add_argument("tool", help="ツール名（例: timeSince）")
    p_call.add_argument("params", nargs="*", help="key=value 形式の引数")
    p_call.add_argument("--json", dest="json_args", help="引数を JSON オブジェクトで渡します。")
    p_call.add_argument(
        "--trace", action="store_true", help="[TOOL] トレース行を標準出力へ出します。"
    )

    p_serve = sub.add_parser("serve", help="MCP サーバとして待ち受けます（既定は stdio）。")
    p_serve.add_argument(
        "--port",
        type=int,
        default=-1,
        help="指定すると streamable HTTP (/mcp) で待ち受けます。負の値なら stdio。",
    )
    p_serve.add_argument("--host", default="0.0.0.0", help="HTTP の待ち受けアドレス（既定: 0.0.0.0）")
    return parser


def _cmd_list(as_json: bool) -> int:
    if as_json:
        print(json.dumps(tools.get_tool_specs(), ensure_ascii=False, indent=2))
        return 0
    for spec in tools.TOOL_SPECS:
        func = spec["function"]
        first_line = (func.get("description") or "").split(". ")[0].rstrip(".")
        print(f"{func['name']:<20} {first_line}")
    return 0


def _cmd_call(name: str, params: List[str], json_args: Optional[str]) -> int:
    args: Dict[str, Any] = {}
    if json_args:
        loaded = json.loads(json_args)
        if not isinstance(loaded, dict):
            print("--json must be a JSON object", file=sys.stderr)
            return 2
        args.update(loaded)
    args.update(_parse_kv_args(params))

    result = tools.call_tool(name, args)
    if result.is_error:
        print(result.text, file=sys.stderr)
        return 1
    print(result.text)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)

    settings = load_settings()
    configure_logging((ns.log_level or settings.log_level).upper())

    if ns.command == "serve":
        from .server import serve_http, serve_stdio

        if ns.port >= 0:
            asyncio.run(
                serve_http(settings, ns.host, ns.port, clock=ns.now, log_level=ns.log_level)
            )
        else:
            asyncio.run(serve_stdio(settings, clock=ns.now))
        return 0

    init_tools_callbacks(
        settings,
        clock=ns.now,
        emit_tool_trace=bool(getattr(ns, "trace", False)),
    )

    if ns.command == "list":
        return _cmd_list(ns.json)
    try:
        return _cmd_call(ns.tool, ns.params, ns.json_args)
    except (ValueError, argparse.ArgumentTypeError) as e:
        print(f"invalid arguments: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
