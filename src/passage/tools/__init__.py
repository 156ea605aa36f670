# tools/__init__.py
"""Tool plugin registry and dispatcher.

Every module under tools/ that defines ``TOOL_SPEC`` and ``run_tool(args)``
is registered as a tool. Runners return the success text and raise
``TimeToolError`` on failure; ``call_tool`` turns that into an
error-flagged ``ToolResult``.
"""

import importlib.util
import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from datetime import datetime
from importlib import import_module, reload
from pkgutil import iter_modules
from typing import Any, Callable, Dict, List

from ..errors import TimeToolError
from .context import ToolCallbacks, get_callbacks, init_callbacks as _init_callbacks

logger = logging.getLogger(__name__)

# LLM / MCP クライアントへ渡す生のツール定義一覧
TOOL_SPECS: List[Dict[str, Any]] = []

# 実行用ランナー
_RUNNERS: Dict[str, Callable[[Dict[str, Any]], str]] = {}


@dataclass(frozen=True)
class ToolResult:
    text: str
    is_error: bool = False


# ------------------------------
# Tool trace (stdout only)
# ------------------------------

_SECRET_KEY_PATTERNS = [
    re.compile(pat, re.IGNORECASE)
    for pat in (
        r"pass(word)?",
        r"token",
        r"secret",
        r"api[_-]?key",
        r"authorization",
        r"credential",
    )
]


def _looks_like_secret_key(key: str) -> bool:
    return bool(key) and any(p.search(str(key)) for p in _SECRET_KEY_PATTERNS)


def _mask_args(args: Any) -> Any:
    """引数を再帰的に走査し、機密情報らしきキーの値をマスクする。"""
    if isinstance(args, dict):
        return {
            k: ("********" if _looks_like_secret_key(k) and v is not None else _mask_args(v))
            for k, v in args.items()
        }
    if isinstance(args, list):
        return [_mask_args(item) for item in args]
    if isinstance(args, str) and len(args) > 300:
        return args[:20] + "...(truncated)..." + args[-20:]
    return args


def _emit_tool_trace(name: str, args: Dict[str, Any]) -> None:
    """ツール実行前に『何をするか』を1行で標準出力へ出す。"""
    try:
        arg_str = json.dumps(
            _mask_args(args or {}),
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
            default=str,
        )
    except (TypeError, ValueError):
        arg_str = str(args)
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    print(f"[TOOL] {ts} name={name} args={arg_str}", flush=True)


def _trace_enabled(name: str) -> bool:
    if not get_callbacks().emit_tool_trace:
        return False
    spec = next(
        (s for s in TOOL_SPECS if s.get("function", {}).get("name") == name),
        None,
    )
    x_passage = (spec or {}).get("function", {}).get("x_passage", {})
    if isinstance(x_passage, dict) and x_passage.get("emit_tool_trace") is False:
        return False
    return True


# ------------------------------
# framework
# ------------------------------


def init_callbacks(callbacks: ToolCallbacks) -> None:
    """ホスト側から時計などの依存を注入する。"""
    _init_callbacks(callbacks)


def _register_tool_module(mod: Any) -> bool:
    """モジュールをツールとして登録する。"""
    spec = getattr(mod, "TOOL_SPEC", None)
    runner = getattr(mod, "run_tool", None)

    if not isinstance(spec, dict) or not callable(runner):
        return False

    tool_name = spec.get("function", {}).get("name")
    if not tool_name:
        return False

    # 既存の同名ツールがあれば削除して上書き
    for i, existing in enumerate(TOOL_SPECS):
        if existing.get("function", {}).get("name") == tool_name:
            TOOL_SPECS.pop(i)
            break

    TOOL_SPECS.append(spec)
    _RUNNERS[tool_name] = runner
    return True


def _load_plugins() -> None:
    """
    tools/ 以下のプラグインモジュールを走査して TOOL_SPECS / _RUNNERS を構築する。
    PASSAGE_EXTERNAL_TOOLS_DIR があれば、その直下の *.py も読み込む。
    """
    TOOL_SPECS.clear()
    _RUNNERS.clear()

    # 1. 内部ツールのロード
    pkg_dir = os.path.dirname(__file__)
    for m in iter_modules([pkg_dir]):
        if m.name.startswith("_") or m.name in ("context", "i18n_helper", "tool_args"):
            continue

        mod_name = f"{__name__}.{m.name}"
        try:
            if mod_name in sys.modules:
                mod = reload(sys.modules[mod_name])
            else:
                mod = import_module(mod_name)
            _register_tool_module(mod)
        except Exception as e:
            print(f"[tools] 内部プラグイン {mod_name} のロード失敗: {e!r}", file=sys.stderr)

    # 2. 外部ツールのロード (PASSAGE_EXTERNAL_TOOLS_DIR)
    ext_dir = os.environ.get("PASSAGE_EXTERNAL_TOOLS_DIR")
    if ext_dir and os.path.isdir(ext_dir):
        for entry in sorted(os.scandir(ext_dir), key=lambda e: e.name):
            if not (
                entry.is_file()
                and entry.name.endswith(".py")
                and not entry.name.startswith("_")
            ):
                continue
            mod_name = f"external_tool_{entry.name[:-3]}"
            try:
                spec = importlib.util.spec_from_file_location(mod_name, entry.path)
                if spec and spec.loader:
                    mod = importlib.util.module_from_spec(spec)
                    sys.modules[mod_name] = mod
                    spec.loader.exec_module(mod)
                    if _register_tool_module(mod):
                        print(f"[tools] 外部ツールをロードしました: {entry.name}", file=sys.stderr)
            except Exception as e:
                print(f"[tools] 外部プラグイン {entry.path} のロード失敗: {e!r}", file=sys.stderr)

    logger.info("loaded tools: %s", ", ".join(tool_names()))


def tool_names() -> List[str]:
    return [s["function"]["name"] for s in TOOL_SPECS]


def get_tool_specs() -> List[Dict[str, Any]]:
    """クライアント用のツール定義一覧（独自拡張フィールドは除去）。"""
    clean_specs: List[Dict[str, Any]] = []
    for spec in TOOL_SPECS:
        spec_copy = spec.copy()
        func_copy = dict(spec_copy.get("function", {}))
        func_copy.pop("system_prompt", None)
        func_copy.pop("x_passage", None)
        spec_copy["function"] = func_copy
        clean_specs.append(spec_copy)
    return clean_specs


def reload_plugins() -> None:
    _load_plugins()


def call_tool(name: str, args: Dict[str, Any]) -> ToolResult:
    """tool_call を実行し、成功/失敗をフラグ付きのテキストで返す。"""
    runner = _RUNNERS.get(name)
    if runner is None:
        return ToolResult(f"unknown tool: {name}", is_error=True)

    args = args or {}
    if _trace_enabled(name):
        _emit_tool_trace(name, args)

    try:
        return ToolResult(runner(args))
    except TimeToolError as e:
        logger.info("tool %s failed: %s", name, e)
        return ToolResult(str(e), is_error=True)
    except Exception as e:
        # 想定外の例外でもホストは落とさない
        logger.exception("tool %s raised unexpectedly", name)
        return ToolResult(f"[tool error] {name}: {type(e).__name__}: {e}", is_error=True)


def run_tool(name: str, args: Dict[str, Any]) -> str:
    """call_tool のテキスト部分だけを返す簡易版。"""
    return call_tool(name, args).text


# モジュール import 時に一度だけ読み込む
_load_plugins()
