from __future__ import annotations

import json
import os
from functools import lru_cache
from typing import Any, Callable, Dict, Optional


def _normalize_locale(locale: Optional[str]) -> str:
    """'ja_JP' / 'ja-JP' -> 'ja'; None or '' -> 'en'."""
    s = str(locale or "").strip().replace("-", "_")
    return s.split("_")[0].lower() or "en"


def get_locale() -> str:
    """Active locale for tool descriptions (PASSAGE_LOCALE)."""
    return _normalize_locale(os.environ.get("PASSAGE_LOCALE"))


@lru_cache(maxsize=64)
def _load_tool_dict(json_path: str) -> Dict[str, Any]:
    """Load ``{"en": {...}, "ja": {...}}`` beside a tool module.

    A missing or broken file yields {} so that tool import never fails.
    """
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def make_tool_translator(tool_py_file: str) -> Callable[..., str]:
    """Create a translator for a tool module.

    <tool>.py -> <tool>.json; lookup order is requested locale, then "en",
    then the default embedded in code.

    Usage:
      _ = make_tool_translator(__file__)
      desc = _("tool.description", default="Get the current date ...")
    """
    json_path = os.path.splitext(os.path.abspath(tool_py_file))[0] + ".json"

    def _(key: str, *, default: str) -> str:
        data = _load_tool_dict(json_path)
        for loc in (get_locale(), "en"):
            loc_map = data.get(loc)
            if isinstance(loc_map, dict):
                v = loc_map.get(key)
                if isinstance(v, str) and v:
                    return v
        return default

    return _
