from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Ensure local src has priority over site-packages installations.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _reset_tool_callbacks():
    """各テスト後にツールへ注入した時計などを既定へ戻す。"""
    yield
    from passage.tools.context import ToolCallbacks, init_callbacks

    init_callbacks(ToolCallbacks())
