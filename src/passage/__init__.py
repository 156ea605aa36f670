"""passage package.

Date/time tools for agents: parsing, UTC normalization, calendar arithmetic
and duration rendering, exposed as tool plugins (see ``passage.tools``).

Version is resolved from installed distribution metadata (pyproject.toml) when available.
"""

from __future__ import annotations


def __getattr__(name: str):
    # PEP 562: module attribute access hook
    if name != "__version__":
        raise AttributeError(name)

    try:
        from importlib.metadata import PackageNotFoundError, version

        return version("passage-of-time")
    except PackageNotFoundError:
        # ソースツリーから直接実行している場合
        return "unknown"


__all__ = ["__version__"]
