from __future__ import annotations

from pathlib import Path

from setuptools import setup
from setuptools.command.build_py import build_py as _build_py


class build_py(_build_py):
    """Copy top-level README.md into package as passage/README.md during build.

    The repository source of truth is ./README.md.
    """

    def run(self):
        root = Path(__file__).resolve().parent
        src_readme = root / "README.md"
        dst_readme = root / "src" / "passage" / "README.md"

        if src_readme.exists():
            dst_readme.parent.mkdir(parents=True, exist_ok=True)
            dst_readme.write_text(
                src_readme.read_text(encoding="utf-8"), encoding="utf-8"
            )

        super().run()


setup(cmdclass={"build_py": build_py})
