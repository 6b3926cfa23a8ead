"""Shared fixtures: a small docs tree and fake indexer executables."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable

import pytest

FAKE_INDEXER = """#!/bin/sh
echo "fake indexer $1 $2"
printf 'export default {}\\n' > "$2/docfind.js"
exit {code}
"""


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    docs = tmp_path / "docs"
    (docs / "guide").mkdir(parents=True)
    (docs / "index.md").write_text("# Home\n\nWelcome.\n", encoding="utf-8")
    (docs / "guide" / "index.md").write_text(
        "---\ncategory: guides\n---\n# Guide\n\nStart here.\n", encoding="utf-8"
    )
    (docs / "guide" / "setup.md").write_text(
        "---\ntitle: Setting up\n---\n\nInstall things.\n", encoding="utf-8"
    )
    (docs / "draft.md").write_text("---\nsearch: false\n---\n# Draft\n", encoding="utf-8")
    return docs


@pytest.fixture
def make_indexer(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, int], str]:
    """Create an executable on PATH that behaves like the docfind indexer."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def factory(name: str = "fake-docfind", code: int = 0) -> str:
        script = bin_dir / name
        script.write_text(FAKE_INDEXER.replace("{code}", str(code)), encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return name

    return factory
