"""Utility helpers for working with files."""

from __future__ import annotations

import fnmatch
from pathlib import Path
from typing import Iterable, Iterator

MARKDOWN_SUFFIX = ".md"


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    """Return True when a posix relative path matches one of the globs.

    Patterns are also tried against the path anchored with a leading slash so
    that ``**/name/**`` matches a top-level ``name/`` directory.
    """
    anchored = f"/{relative_path}"
    return any(
        fnmatch.fnmatchcase(relative_path, pattern) or fnmatch.fnmatchcase(anchored, pattern)
        for pattern in patterns
    )


def is_hidden(relative_path: str) -> bool:
    return any(part.startswith(".") for part in relative_path.split("/"))


def iter_markdown_paths(
    root: Path, include: Iterable[str], exclude: Iterable[str]
) -> Iterator[tuple[Path, str]]:
    """Yield ``(absolute_path, relative_posix_path)`` for files selected by the globs.

    Dotfiles and dot-directories are skipped. Order follows glob enumeration.
    """
    exclude = tuple(exclude)
    seen: set[str] = set()
    for pattern in include:
        for path in root.glob(pattern, case_sensitive=True):
            if not path.is_file():
                continue
            relative = path.relative_to(root).as_posix()
            if relative in seen or is_hidden(relative):
                continue
            if matches_any(relative, exclude):
                continue
            seen.add(relative)
            yield path, relative


def is_markdown_under(path: Path, root: Path) -> bool:
    """Return True when ``path`` is a Markdown file located below ``root``."""
    return path.suffix == MARKDOWN_SUFFIX and path.is_relative_to(root)
