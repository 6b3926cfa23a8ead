"""Mapping of source paths to public URLs."""

from __future__ import annotations

import re

_MULTI_SLASH = re.compile(r"/{2,}")


def resolve_base(base: str | None) -> str:
    """Normalize a base path to ``""`` or ``/segment`` without a trailing slash."""
    if base is None:
        return ""
    trimmed = base.strip().strip("/")
    if not trimmed:
        return ""
    return _MULTI_SLASH.sub("/", f"/{trimmed}")


def file_to_href(relative_path: str, base: str, clean_urls: bool) -> str:
    """Convert a docs-relative Markdown path into its public href.

    ``guide/index.md`` collapses onto ``guide``, which becomes ``/guide/`` with
    clean URLs and ``/guide.html`` without. The root ``index.md`` is always ``/``.
    """
    path = relative_path.replace("\\", "/").lstrip("/")
    if path.endswith(".md"):
        path = path[: -len(".md")]
    if path == "index":
        path = ""
    elif path.endswith("/index"):
        path = path[: -len("/index")]

    if not path:
        route = "/"
    elif clean_urls:
        route = f"/{path}/"
    else:
        route = f"/{path}.html"
    return _MULTI_SLASH.sub("/", f"{base}{route}")
