"""Serving of dev index artifacts under ``<base>/docfind/``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable
from urllib.parse import unquote

from fastapi import FastAPI, Request, Response

LOGGER = logging.getLogger(__name__)

CONTENT_TYPES = {
    ".js": "text/javascript",
    ".mjs": "text/javascript",
    ".wasm": "application/wasm",
    ".json": "application/json",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CallNext = Callable[[Request], Awaitable[Response]]


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_asset(index_dir: Path, relative: str) -> Path | None:
    """Resolve a URL-decoded relative path inside ``index_dir``.

    Returns None when the result would escape the directory or the path is
    not representable on the filesystem (embedded NUL).
    """
    if "\x00" in relative:
        return None
    root = index_dir.resolve()
    try:
        candidate = (root / relative.lstrip("/")).resolve(strict=False)
    except (OSError, ValueError):
        return None
    if not candidate.is_relative_to(root):
        return None
    return candidate


def _request_path(request: Request) -> str:
    raw_path = request.scope.get("raw_path")
    if raw_path:
        return raw_path.decode("latin-1").split("?", 1)[0]
    return request.url.path


class DevAssetServer:
    """HTTP middleware answering requests for the most recent dev index."""

    def __init__(self, index_dir: Path, mount_prefix: str) -> None:
        self.index_dir = index_dir
        self.mount_prefix = mount_prefix

    def install(self, app: FastAPI) -> None:
        app.middleware("http")(self)

    def match(self, path: str) -> str | None:
        """Return the URL-decoded remainder when ``path`` is under the mount prefix."""
        if not path.startswith(self.mount_prefix):
            return None
        return unquote(path[len(self.mount_prefix) :])

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        relative = self.match(_request_path(request))
        if relative is None:
            return await call_next(request)

        asset = resolve_asset(self.index_dir, relative)
        if asset is None:
            LOGGER.warning("Blocked asset request outside index directory: %s", relative)
            return await call_next(request)

        try:
            body = await asyncio.to_thread(asset.read_bytes)
        except OSError:
            return Response(status_code=404)
        return Response(content=body, media_type=content_type_for(asset))
