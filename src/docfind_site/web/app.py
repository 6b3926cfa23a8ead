"""FastAPI application for the development server."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from docfind_site import __version__
from docfind_site.plugin import DocfindPlugin

LOGGER = logging.getLogger(__name__)


def create_app(plugin: DocfindPlugin, *, watch: bool = True) -> FastAPI:
    """Build the dev app: index assets first, then the last built site."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if watch:
            await plugin.start_dev()
        try:
            yield
        finally:
            if watch:
                plugin.stop_dev()

    app = FastAPI(title="docfind dev server", version=__version__, lifespan=lifespan)
    plugin.configure_server(app)

    out_dir = plugin.options.out_dir
    if out_dir.is_dir():
        app.mount(plugin.options.base or "/", StaticFiles(directory=out_dir, html=True), name="site")
    else:
        LOGGER.warning("Output directory %s not found, only index assets are served", out_dir)
    return app
