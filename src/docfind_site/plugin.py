"""Host build tool hooks."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List

from fastapi import FastAPI

from docfind_site.config import BuildOptions, PluginOptions, resolve_options
from docfind_site.dev.coordinator import RebuildCoordinator
from docfind_site.dev.watcher import MarkdownWatcher
from docfind_site.index.builder import build_index
from docfind_site.models import Document
from docfind_site.web.assets import DevAssetServer

LOGGER = logging.getLogger(__name__)


class DocfindPlugin:
    """Hooks called by the host: dev server setup, dev session, and bundle close.

    Options are resolved once here and never again for this instance.
    """

    def __init__(self, options: PluginOptions | None = None, root: Path | None = None) -> None:
        self.options: BuildOptions = resolve_options(options, root)
        self.coordinator = RebuildCoordinator(self.rebuild_dev_index)
        self.watcher = MarkdownWatcher(self.options.docs_dir, self.coordinator.notify)
        self._bundled = False

    async def rebuild_dev_index(self) -> List[Document]:
        return await build_index(self.options, self.options.dev_index_dir)

    def configure_server(self, app: FastAPI) -> DevAssetServer:
        server = DevAssetServer(self.options.dev_index_dir, self.options.mount_prefix)
        server.install(app)
        return server

    async def start_dev(self) -> None:
        """Start watching and kick off the initial build."""
        self.watcher.start(asyncio.get_running_loop())
        self.coordinator.notify()

    def stop_dev(self) -> None:
        self.watcher.stop()
        self.coordinator.reset()

    async def close_bundle(self) -> List[Document]:
        """Build the production index into ``options.index_dir``; failures propagate."""
        if self._bundled:
            raise RuntimeError("close_bundle already ran for this plugin instance")
        self._bundled = True
        documents = await build_index(self.options, self.options.index_dir)
        LOGGER.info("docfind index written to %s (%d documents)", self.options.index_dir, len(documents))
        return documents
