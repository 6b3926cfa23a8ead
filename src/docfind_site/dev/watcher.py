"""Bridge watchdog notifications for Markdown sources into the event loop."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Callable

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from docfind_site.utils.files import is_markdown_under

LOGGER = logging.getLogger(__name__)


class MarkdownChangeHandler(FileSystemEventHandler):
    """Forwards add/change/remove events for ``*.md`` files below ``root``.

    Watchdog calls this from its own thread; the callback is handed to the loop
    with ``call_soon_threadsafe``.
    """

    def __init__(
        self, root: Path, loop: asyncio.AbstractEventLoop, callback: Callable[[], None]
    ) -> None:
        super().__init__()
        self.root = root
        self.loop = loop
        self.callback = callback

    def is_relevant(self, event: FileSystemEvent) -> bool:
        if event.is_directory:
            return False
        paths = [event.src_path]
        dest = getattr(event, "dest_path", "")
        if dest:
            paths.append(dest)
        return any(is_markdown_under(Path(_as_str(path)), self.root) for path in paths)

    def _forward(self, event: FileSystemEvent) -> None:
        if not self.is_relevant(event):
            return
        LOGGER.debug("%s: %s", event.event_type, event.src_path)
        self.loop.call_soon_threadsafe(self.callback)

    on_created = _forward
    on_modified = _forward
    on_deleted = _forward
    on_moved = _forward


def _as_str(path: str | bytes) -> str:
    return path.decode() if isinstance(path, bytes) else path


class MarkdownWatcher:
    """Owns the watchdog observer for one docs directory."""

    def __init__(self, root: Path, callback: Callable[[], None]) -> None:
        self.root = root
        self.callback = callback
        self._observer: Observer | None = None

    def start(self, loop: asyncio.AbstractEventLoop) -> None:
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(MarkdownChangeHandler(self.root, loop, self.callback), str(self.root), recursive=True)
        observer.start()
        self._observer = observer
        LOGGER.debug("Watching %s", self.root)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None
